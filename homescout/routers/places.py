from functools import lru_cache

from fastapi import APIRouter, Depends, Header, HTTPException, Response, Query
from ..schemas import PlaceReport, QuickPicks, AskRequest, AskResponse
from ..services.conversation import Speaker
from ..services.narrative import UNRESOLVED_PLACE_MESSAGE
from ..services.report_service import PlaceReportService

router = APIRouter()

@lru_cache(maxsize=1)
def service_dep() -> PlaceReportService:
    # One shared instance; the seeded provider is read-only
    return PlaceReportService()

@router.get("/places", response_model=QuickPicks, tags=["places"])
def list_places(svc: PlaceReportService = Depends(service_dep)):
    return {"places": svc.quick_picks()}

@router.get("/places/report", response_model=PlaceReport, tags=["places"])
def get_report(
    response: Response,
    city: str = Query(..., min_length=1),
    state: str = Query(..., min_length=1),
    if_none_match: str | None = Header(default=None, alias="if-none-match"),
    svc: PlaceReportService = Depends(service_dep),
):
    payload, key, etag = svc.report(city, state)
    if payload is None:
        raise HTTPException(status_code=404, detail={"place": key, "message": UNRESOLVED_PLACE_MESSAGE})
    response.headers["ETag"] = etag
    if if_none_match and if_none_match == etag:
        return Response(status_code=304, headers={"ETag": etag})
    payload["etag"] = etag
    return payload

@router.post("/assistant/ask", response_model=AskResponse, tags=["assistant"])
def ask(body: AskRequest, svc: PlaceReportService = Depends(service_dep)):
    question = body.question.strip()
    if not question:
        raise HTTPException(status_code=400, detail="question is required")
    key, reply = svc.answer(body.city, body.state, question)
    return {
        "place": key,
        "messages": [
            {"speaker": Speaker.USER.value, "text": question},
            {"speaker": Speaker.ASSISTANT.value, "text": reply},
        ],
    }
