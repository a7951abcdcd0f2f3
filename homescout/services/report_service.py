import json
import logging
from dataclasses import asdict

from .insights import evaluate, NO_POSITIVES_MESSAGE, NO_NEGATIVES_MESSAGE
from .narrative import compose
from .resolver import PlaceResolver
from ..core.config import settings
from ..core.utils import weak_etag
from ..data.base import MetricsRecord, PlaceNotFound

logger = logging.getLogger(__name__)

class PlaceReportService:
    """
    Orchestrates:
      (city, state) → resolve → metrics record → pros/cons + quick take
    and builds the JSON payload plus a weak ETag for conditional GETs.
    """
    def __init__(self, resolver: PlaceResolver | None = None):
        self.resolver = resolver if resolver is not None else PlaceResolver()

    def quick_picks(self) -> list[str]:
        keys = getattr(self.resolver.provider, "keys", None)
        return list(keys()) if callable(keys) else []

    def report(self, city: str, state: str) -> tuple[dict | None, str, str | None]:
        """
        Returns (payload, place_key, etag). payload and etag are None when
        the place is unknown.
        """
        key = self.resolver.key_for(city, state)
        record = self.resolver.resolve(city, state)
        if not isinstance(record, MetricsRecord):
            return None, key, None

        insights = evaluate(record)
        payload = {
            "place": key,
            "currency": settings.DEFAULT_CURRENCY,
            "metrics": asdict(record),
            "pros": insights.pros,
            "cons": insights.cons,
            "pros_placeholder": None if insights.positives else NO_POSITIVES_MESSAGE,
            "cons_placeholder": None if insights.negatives else NO_NEGATIVES_MESSAGE,
            "narrative": compose(key, record),
        }
        etag = weak_etag(json.dumps(payload, separators=(',',':'), sort_keys=True).encode("utf-8"))
        return payload, key, etag

    def answer(self, city: str, state: str, question: str) -> tuple[str, str]:
        """Stateless assistant turn: returns (place_key, reply text)."""
        key = self.resolver.key_for(city, state)
        record = self.resolver.resolve(city, state)
        reply = compose(key, record, question)
        if isinstance(record, PlaceNotFound):
            logger.info("assistant asked about unresolved place %r", key)
        return key, reply
