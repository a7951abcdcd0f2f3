from typing import Optional, Union

from ..core.utils import dollars
from ..data.base import MetricsRecord, PlaceNotFound

UNRESOLVED_PLACE_MESSAGE = "Pick a city first."
CLOSING_PROMPT = "Share your budget + horizon for a tailored resale view."

def _walk_verdict(v: int) -> str:
    return "good for errands" if v >= 70 else "decent" if v >= 60 else "car-dependent"

def _school_verdict(v: float) -> str:
    return "strong" if v >= 8 else "solid" if v >= 7 else "mixed"

def _crime_verdict(v: int) -> str:
    return "lower than average" if v <= 40 else "moderate" if v <= 50 else "higher than peers"

def _income_verdict(v: int) -> str:
    return "high" if v >= 100_000 else "middle-range" if v >= 85_000 else "lower"

def _growth_verdict(v: float) -> str:
    return "healthy" if v >= 7 else "steady" if v >= 5 else "slower"

def compose(
    place_label: str,
    record: Union[MetricsRecord, PlaceNotFound, None],
    question: Optional[str] = None,
) -> str:
    """
    Build the quick-take report for ``place_label``.

    ``question`` is accepted so callers can pass the user's text through,
    but the report depends only on the record. Without a record the fixed
    pick-a-place message is returned.
    """
    if not isinstance(record, MetricsRecord):
        return UNRESOLVED_PLACE_MESSAGE
    r = record
    return "\n".join([
        f"Quick take on {place_label}:",
        f"• Walkability {r.walkability}/100 — {_walk_verdict(r.walkability)}.",
        f"• Schools {r.school_score:.1f}/10 — {_school_verdict(r.school_score)}.",
        f"• Crime index {r.crime_index} (lower is safer) — {_crime_verdict(r.crime_index)}.",
        f"• Median income {dollars(r.median_income)} — {_income_verdict(r.median_income)}.",
        f"• 5-year price growth {r.price_growth_5y:g}% — {_growth_verdict(r.price_growth_5y)}.",
        CLOSING_PROMPT,
    ])
