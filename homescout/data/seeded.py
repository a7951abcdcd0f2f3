from types import MappingProxyType
from typing import Mapping, Optional, Tuple
from .base import FactorsProvider, MetricsRecord, DemographicShare

def _ages(under_18: float, young: float, middle: float, older: float) -> Tuple[DemographicShare, ...]:
    return (
        DemographicShare("Under 18", under_18),
        DemographicShare("18-34", young),
        DemographicShare("35-54", middle),
        DemographicShare("55+", older),
    )

# Insertion order doubles as the quick-pick order
SEEDED_PLACES: Mapping[str, MetricsRecord] = MappingProxyType({
    "Fullerton, CA": MetricsRecord(
        walkability=68, school_score=7.8, crime_index=42, median_income=98_000,
        price_growth_5y=6.2, demographics=_ages(19, 28, 26, 27),
    ),
    "Anaheim, CA": MetricsRecord(
        walkability=71, school_score=6.5, crime_index=55, median_income=82_000,
        price_growth_5y=5.1, demographics=_ages(22, 30, 25, 23),
    ),
    "Buena Park, CA": MetricsRecord(
        walkability=62, school_score=7.0, crime_index=48, median_income=90_000,
        price_growth_5y=5.5, demographics=_ages(21, 29, 27, 23),
    ),
})

class SeededFactors(FactorsProvider):
    """
    Read-only in-memory store. No I/O and no mutation, so one instance can
    serve any number of concurrent requests.
    """
    def __init__(self, places: Optional[Mapping[str, MetricsRecord]] = None):
        self._places = MappingProxyType(dict(places if places is not None else SEEDED_PLACES))

    def lookup(self, key: str, city: str, region: str) -> Optional[MetricsRecord]:
        return self._places.get(key)

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._places)
