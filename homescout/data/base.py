import math
from typing import Protocol, Optional, Tuple
from dataclasses import dataclass, field

# ----- Errors -----

class InvalidMetric(ValueError):
    """A metrics field is outside its documented domain."""
    def __init__(self, field_name: str, value, reason: str):
        self.field_name = field_name
        self.value = value
        self.reason = reason
        super().__init__(f"{field_name}={value!r}: {reason}")

# ----- Data shapes (thin & explicit) -----

@dataclass(frozen=True)
class DemographicShare:
    group: str        # e.g., "Under 18", "18-34"
    share: float      # percent; display only

@dataclass(frozen=True)
class MetricsRecord:
    """
    Normalized quality indicators for one place. Built whole or not at all:
    every field is validated here so rule bands never see a value they
    were not written for.
    """
    walkability: int          # 0..100, higher is better
    school_score: float       # 0..10, higher is better
    crime_index: int          # 0..100, lower is better
    median_income: int        # USD, >= 0
    price_growth_5y: float    # % over 5 years, signed
    demographics: Tuple[DemographicShare, ...] = field(default_factory=tuple)

    def __post_init__(self):
        _check_int("walkability", self.walkability, 0, 100)
        _check_real("school_score", self.school_score, 0, 10)
        _check_int("crime_index", self.crime_index, 0, 100)
        _check_int("median_income", self.median_income, 0, None)
        _check_real("price_growth_5y", self.price_growth_5y, None, None)

        rows = tuple(self.demographics)
        seen = set()
        for row in rows:
            if not isinstance(row, DemographicShare):
                raise InvalidMetric("demographics", row, "expected DemographicShare")
            if row.group in seen:
                raise InvalidMetric("demographics", row.group, "duplicate group")
            seen.add(row.group)
            _check_real("demographics", row.share, 0, None)
        # Lists are accepted on input but stored as a tuple
        object.__setattr__(self, "demographics", rows)

@dataclass(frozen=True)
class PlaceNotFound:
    """Resolution miss for ``key``. Returned, never raised."""
    key: str

def _check_int(name: str, value, low: Optional[int], high: Optional[int]) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidMetric(name, value, "expected an integer")
    _check_range(name, value, low, high)

def _check_real(name: str, value, low: Optional[float], high: Optional[float]) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidMetric(name, value, "expected a number")
    if not math.isfinite(value):
        raise InvalidMetric(name, value, "must be finite")
    _check_range(name, value, low, high)

def _check_range(name: str, value, low, high) -> None:
    if low is not None and value < low:
        raise InvalidMetric(name, value, f"below minimum {low}")
    if high is not None and value > high:
        raise InvalidMetric(name, value, f"above maximum {high}")

# ----- Protocols (interfaces) -----

class FactorsProvider(Protocol):
    def lookup(self, key: str, city: str, region: str) -> Optional[MetricsRecord]: ...

class TrendsClient(Protocol):
    def growth_5y(self, key: str) -> Optional[float]: ...
