"""Pros/cons rule engine.

Each metric is checked against fixed bands, in a fixed order, and yields at
most one observation. Walkability, schools and crime always yield one;
income and growth have a neutral middle band that yields nothing.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from ..data.base import MetricsRecord

NO_POSITIVES_MESSAGE = "No strong positives detected yet."
NO_NEGATIVES_MESSAGE = "No major concerns flagged."

class Polarity(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"

@dataclass(frozen=True)
class Observation:
    text: str
    polarity: Polarity

    def __str__(self) -> str:
        return self.text

@dataclass(frozen=True)
class Insights:
    positives: Tuple[Observation, ...]
    negatives: Tuple[Observation, ...]

    @property
    def pros(self) -> List[str]:
        return [o.text for o in self.positives]

    @property
    def cons(self) -> List[str]:
        return [o.text for o in self.negatives]

def _pro(text: str) -> Observation:
    return Observation(text, Polarity.POSITIVE)

def _con(text: str) -> Observation:
    return Observation(text, Polarity.NEGATIVE)

HIGH_WALKABILITY = _pro("High walkability for errands")
DECENT_WALKABILITY = _pro("Decent walkability in core areas")
CAR_DEPENDENT = _con("Car-dependent neighborhoods")

STRONG_SCHOOLS = _pro("Strong school ratings (8/10+)")
SOLID_SCHOOLS = _pro("Solid school options (~7/10)")
WEAK_SCHOOLS = _con("Below-average school ratings")

LOW_CRIME = _pro("Lower-than-average crime index")
MODERATE_CRIME = _pro("Moderate crime index")
HIGH_CRIME = _con("Higher crime index vs peers")

HIGH_INCOME = _pro("High median household income")
LOW_INCOME = _con("Lower median household income")

HEALTHY_GROWTH = _pro("Healthy 5-year home price growth")
SLOW_GROWTH = _con("Slower recent price growth")

def walkability_rule(r: MetricsRecord) -> Optional[Observation]:
    if r.walkability >= 70:
        return HIGH_WALKABILITY
    if r.walkability >= 60:
        return DECENT_WALKABILITY
    return CAR_DEPENDENT

def schools_rule(r: MetricsRecord) -> Optional[Observation]:
    if r.school_score >= 8:
        return STRONG_SCHOOLS
    if r.school_score >= 7:
        return SOLID_SCHOOLS
    return WEAK_SCHOOLS

def crime_rule(r: MetricsRecord) -> Optional[Observation]:
    if r.crime_index <= 40:
        return LOW_CRIME
    if r.crime_index <= 50:
        return MODERATE_CRIME
    return HIGH_CRIME

def income_rule(r: MetricsRecord) -> Optional[Observation]:
    if r.median_income >= 100_000:
        return HIGH_INCOME
    if r.median_income < 85_000:
        return LOW_INCOME
    return None

def growth_rule(r: MetricsRecord) -> Optional[Observation]:
    if r.price_growth_5y >= 7:
        return HEALTHY_GROWTH
    if r.price_growth_5y < 5:
        return SLOW_GROWTH
    return None

# Evaluation order is part of the output contract
RULES: Tuple[Callable[[MetricsRecord], Optional[Observation]], ...] = (
    walkability_rule,
    schools_rule,
    crime_rule,
    income_rule,
    growth_rule,
)

def evaluate(record: MetricsRecord) -> Insights:
    positives: List[Observation] = []
    negatives: List[Observation] = []
    for rule in RULES:
        obs = rule(record)
        if obs is None:
            continue
        if obs.polarity is Polarity.POSITIVE:
            positives.append(obs)
        else:
            negatives.append(obs)
    return Insights(positives=tuple(positives), negatives=tuple(negatives))
