import logging
from typing import Any, Optional, Tuple
import httpx
from .base import FactorsProvider, InvalidMetric, MetricsRecord, DemographicShare, TrendsClient
from .http_base import HttpAdapter, is_not_found
from .seeded import SeededFactors
from .trends_client import trends_client
from ..core.cache import Cache
from ..core.config import settings

logger = logging.getLogger(__name__)

_MISSING = object()

def _dig(payload: Any, path: str) -> Any:
    node = payload
    for part in path.split("."):
        if not isinstance(node, dict) or part not in node:
            return _MISSING
        node = node[part]
    return node

def _required(payload: dict, path: str) -> Any:
    value = _dig(payload, path)
    if value is _MISSING or value is None:
        raise InvalidMetric(path, None, "missing from provider payload")
    return value

def _demographics(payload: dict) -> Tuple[DemographicShare, ...]:
    # race_ethnicity is preferred; age is the fallback breakdown
    for path in ("context.demographics.race_ethnicity", "context.demographics.age"):
        raw = _dig(payload, path)
        if raw is _MISSING or raw is None:
            continue
        if isinstance(raw, dict):
            return tuple(DemographicShare(str(g), s) for g, s in raw.items())
        if isinstance(raw, list):
            rows = []
            for row in raw:
                if not isinstance(row, dict) or "group" not in row or "share" not in row:
                    raise InvalidMetric(path, row, "expected {group, share}")
                rows.append(DemographicShare(str(row["group"]), row["share"]))
            return tuple(rows)
        raise InvalidMetric(path, raw, "expected a mapping or a list of {group, share}")
    return ()

def project_payload(payload: dict, price_growth_5y: float) -> MetricsRecord:
    """
    Project a factors-service payload onto a MetricsRecord.
    Raises InvalidMetric for missing or out-of-domain fields.
    """
    return MetricsRecord(
        walkability=_required(payload, "scores.walk.walkScore"),
        school_score=_required(payload, "scores.school.value"),
        crime_index=_required(payload, "scores.crime.index"),
        median_income=_required(payload, "context.income.median_household"),
        price_growth_5y=price_growth_5y,
        demographics=_demographics(payload),
    )

class HttpFactors(HttpAdapter, FactorsProvider):
    """
    Client for the external factors service:
      GET /factors?city=..&state=.. -> location/scores/context payload
    Growth comes from a separate trends source. Records are cached here,
    in the adapter, for CACHE_TTL_SECONDS.
    """
    def __init__(
        self,
        base_url: str,
        trends: TrendsClient,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
        cache: Optional[Cache] = None,
    ):
        super().__init__(base_url, timeout, client)
        self.trends = trends
        self.cache = cache if cache is not None else Cache()

    def lookup(self, key: str, city: str, region: str) -> Optional[MetricsRecord]:
        cache_key = f"factors:{key}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        r = self._get("/factors", {"city": city, "state": region})
        if is_not_found(r):
            logger.info("factors provider reported ADDRESS_NOT_FOUND for %s", key)
            return None
        r.raise_for_status()
        payload = r.json()

        growth = self.trends.growth_5y(key)
        if growth is None:
            # Without a trend the record would be partial; treat as unresolved
            logger.warning("factors found for %s but no price trend; treating as not found", key)
            return None

        record = project_payload(payload, growth)
        self.cache.set(cache_key, record)
        return record

def factors_client(client: Optional[httpx.Client] = None) -> FactorsProvider:
    """
    Factory picks seeded or http based on env flags.
    """
    if settings.FACTORS_PROVIDER == "http" and settings.FACTORS_BASE_URL:
        return HttpFactors(
            settings.FACTORS_BASE_URL,
            trends=trends_client(client),
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            client=client,
        )
    return SeededFactors()
