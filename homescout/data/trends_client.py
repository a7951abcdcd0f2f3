import logging
from typing import Optional
import httpx
from .base import TrendsClient
from .http_base import HttpAdapter, is_not_found
from .seeded import SEEDED_PLACES
from ..core.config import settings

logger = logging.getLogger(__name__)

class SeededTrends(TrendsClient):
    """Five-year growth read from the seeded table."""
    def growth_5y(self, key: str) -> Optional[float]:
        record = SEEDED_PLACES.get(key)
        return record.price_growth_5y if record else None

class HttpTrends(HttpAdapter, TrendsClient):
    """
    Price-trend service: GET /price-growth?place=<key> -> {"growth_5y": 6.2}
    """
    def growth_5y(self, key: str) -> Optional[float]:
        r = self._get("/price-growth", {"place": key})
        if is_not_found(r):
            logger.info("no price trend for %s", key)
            return None
        r.raise_for_status()
        value = r.json().get("growth_5y")
        return float(value) if value is not None else None

def trends_client(client: Optional[httpx.Client] = None) -> TrendsClient:
    if settings.TRENDS_PROVIDER == "http" and settings.TRENDS_BASE_URL:
        return HttpTrends(settings.TRENDS_BASE_URL, settings.HTTP_TIMEOUT_SECONDS, client)
    return SeededTrends()
