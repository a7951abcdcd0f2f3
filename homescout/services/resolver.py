import logging
from typing import Optional, Union

from ..core.config import settings
from ..core.metrics import PLACE_LOOKUPS
from ..core.utils import place_key, place_parts, split_place_key
from ..data.base import FactorsProvider, MetricsRecord, PlaceNotFound
from ..data.factors_client import factors_client

logger = logging.getLogger(__name__)

Resolution = Union[MetricsRecord, PlaceNotFound]

class PlaceResolver:
    """
    Maps a typed (city, region) pair to a MetricsRecord, or PlaceNotFound.
    Holds no mutable state of its own; safe to share across requests when
    the provider is read-only.
    """
    def __init__(self, provider: Optional[FactorsProvider] = None, normalize_keys: Optional[bool] = None):
        self.provider = provider if provider is not None else factors_client()
        self.normalize_keys = settings.NORMALIZE_PLACE_KEYS if normalize_keys is None else normalize_keys

    def key_for(self, city: str, region: str) -> str:
        return place_key(city, region, normalize=self.normalize_keys)

    def resolve(self, city: str, region: str) -> Resolution:
        city, region = place_parts(city, region, normalize=self.normalize_keys)
        return self._lookup(place_key(city, region), city, region)

    def resolve_key(self, key: str) -> Resolution:
        """Resolve a key that is already in "<city>, <region>" form, e.g. a quick pick."""
        city, region = split_place_key(key)
        return self._lookup(key, city, region)

    def _lookup(self, key: str, city: str, region: str) -> Resolution:
        record = self.provider.lookup(key, city, region)
        if record is None:
            PLACE_LOOKUPS.labels(outcome="not_found").inc()
            logger.info("place not found: %r", key)
            return PlaceNotFound(key)
        PLACE_LOOKUPS.labels(outcome="found").inc()
        logger.info("place resolved: %r", key)
        return record
