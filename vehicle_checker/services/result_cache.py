import json
import logging

from typing import Optional

from vehicle_checker import settings
from vehicle_checker.constants import L10N
from vehicle_checker.constants.storage_keys import (CACHE_EXPIRY_KEY,
    CACHE_KEY_PREFIX)
from vehicle_checker.models.cache_entry import CacheEntry
from vehicle_checker.models.vehicle_record import VehicleRecord
from vehicle_checker.services.constants.exceptions import (
    CacheCorruptionException, ValidationException)
from vehicle_checker.storage.key_value_store import KeyValueStore
from vehicle_checker.utils import time_utils

LOG = logging.getLogger(__name__)


class ResultCache:
    """Vehicle records keyed by canonical plate, with a time-to-live in days.

    Reads and writes are not transactional: two lookups racing on one plate
    both fetch, and the last set() wins.
    """

    def __init__(self,
                 store: KeyValueStore,
                 default_expiry_days: int = settings.CACHE_EXPIRY_DAYS):
        self.store = store
        self.default_expiry_days = settings.clamp_cache_expiry_days(
            default_expiry_days)

    def get(self, plate: str) -> Optional[VehicleRecord]:
        key: str = self._key_for(plate)
        raw_entry: Optional[str] = self.store.get(key)

        if raw_entry is None:
            LOG.debug(f'cache miss for {plate}')
            return None

        try:
            entry: CacheEntry = self._parse_entry(raw_entry)
        except CacheCorruptionException as exc:
            LOG.warning(f'purging unreadable cache entry for {plate}: {exc}')
            self.store.remove(key)
            return None

        if entry.is_expired(time_utils.now_millis()):
            LOG.debug(f'purging expired cache entry for {plate}')
            self.store.remove(key)
            return None

        LOG.debug(f'cache hit for {plate}')

        return entry.data

    def set(self, plate: str, record: VehicleRecord) -> None:
        entry = CacheEntry.create(data=record,
                                  stored_at=time_utils.now_millis(),
                                  ttl_days=self.expiry_days())

        self.store.set(self._key_for(plate), json.dumps(entry.to_dict()))

    def clear(self) -> None:
        for key in self._cache_keys():
            self.store.remove(key)

    def clear_expired(self) -> int:
        """Remove expired and unreadable entries. Returns how many were
        removed."""

        now: int = time_utils.now_millis()
        removed: int = 0

        for key in self._cache_keys():
            raw_entry: Optional[str] = self.store.get(key)

            if raw_entry is None:
                continue

            try:
                expired: bool = self._parse_entry(raw_entry).is_expired(now)
            except CacheCorruptionException:
                expired = True

            if expired:
                self.store.remove(key)
                removed += 1

        LOG.info(f'removed {removed} expired cache entries')

        return removed

    def expiry_days(self) -> int:
        stored_days: Optional[str] = self.store.get(CACHE_EXPIRY_KEY)

        try:
            return settings.clamp_cache_expiry_days(int(stored_days)) \
                if stored_days else self.default_expiry_days
        except ValueError:
            return self.default_expiry_days

    def set_expiry_days(self, days: int) -> None:
        if not (settings.MIN_CACHE_EXPIRY_DAYS <= days <= settings.MAX_CACHE_EXPIRY_DAYS):
            raise ValidationException(
                L10N.CACHE_EXPIRY_OUT_OF_RANGE_STRING.format(
                    settings.MIN_CACHE_EXPIRY_DAYS,
                    settings.MAX_CACHE_EXPIRY_DAYS))

        self.store.set(CACHE_EXPIRY_KEY, str(days))

    def _cache_keys(self):
        return [key for key in self.store.list_keys()
                if key.startswith(CACHE_KEY_PREFIX)]

    def _key_for(self, plate: str) -> str:
        return f'{CACHE_KEY_PREFIX}{plate}'

    def _parse_entry(self, raw_entry: str) -> CacheEntry:
        try:
            return CacheEntry.from_dict(json.loads(raw_entry))
        except (KeyError, TypeError, ValueError) as exc:
            raise CacheCorruptionException(str(exc)) from exc
