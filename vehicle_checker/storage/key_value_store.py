import logging

from typing import Dict, List, Optional

from vehicle_checker.db.database import DatabaseConnection, init_database
from vehicle_checker.models.stored_value import StoredValue
from vehicle_checker.utils import time_utils

LOG = logging.getLogger(__name__)


class KeyValueStore:
    """String key/value persistence consumed by the result cache and the
    history log."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError(
            'Subclassed store must implement this method.')

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError(
            'Subclassed store must implement this method.')

    def remove(self, key: str) -> None:
        raise NotImplementedError(
            'Subclassed store must implement this method.')

    def list_keys(self) -> List[str]:
        raise NotImplementedError(
            'Subclassed store must implement this method.')


class InMemoryKeyValueStore(KeyValueStore):

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def list_keys(self) -> List[str]:
        return list(self._values)


class DatabaseKeyValueStore(KeyValueStore):
    """Key/value store persisted to a SQL database through SQLAlchemy."""

    def __init__(self, connection: Optional[DatabaseConnection] = None):
        self.session = (connection or init_database()).session

    def get(self, key: str) -> Optional[str]:
        stored_value: Optional[StoredValue] = self.session.get(StoredValue, key)

        return stored_value.value if stored_value else None

    def set(self, key: str, value: str) -> None:
        stored_value: Optional[StoredValue] = self.session.get(StoredValue, key)

        if stored_value:
            stored_value.value = value
            stored_value.updated_at = time_utils.utc_now()
        else:
            self.session.add(StoredValue(key=key, value=value))

        self.session.commit()

        LOG.debug(f'Stored value for key {key}')

    def remove(self, key: str) -> None:
        stored_value: Optional[StoredValue] = self.session.get(StoredValue, key)

        if stored_value:
            self.session.delete(stored_value)
            self.session.commit()

            LOG.debug(f'Removed value for key {key}')

    def list_keys(self) -> List[str]:
        return [key for (key,) in self.session.query(StoredValue.key).all()]
