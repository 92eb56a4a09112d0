import ddt
import mock
import unittest

from datetime import datetime, timezone

from vehicle_checker.db.database import init_database
from vehicle_checker.models.stored_value import StoredValue
from vehicle_checker.storage.key_value_store import (DatabaseKeyValueStore,
    InMemoryKeyValueStore, KeyValueStore)


def _in_memory_store() -> KeyValueStore:
    return InMemoryKeyValueStore()


def _database_store() -> KeyValueStore:
    store = DatabaseKeyValueStore(connection=init_database('sqlite://'))

    for key in store.list_keys():
        store.remove(key)

    return store


@ddt.ddt
class TestKeyValueStore(unittest.TestCase):

    @ddt.data(_in_memory_store, _database_store)
    def test_get_missing_key(self, build_store):
        self.assertIsNone(build_store().get('vehicle_AB12CDE'))

    @ddt.data(_in_memory_store, _database_store)
    def test_set_and_get(self, build_store):
        store = build_store()

        store.set('vehicle_AB12CDE', '{"a": 1}')

        self.assertEqual(store.get('vehicle_AB12CDE'), '{"a": 1}')

    @ddt.data(_in_memory_store, _database_store)
    def test_set_overwrites(self, build_store):
        store = build_store()

        store.set('history', '[]')
        store.set('history', '[1]')

        self.assertEqual(store.get('history'), '[1]')
        self.assertEqual(store.list_keys(), ['history'])

    @ddt.data(_in_memory_store, _database_store)
    def test_remove(self, build_store):
        store = build_store()
        store.set('history', '[]')

        store.remove('history')
        store.remove('never_set')

        self.assertIsNone(store.get('history'))
        self.assertEqual(store.list_keys(), [])

    @ddt.data(_in_memory_store, _database_store)
    def test_list_keys(self, build_store):
        store = build_store()
        store.set('vehicle_AB12CDE', '{}')
        store.set('history', '[]')

        self.assertEqual(sorted(store.list_keys()), ['history', 'vehicle_AB12CDE'])

    def test_base_store_is_abstract(self):
        with self.assertRaises(NotImplementedError):
            KeyValueStore().get('history')

    def test_database_store_touches_updated_at_on_overwrite(self):
        store = _database_store()
        store.set('history', '[]')

        updated_at = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)

        with mock.patch('vehicle_checker.utils.time_utils.utc_now',
                        return_value=updated_at):
            store.set('history', '[1]')

        stored_value: StoredValue = store.session.get(StoredValue, 'history')

        self.assertEqual(stored_value.value, '[1]')
        self.assertEqual(stored_value.updated_at, updated_at)
