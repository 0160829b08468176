from __future__ import annotations

import json

from csv_browser.core.view_state import SortKey, ViewState
from csv_browser.services.preference_service import DEFAULT_PREFERENCES_KEY, PreferenceService
from csv_browser.services.storage import InMemoryKeyValueStore, KeyValueStore


class _BrokenStore(KeyValueStore):
    def get(self, key):
        raise OSError("storage offline")

    def set(self, key, value):
        raise OSError("storage offline")


def test_save_then_load():
    storage = InMemoryKeyValueStore()
    service = PreferenceService(storage)
    state = ViewState(page_size=100, column_visibility=[False, True], sort_key=SortKey(0, True))

    service.save(state)
    snap = service.load()

    assert json.loads(storage.get(DEFAULT_PREFERENCES_KEY))["page_size"] == 100
    assert snap is not None
    assert snap.page_size == 100
    assert snap.column_visibility == [False, True]
    assert snap.sort_key == SortKey(0, True)


def test_load_without_snapshot_returns_none():
    assert PreferenceService(InMemoryKeyValueStore()).load() is None


def test_corrupt_or_mismatched_snapshots_are_ignored():
    for raw in ["{oops", "[1, 2]", json.dumps({"schema_version": 7}), "null"]:
        service = PreferenceService(InMemoryKeyValueStore({DEFAULT_PREFERENCES_KEY: raw}))
        assert service.load() is None


def test_storage_failures_never_reach_caller():
    service = PreferenceService(_BrokenStore())

    service.save(ViewState())
    assert service.load() is None


def test_restore_clamps_to_current_header():
    storage = InMemoryKeyValueStore()
    PreferenceService(storage).save(
        ViewState(page_size=10, column_visibility=[False, False, False, True], sort_key=SortKey(3))
    )

    restored = PreferenceService(storage).restore(ViewState.for_columns(2), n_columns=2)

    assert restored.column_visibility == [False, False]
    assert restored.sort_key is None
    assert restored.page_size == 10


def test_custom_key():
    storage = InMemoryKeyValueStore()
    PreferenceService(storage, key="other").save(ViewState(page_size=50))

    assert PreferenceService(storage).load() is None
    assert PreferenceService(storage, key="other").load().page_size == 50
