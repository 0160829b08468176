from __future__ import annotations

import json
import logging
from typing import Optional

from csv_browser.core.exceptions import PreferenceError
from csv_browser.core.preferences import PreferenceSnapshot
from csv_browser.core.view_state import ViewState
from csv_browser.services.storage import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_PREFERENCES_KEY = "csv_browser.preferences"


class PreferenceService:
    """
    Saves and restores the persisted subset of the ViewState.
    A broken stored snapshot is logged and treated as "no snapshot"; it never reaches the caller.
    """

    def __init__(self, storage: KeyValueStore, key: str = DEFAULT_PREFERENCES_KEY):
        self.storage = storage
        self.key = key

    def save(self, state: ViewState) -> None:
        snapshot = PreferenceSnapshot.from_view_state(state)
        try:
            self.storage.set(self.key, json.dumps(snapshot.to_dict()))
        except Exception:
            logger.exception("Failed to persist preferences", extra={"key": self.key})

    def load(self) -> Optional[PreferenceSnapshot]:
        try:
            raw = self.storage.get(self.key)
        except Exception:
            logger.exception("Failed to read preferences", extra={"key": self.key})
            return None
        if raw is None:
            return None

        try:
            try:
                data = json.loads(raw)
            except (TypeError, ValueError) as e:
                raise PreferenceError(f"Stored preferences are not valid JSON: {e}") from e
            return PreferenceSnapshot.from_dict(data)
        except PreferenceError as e:
            logger.warning(
                "Ignoring stored preferences",
                extra={"key": self.key, "error": str(e)},
            )
            return None

    def restore(self, state: ViewState, n_columns: int) -> ViewState:
        """Apply the stored snapshot (if any) onto ``state``."""
        snapshot = self.load()
        if snapshot is None:
            return state
        return snapshot.apply_to(state, n_columns)
