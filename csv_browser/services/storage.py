from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, MutableMapping, Optional


class KeyValueStore(ABC):
    """
    Abstract interface for small persisted string values such as browser localStorage.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """
    Dict-backed store.

    The Dash UI hands in the ``data`` dict of a ``dcc.Store(storage_type="local")``,
    so whatever is written here ends up in the browser's localStorage.
    """

    def __init__(self, data: Optional[MutableMapping[str, str]] = None):
        self.data: MutableMapping[str, str] = data if data is not None else {}

    def get(self, key: str) -> Optional[str]:
        value = self.data.get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def to_dict(self) -> Dict[str, str]:
        return dict(self.data)
