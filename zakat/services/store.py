"""Key/value persistence collaborator.

The app only needs to remember the last entered snapshot and the current rate
table between requests. Anything durable (a file, a browser's local storage,
a database) can sit behind KeyValueStore; the in-process MemoryStore is the
default.
"""
import copy
import threading
from abc import ABC, abstractmethod
from typing import Any


class KeyValueStore(ABC):
    """Abstract base for snapshot persistence."""

    @abstractmethod
    def load(self, key: str, default: Any = None) -> Any:
        """Return the stored value for key, or default if nothing is stored."""
        pass

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Missing keys are ignored."""
        pass


class MemoryStore(KeyValueStore):
    """Thread-safe in-process store. Values are deep-copied in and out."""

    def __init__(self, initial: dict | None = None):
        self._data = copy.deepcopy(initial) if initial else {}
        self._lock = threading.Lock()

    def load(self, key: str, default: Any = None) -> Any:
        with self._lock:
            if key not in self._data:
                return default
            return copy.deepcopy(self._data[key])

    def save(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._data.keys())
