"""Storage boundary for user-entered holdings, prices and injected cash."""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .config import StoreConfig

ASSETS_KEY = "assets"
INJECTED_CASH_KEY = "injected_cash"


class StoreError(Exception):
    """Raised when stored figures cannot be read or written."""


@dataclass
class StoredState:
    """Figures persisted between sessions.

    Each entry is a mapping with "code", "quantity" and "price" keys. Values
    are kept as entered; they are parsed when assets are built.
    """

    entries: list[dict[str, Any]] = field(default_factory=list)
    injected_cash: Any = None


class HoldingsStore(ABC):
    """Abstract loader/saver for persisted figures."""

    @abstractmethod
    def load(self) -> Optional[StoredState]:
        """Return the saved state, or None if nothing was saved yet."""
        pass

    @abstractmethod
    def save(self, state: StoredState) -> None:
        pass


class InMemoryStore(HoldingsStore):
    """Keeps the state in memory; useful for tests and one-off runs."""

    def __init__(self, state: Optional[StoredState] = None) -> None:
        self._state = state

    def load(self) -> Optional[StoredState]:
        return self._state

    def save(self, state: StoredState) -> None:
        self._state = state


class JsonFileStore(HoldingsStore):
    """Persists the state as a JSON document with assets and injected cash keys."""

    def __init__(self, path: Optional[str | Path] = None) -> None:
        self.path = Path(path or StoreConfig().DEFAULT_PATH).expanduser()

    def load(self) -> Optional[StoredState]:
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Failed to read {self.path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get(ASSETS_KEY, []), list):
            raise StoreError(f"Unexpected data layout in {self.path}")

        entries = [e for e in data.get(ASSETS_KEY, []) if isinstance(e, dict)]
        return StoredState(entries=entries, injected_cash=data.get(INJECTED_CASH_KEY))

    def save(self, state: StoredState) -> None:
        payload = {
            ASSETS_KEY: state.entries,
            INJECTED_CASH_KEY: state.injected_cash,
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8"
            )
        except (OSError, TypeError) as e:
            raise StoreError(f"Failed to write {self.path}: {e}") from e
