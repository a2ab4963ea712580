"""
Purpose: Caller-side session storage so a questionnaire can resume after a
restart. The engine never persists anything itself.

What is inside:
InMemorySessionStore with load/save/clear.
JsonSessionStore writing SessionState.to_dict() to a single file.

The stored shape must round-trip `asked` order and `answers` keys exactly;
selection depends on both.

Testing:
In-memory: simple state tests.
JSON: tmp_path fixture; round-trip and corrupt-file tests.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Optional, Union

from ..models import SessionState

logger = logging.getLogger(__name__)


class InMemorySessionStore:
    def __init__(self) -> None:
        self._state: Optional[SessionState] = None

    def load(self) -> Optional[SessionState]:
        return self._state.copy() if self._state is not None else None

    def save(self, state: SessionState) -> None:
        self._state = state.copy()

    def clear(self) -> None:
        self._state = None


class JsonSessionStore:
    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> Optional[SessionState]:
        if not self.path.exists():
            return None
        try:
            with self.path.open("r", encoding="utf-8") as f:
                return SessionState.from_dict(json.load(f))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return None

    def save(self, state: SessionState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(state.to_dict(), f, ensure_ascii=False, indent=2)
        tmp.replace(self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
