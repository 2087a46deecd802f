"""
In-memory session store.
"""

import copy
from typing import Optional

from huissier.domain.repositories.i_session_store import ISessionStore


class InMemorySessionStore(ISessionStore):
    """Session slot kept in process memory (tests, embedded clients)."""

    def __init__(self, record: Optional[dict] = None):
        self._record = copy.deepcopy(record) if record is not None else None

    def load(self) -> Optional[dict]:
        return copy.deepcopy(self._record) if self._record is not None else None

    def save(self, record: dict) -> None:
        self._record = copy.deepcopy(record)

    def clear(self) -> None:
        self._record = None
