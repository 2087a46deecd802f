"""
Client-local session store interface.
"""

from abc import ABC, abstractmethod
from typing import Optional


class ISessionStore(ABC):
    """
    Persistent slot holding at most one session record.

    Records are overwritten wholesale on re-authentication and deleted
    wholesale on logout, disconnect or invalidation.
    """

    @abstractmethod
    def load(self) -> Optional[dict]:
        """
        Load the stored session record.

        Returns:
            Raw record, or None if the slot is empty or unreadable
        """

    @abstractmethod
    def save(self, record: dict) -> None:
        """
        Replace the stored session record.

        Args:
            record: Session record (see Session.to_record)
        """

    @abstractmethod
    def clear(self) -> None:
        """Delete the stored session record, if any."""
