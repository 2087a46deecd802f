"""
Role value object - total order over access levels.
"""

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """
    Access role of an authorized wallet.

    Ordering is explicit (see ROLE_LEVELS), never derived from the
    string values:
        none(0) < viewer(1) < editor(2) < admin(3)
    """

    NONE = "none"
    VIEWER = "viewer"
    EDITOR = "editor"
    ADMIN = "admin"

    @property
    def level(self) -> int:
        """Numeric level of this role in the hierarchy."""
        return ROLE_LEVELS[self]

    @classmethod
    def parse(cls, value: Optional[str]) -> "Role":
        """
        Parse role from a stored or transported string.

        Unknown or missing values map to NONE so that a corrupted role
        never grants access.

        Args:
            value: Raw role string (e.g. "editor")

        Returns:
            Matching Role, or Role.NONE
        """
        if isinstance(value, Role):
            return value
        if not value:
            return cls.NONE
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.NONE

    @classmethod
    def assignable(cls) -> tuple["Role", ...]:
        """Roles an administrator may grant to a wallet."""
        return (cls.ADMIN, cls.EDITOR, cls.VIEWER)

    def __str__(self) -> str:
        return self.value


ROLE_LEVELS: dict[Role, int] = {
    Role.NONE: 0,
    Role.VIEWER: 1,
    Role.EDITOR: 2,
    Role.ADMIN: 3,
}
