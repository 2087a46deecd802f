"""
Role gate - pure authorization decisions over the role hierarchy.
"""

from typing import Optional, Union

from huissier.domain.exceptions.auth import InsufficientPermissionsError
from huissier.domain.value_objects.role import Role

RoleLike = Union[Role, str, None]


def has_permission(actual: RoleLike, required: RoleLike) -> bool:
    """
    Check whether a role satisfies a requirement.

    Args:
        actual: Role held by the caller
        required: Minimum role needed

    Returns:
        True iff level(actual) >= level(required)
    """
    return Role.parse(actual).level >= Role.parse(required).level


def require_role(actual: RoleLike, required: RoleLike) -> None:
    """
    Enforce a minimum role.

    Args:
        actual: Role held by the caller
        required: Minimum role needed

    Raises:
        InsufficientPermissionsError: If actual is below required
    """
    if not has_permission(actual, required):
        raise InsufficientPermissionsError(
            required_role=Role.parse(required).value,
            actual_role=_role_name(actual),
        )


def _role_name(role: RoleLike) -> Optional[str]:
    return Role.parse(role).value if role is not None else None
