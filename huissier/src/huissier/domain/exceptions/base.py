"""
Base domain exceptions.

Every error carries a stable machine-readable ``code``; HTTP status is
decided by the presentation layer from that code.
"""

from typing import Optional


class HuissierException(Exception):
    """Root of all Huissier domain errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Error body returned to API clients."""
        return {"error": self.code, "message": self.message}


class EntityNotFoundError(HuissierException):
    """Lookup by identifier found nothing."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            f"{entity_type} {entity_id} not found", code="ENTITY_NOT_FOUND"
        )


class DuplicateEntityError(HuissierException):
    """Create would violate a uniqueness rule."""

    def __init__(self, entity_type: str, identifier: str):
        self.entity_type = entity_type
        super().__init__(
            f"{entity_type} with {identifier} already exists",
            code="DUPLICATE_ENTITY",
        )


class ValidationError(HuissierException):
    """Input rejected before reaching the store."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(
            f"Validation failed for {field}: {reason}", code="VALIDATION_ERROR"
        )

    def to_dict(self) -> dict:
        return {**super().to_dict(), "field": self.field}
