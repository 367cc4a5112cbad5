"""
Error taxonomy shared by services, storage backends and the HTTP layer.

Services raise these; `skinroutine.main` maps them to status codes.
"""

from typing import Any, Dict, List, Optional


class SkinRoutineError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SkinRoutineError):
    """Missing or malformed input. Carries field-level detail."""

    def __init__(self, message: str = "Validation error", errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(errors=[{"field": field, "message": message}])

    @classmethod
    def from_pydantic(cls, exc, prefix: str = "") -> "ValidationError":
        """Flatten a pydantic ValidationError into {field, message} entries."""
        errors = []
        for err in exc.errors():
            loc = ".".join(str(part) for part in err.get("loc", ()))
            if prefix:
                loc = f"{prefix}.{loc}" if loc else prefix
            errors.append({"field": loc, "message": err.get("msg", "Invalid value")})
        return cls(errors=errors)


class NotFoundError(SkinRoutineError):
    """A referenced id does not exist."""


class ConflictError(SkinRoutineError):
    """A unique field (username, email, ingredient name) is already taken."""


class InternalError(SkinRoutineError):
    """Unexpected storage failure. The message is safe to log, not to return."""
