"""ServiceResult and ServiceError: what the CLI gets back from services.

Engine calls raise (:class:`~blogctl.domain.errors.NotFoundError`,
:class:`OSError`...); the service layer turns those into a structured
result so every command renders success and failure the same way.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Error codes.
NOT_FOUND = "NOT_FOUND"
IO_ERROR = "IO_ERROR"
CONFIG_ERROR = "CONFIG_ERROR"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type of every service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"resolve"``).
        data: Operation-specific payload on success.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    error: ServiceError | None = None

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
