"""ServiceResult: what the CLI-facing operations return.

INVARIANT: services never raise for an expected failure (an unimportable
target, a malformed document, a rejected value); they return ``ok=False``
with one of the :class:`ErrorCode` values, and the CLI maps that to exit
status 1.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from rtcheck.core.errors import ContractViolation, format_path


class ErrorCode(StrEnum):
    """Failure codes a ServiceResult can carry."""

    INVALID_TARGET = "INVALID_TARGET"
    INVALID_DOCUMENT = "INVALID_DOCUMENT"
    CONTRACT_VIOLATION = "CONTRACT_VIOLATION"


class ServiceError(BaseModel):
    """Coded failure; ``detail`` holds machine-readable context."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``"check"``, ``"status"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues, printed to stderr by the CLI.
        error: Set exactly when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def success(cls, op: str, **data: Any) -> ServiceResult:
        return cls(ok=True, op=op, data=data)

    @classmethod
    def failure(cls, op: str, code: ErrorCode, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))

    @classmethod
    def from_violation(cls, op: str, exc: ContractViolation, **detail: Any) -> ServiceResult:
        """Failure describing *exc*: where in the value it happened and why."""
        return cls.failure(
            op,
            ErrorCode.CONTRACT_VIOLATION,
            str(exc),
            path=format_path(exc.path),
            reason=exc.reason,
            descriptor=repr(exc.descriptor),
            **detail,
        )
