"""Consultation result DTO.

Every host-facing consultation operation returns a ConsultationResult:
a tagged success/failure value. Success carries a boolean acknowledgment
or the requested read value; failure carries exactly one error code from
the consultation error taxonomy.

Architecture Note:
Application layer defines its own DTOs. API layer converts these
to Pydantic response models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from src.domain.errors.consultation import ConsultationError, ConsultationErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class ConsultationResult(Generic[T]):
    """Tagged success/failure result of a consultation operation.

    Attributes:
        ok: True on success.
        value: Acknowledgment or read value on success, None on failure.
        error: Error code on failure, None on success.
        ledger_code: Numeric ledger code on failure, None on success.
        detail: Human-readable failure detail, None on success.
        problem: RFC 7807 problem body of the error, including its context
            fields, None on success.
    """

    ok: bool
    value: T | None = None
    error: ConsultationErrorCode | None = None
    ledger_code: int | None = None
    detail: str | None = None
    problem: dict[str, Any] | None = field(default=None, compare=False)

    @classmethod
    def success(cls, value: T) -> ConsultationResult[T]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: ConsultationError) -> ConsultationResult[T]:
        return cls(
            ok=False,
            error=error.code,
            ledger_code=error.ledger_code,
            detail=str(error),
            problem=error.to_rfc7807_dict(),
        )

    def unwrap(self) -> T:
        """Return the success value.

        Raises:
            ValueError: If the result is a failure.
        """
        if not self.ok:
            raise ValueError(f"Cannot unwrap failed result: {self.error}")
        return self.value  # type: ignore[return-value]

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "value": self.value}
        return {
            "ok": False,
            "error": self.error.value if self.error else None,
            "ledger_code": self.ledger_code,
            "detail": self.detail,
        }
