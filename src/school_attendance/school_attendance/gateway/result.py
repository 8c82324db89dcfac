from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..core.enums import ErrorKind
from ..core.exceptions import DomainError


@dataclass(frozen=True)
class GatewayResult:
    """Either a success payload or a typed failure, never both."""

    ok: bool
    data: Any = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None
    retryable: bool = False

    @classmethod
    def success(cls, data: Any = None, *, message: Optional[str] = None) -> "GatewayResult":
        return cls(ok=True, data=data, message=message)

    @classmethod
    def failure(cls, exc: DomainError) -> "GatewayResult":
        return cls(ok=False, error=exc.kind, message=str(exc), retryable=bool(exc.retryable))

    def error_dict(self) -> dict:
        return {
            "success": False,
            "error": self.error.value if self.error else None,
            "message": self.message,
            "retryable": self.retryable,
        }
