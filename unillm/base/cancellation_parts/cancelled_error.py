"""Cancellation error type.

Defines the public ``CancelledError`` used to signal cooperative cancellation
of a stream. Kept isolated to satisfy one-class-per-file policy.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors_parts.client_error import ClientError
from ..errors_parts.error_code import ErrorCode


@dataclass
class CancelledError(ClientError):
    """Raised when an operation is cancelled cooperatively.

    This specialized error distinguishes cooperative cancellation from other
    failures so callers can suppress log noise and never retry it.
    """

    reason: str = "operation cancelled"
    code: ErrorCode = ErrorCode.CANCELLED

    def __str__(self) -> str:
        return f"cancelled: {self.reason}"


__all__ = ["CancelledError"]
