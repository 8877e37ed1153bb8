"""
Root of the client error hierarchy.

Every error the library raises to a caller derives from `ClientError` so a
single ``except ClientError`` covers the whole surface, and every instance
answers the one question callers care about: might a retry help?
"""
from __future__ import annotations


class ClientError(Exception):
    """Base class for all errors surfaced by the library.

    Subclasses are dataclasses carrying structured fields; ``retryable`` is a
    field on the transient kinds and ``False`` everywhere else.
    """

    retryable: bool = False

    def __str__(self) -> str:  # pragma: no cover - overridden by subclasses
        return self.__class__.__name__


__all__ = ["ClientError"]
