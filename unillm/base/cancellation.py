"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose stable cancellation constructs via the canonical
``unillm.base.cancellation`` import path while the concrete implementations
live under ``cancellation_parts`` for organization.

Notes
-----
- ``CancellationToken`` lets a caller stop a stream from another thread.
- ``CancelledError`` is raised to the stream consumer once the facade
  observes the request and has closed the connection.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
