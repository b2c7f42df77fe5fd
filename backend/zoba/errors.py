"""Domain errors raised by the store, the assistant gateway and the renderers.

Route handlers translate these into HTTP responses; nothing below the API
layer knows about status codes.
"""

from typing import Any


class ZobaError(Exception):
    """Base class for ZOBA domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConflictError(ZobaError):
    """A diagram with identical code already exists."""

    def __init__(self, message: str = "A diagram with this content already exists", existing_id: str | None = None):
        details = {"existing_id": existing_id} if existing_id else {}
        super().__init__(message, details)


class NotFoundError(ZobaError):
    """Referenced record does not exist."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(
            f"{kind} not found",
            {"kind": kind, "record_id": record_id},
        )


class GenerationFailed(ZobaError):
    """The completion call failed or returned an unusable reply."""

    def __init__(self, message: str = "Failed to generate diagram", cause: Exception | None = None):
        details = {"cause": type(cause).__name__} if cause else {}
        super().__init__(message, details)


class FixAttemptsExceeded(ZobaError):
    """The caller asked for another syntax fix past the configured bound."""

    def __init__(self, attempt: int, limit: int):
        super().__init__(
            f"Syntax fix attempt {attempt} exceeds the limit of {limit}. Edit the diagram or ask a new question.",
            {"attempt": attempt, "limit": limit},
        )


class RenderUnavailable(ZobaError):
    """The remote renderer could not be reached."""

    def __init__(self, error: str):
        super().__init__(f"Diagram renderer unavailable: {error}", {"error": error})
