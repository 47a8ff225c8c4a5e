"""Exception hierarchy for backend command channel failures."""

from __future__ import annotations


class MeshForgeError(Exception):
    """Base exception for all MeshForge errors."""

    def __init__(self, message: str, operation: str | None = None) -> None:
        self.operation = operation
        super().__init__(message)


class BackendUnavailableError(MeshForgeError):
    """The host environment does not provide the backend command channel."""


class RequestFailedError(MeshForgeError):
    """The request reached the backend but the backend returned an error."""


class TimedOutError(RequestFailedError):
    """The backend did not answer within the configured timeout."""


def describe_error(exc: BaseException) -> str:
    """Convert a failure into the display string stored on session entities.

    Args:
        exc: Exception caught at the backend call site.

    Returns:
        ``str(exc)``, or the exception class name when the message is empty.
    """
    text = str(exc)
    return text if text else type(exc).__name__
