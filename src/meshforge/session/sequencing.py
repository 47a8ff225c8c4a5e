"""Per-stream request tokens for discarding out-of-order responses."""

from __future__ import annotations

from meshforge.utils.logging import get_logger

logger = get_logger(__name__)


class RequestSequencer:
    """Monotonic request counter for one request stream.

    Every dispatched request takes a token from :meth:`issue`; when the
    response arrives, only the holder of the newest token may apply it.

    Usage:
        token = sequencer.issue()
        result = await backend_call()
        if sequencer.is_current(token):
            apply(result)
    """

    def __init__(self, stream: str) -> None:
        self.stream = stream
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest

    def discard_if_stale(self, token: int) -> bool:
        """Return True (and log) when *token* has been superseded."""
        if self.is_current(token):
            return False
        logger.debug(
            "stale_response_discarded",
            stream=self.stream,
            token=token,
            latest=self._latest,
        )
        return True
