"""Loaded job file state and the recent-files history."""

from __future__ import annotations

import asyncio
import inspect
import math
from collections.abc import Awaitable, Callable, Iterator
from pathlib import Path

from meshforge.exceptions import describe_error
from meshforge.models.job import (
    FileBounds,
    FileInfoView,
    JobFile,
    JobState,
    RecentFile,
)
from meshforge.session.observable import Observable
from meshforge.session.sequencing import RequestSequencer
from meshforge.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_HISTORY_CAPACITY = 10
_READ_CHUNK = 64 * 1024

BoundsResult = FileBounds | None | Awaitable[FileBounds | None]
BoundsProvider = Callable[[str], BoundsResult]
MetadataReader = Callable[[str], tuple[str, str]]


def no_bounds(path: str) -> FileBounds | None:
    """Default bounds provider: no geometry parser attached."""
    return None


def describe_size(size_bytes: int, line_count: int) -> str:
    """Format a file size as ``"<n> KB (<lines> lines)"``."""
    kb = math.ceil(size_bytes / 1024) if size_bytes > 0 else 0
    return f"{kb} KB ({line_count} lines)"


def read_file_metadata(path: str) -> tuple[str, str]:
    """Return ``(file name, size description)`` for *path*.

    Blocking; run via ``asyncio.to_thread()``.

    Raises:
        OSError: If the file cannot be read.
    """
    p = Path(path)
    size = p.stat().st_size
    lines = 0
    last = b""
    with p.open("rb") as fh:
        for chunk in iter(lambda: fh.read(_READ_CHUNK), b""):
            lines += chunk.count(b"\n")
            last = chunk[-1:]
    if last and last != b"\n":
        lines += 1
    return p.name, describe_size(size, lines)


class RecentFilesHistory:
    """Ordered, path-unique list of recently loaded files.

    Re-adding a known path changes nothing (no reorder). When the capacity
    is exceeded the oldest entry is evicted.
    """

    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"History capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._entries: list[RecentFile] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def entries(self) -> tuple[RecentFile, ...]:
        return tuple(self._entries)

    def add(self, name: str, path: str) -> bool:
        """Append ``{name, path}`` unless *path* is already present.

        Returns:
            True if an entry was added.
        """
        if path in self:
            return False
        self._entries.append(RecentFile(name=name, path=path))
        if len(self._entries) > self._capacity:
            evicted = self._entries[: len(self._entries) - self._capacity]
            self._entries = self._entries[-self._capacity:]
            logger.debug("history_evicted", paths=[e.path for e in evicted])
        return True

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, path: object) -> bool:
        return any(e.path == path for e in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RecentFile]:
        return iter(list(self._entries))


class JobFileModel(Observable):
    """State machine over the loaded job file.

    ``EMPTY --load/open--> LOADED``, ``LOADED --clear--> EMPTY``,
    ``LOADED --reload--> LOADED`` (no-op from ``EMPTY``), and
    ``select_previous`` loads a path from history from either state.
    Every successful load records the file in :attr:`history`; ``clear``
    leaves the history alone.
    """

    def __init__(
        self,
        bounds_provider: BoundsProvider = no_bounds,
        history: RecentFilesHistory | None = None,
        metadata_reader: MetadataReader = read_file_metadata,
    ) -> None:
        super().__init__()
        self._bounds_provider = bounds_provider
        self._metadata_reader = metadata_reader
        self._history = history if history is not None else RecentFilesHistory()
        self._sequencer = RequestSequencer("job")
        self._file: JobFile | None = None
        self._selected_path = ""
        self._view_mode = FileInfoView.SIZE
        self._error: str | None = None

    # --- Read access ---

    @property
    def state(self) -> JobState:
        return JobState.LOADED if self._file is not None else JobState.EMPTY

    @property
    def file(self) -> JobFile | None:
        return self._file

    @property
    def name(self) -> str:
        return self._file.name if self._file else ""

    @property
    def path(self) -> str:
        return self._file.path if self._file else ""

    @property
    def size_description(self) -> str:
        return self._file.size_description if self._file else ""

    @property
    def bounds(self) -> FileBounds | None:
        return self._file.bounds if self._file else None

    @property
    def selected_path(self) -> str:
        return self._selected_path

    @property
    def view_mode(self) -> FileInfoView:
        return self._view_mode

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def history(self) -> RecentFilesHistory:
        return self._history

    def refresh_history(self) -> list[RecentFile]:
        """Snapshot of the recent-files history, oldest first."""
        return list(self._history.entries)

    # --- Transitions ---

    def load(
        self,
        name: str,
        path: str,
        size_description: str = "",
        bounds: FileBounds | None = None,
    ) -> JobFile:
        """Make ``{name, path}`` the loaded file and record it in history."""
        self._sequencer.issue()
        job = JobFile(name=name, path=path, size_description=size_description, bounds=bounds)
        self._apply(job, error=None)
        return job

    async def open(self, path: str) -> JobFile | None:
        """Read metadata and bounds for *path*, then load it.

        If the metadata cannot be read the state is left unchanged and the
        error is stored. If only the bounds provider fails, the file is
        loaded without bounds and the error is stored.

        Returns:
            The loaded file, or the current file when this open failed or
            was overtaken by a newer one.
        """
        token = self._sequencer.issue()
        try:
            name, size_description = await asyncio.to_thread(self._metadata_reader, path)
        except Exception as exc:
            if self._sequencer.discard_if_stale(token):
                return self._file
            self._error = describe_error(exc)
            logger.warning("job_open_failed", path=path, error=self._error)
            self._notify()
            return self._file

        bounds: FileBounds | None = None
        bounds_error: str | None = None
        try:
            bounds = await self._resolve_bounds(path)
        except Exception as exc:
            bounds_error = describe_error(exc)
            logger.warning("job_bounds_failed", path=path, error=bounds_error)

        if self._sequencer.discard_if_stale(token):
            return self._file
        job = JobFile(name=name, path=path, size_description=size_description, bounds=bounds)
        self._apply(job, error=bounds_error)
        return job

    async def reload(self) -> JobFile | None:
        """Re-read the current file; does nothing when no file is loaded."""
        if self._file is None:
            return None
        return await self.open(self._file.path)

    async def select_previous(self, path: str) -> JobFile | None:
        """Load a file picked from the recent-files list."""
        if not path:
            return self._file
        return await self.open(path)

    def clear(self) -> None:
        """Unload the file. History is kept."""
        self._sequencer.issue()
        self._file = None
        self._selected_path = ""
        self._error = None
        logger.info("job_cleared")
        self._notify()

    # --- View mode ---

    def set_view(self, mode: FileInfoView | str) -> None:
        self._view_mode = FileInfoView(mode)
        self._notify()

    def toggle_view(self) -> FileInfoView:
        if self._view_mode == FileInfoView.SIZE:
            self.set_view(FileInfoView.INFO)
        else:
            self.set_view(FileInfoView.SIZE)
        return self._view_mode

    # --- Internals ---

    async def _resolve_bounds(self, path: str) -> FileBounds | None:
        result = self._bounds_provider(path)
        if inspect.isawaitable(result):
            result = await result
        return result

    def _apply(self, job: JobFile, error: str | None) -> None:
        self._file = job
        self._selected_path = job.path
        self._error = error
        added = self._history.add(job.name, job.path)
        logger.info("job_loaded", path=job.path, new_in_history=added)
        self._notify()
