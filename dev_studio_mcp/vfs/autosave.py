"""Debounced saving of editor content."""

import asyncio
import logging

from dev_studio_mcp.vfs.virtual_file_system import VirtualFileSystem, normalize_file_path

logger = logging.getLogger(__name__)


class AutoSaver:
    """
    Coalesces rapid edits into a single `save_file` call per file.

    Each `schedule` call restarts the quiescence timer. When the timer fires,
    the latest content of every pending file is written through the VFS.
    """

    def __init__(self, vfs: VirtualFileSystem, delay: float = 1.0) -> None:
        self._vfs = vfs
        self._delay = delay
        self._pending: dict[tuple[str, str], str] = {}
        self._timer: asyncio.Task | None = None
        # Edits taken by a running write that have not been saved yet.
        self._in_flight: dict[tuple[str, str], str] = {}

    @property
    def pending(self) -> list[tuple[str, str]]:
        return list(self._pending)

    def schedule(self, project_id: str, path: str, content: str) -> None:
        """Queue `content` for `path` and restart the timer. Must run inside an event loop."""
        self._pending[(project_id, normalize_file_path(path))] = content
        self._cancel_timer()
        self._timer = asyncio.get_running_loop().create_task(self._fire_after_delay())

    async def flush(self) -> int:
        """Save everything pending right now. Returns the number of files written."""
        self._cancel_timer()
        return await self._write_pending()

    def discard(self, project_id: str, path: str) -> bool:
        """
        Drop the pending edit of one file. Call this whenever the file is saved
        directly or deleted, so a stale draft cannot overwrite or recreate it.
        """
        key = (project_id, normalize_file_path(path))
        removed = self._pending.pop(key, None) is not None
        removed = self._in_flight.pop(key, None) is not None or removed
        if removed:
            logger.debug(f"Discarded pending edit of {path} in {project_id}")
        if not self._pending:
            self._cancel_timer()
        return removed

    def discard_project(self, project_id: str) -> int:
        """Drop every pending edit of a project. Returns how many were dropped."""
        keys = {key for key in [*self._pending, *self._in_flight] if key[0] == project_id}
        for key in keys:
            self._pending.pop(key, None)
            self._in_flight.pop(key, None)
        if not self._pending:
            self._cancel_timer()
        return len(keys)

    def cancel(self) -> None:
        """Drop all pending edits without saving them."""
        self._cancel_timer()
        if self._pending:
            logger.debug(f"Discarding {len(self._pending)} pending edit(s)")
        self._pending.clear()
        self._in_flight.clear()

    async def _fire_after_delay(self) -> None:
        try:
            await asyncio.sleep(self._delay)
        except asyncio.CancelledError:
            return
        self._timer = None
        await self._write_pending()

    async def _write_pending(self) -> int:
        self._in_flight.update(self._pending)
        self._pending = {}
        written = 0
        while self._in_flight:
            (project_id, path), content = self._in_flight.popitem()
            try:
                await self._vfs.save_file(project_id, path, content)
                written += 1
            except Exception as e:
                logger.error(f"Auto-save of {path} in {project_id} failed: {e}")
        return written

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None
