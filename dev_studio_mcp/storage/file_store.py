"""
Durable storage for the whole project table.

The table is always loaded and saved as a single document; there are no
partial writes.
"""

import asyncio
import copy
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from typing_extensions import override

logger = logging.getLogger(__name__)

ProjectTable = dict[str, Any]


class FileStore(ABC):
    """Load-all/save-all persistence for the project table."""

    @abstractmethod
    async def load(self) -> ProjectTable | None:
        """
        Load the persisted table.

        Returns:
            The decoded table, or None if nothing has been saved yet.

        Raises:
            OSError or ValueError if the stored record cannot be read or decoded.
        """
        pass

    @abstractmethod
    async def save(self, table: ProjectTable) -> None:
        """Replace the persisted table with `table`."""
        pass


class InMemoryFileStore(FileStore):
    """Keeps the table in process memory. Used by tests and ephemeral servers."""

    def __init__(self, initial: ProjectTable | None = None) -> None:
        self._data = copy.deepcopy(initial) if initial is not None else None
        self.save_count = 0

    @override
    async def load(self) -> ProjectTable | None:
        return copy.deepcopy(self._data)

    @override
    async def save(self, table: ProjectTable) -> None:
        self._data = copy.deepcopy(table)
        self.save_count += 1


class JsonFileStore(FileStore):
    """Stores the table as one JSON document on disk."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()

    @override
    async def load(self) -> ProjectTable | None:
        return await asyncio.to_thread(self._read)

    @override
    async def save(self, table: ProjectTable) -> None:
        content = json.dumps(table, indent=2, ensure_ascii=False)
        await asyncio.to_thread(self._write, content)

    def _read(self) -> ProjectTable | None:
        if not self.path.exists():
            logger.debug(f"No project table at {self.path}")
            return None
        content = self.path.read_text(encoding="utf-8")
        if not content.strip():
            return None
        return json.loads(content)

    def _write(self, content: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write to a sibling temp file first so the replace is atomic.
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug(f"Saved project table to {self.path}, {len(content)} bytes")
