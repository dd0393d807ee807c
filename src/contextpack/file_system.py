"""
Asynchronous filesystem access for context gathering.

The blocking os calls run in worker threads through asyncio.to_thread so every
filesystem operation is a suspension point for the event loop. Any object
exposing the same coroutine methods can be passed to the reader and ignore
handler in place of LocalFileSystem.
"""

import asyncio
import errno
import os
import stat
from typing import List, NamedTuple


class FileStat(NamedTuple):
    """Subset of stat information the context reader relies on."""

    is_file: bool
    is_directory: bool
    size: int
    is_symlink: bool = False


class LocalFileSystem:
    """Filesystem collaborator backed by the operating system."""

    async def access(self, path: str) -> None:
        """
        Check that a path exists and is readable.

        Raises:
            FileNotFoundError: If the path does not exist.
            PermissionError: If the path exists but cannot be read.
        """
        await asyncio.to_thread(self._access_sync, path)

    async def exists(self, path: str) -> bool:
        try:
            await self.access(path)
        except OSError:
            return False
        return True

    async def stat(self, path: str) -> FileStat:
        return self._to_file_stat(await asyncio.to_thread(os.stat, path))

    async def lstat(self, path: str) -> FileStat:
        """Like stat, but a symbolic link describes itself, not its target."""
        return self._to_file_stat(await asyncio.to_thread(os.lstat, path))

    async def readdir(self, path: str) -> List[str]:
        return await asyncio.to_thread(os.listdir, path)

    async def read_text(self, path: str) -> str:
        return await asyncio.to_thread(self._read_text_sync, path)

    @staticmethod
    def _to_file_stat(result: os.stat_result) -> FileStat:
        return FileStat(
            is_file=stat.S_ISREG(result.st_mode),
            is_directory=stat.S_ISDIR(result.st_mode),
            size=result.st_size,
            is_symlink=stat.S_ISLNK(result.st_mode),
        )

    @staticmethod
    def _access_sync(path: str) -> None:
        os.stat(path)
        if not os.access(path, os.R_OK):
            raise PermissionError(errno.EACCES, os.strerror(errno.EACCES), path)

    @staticmethod
    def _read_text_sync(path: str) -> str:
        # Undecodable bytes become U+FFFD; binary sniffing happens afterwards
        with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
            return f.read()
