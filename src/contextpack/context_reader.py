"""
Context reader for contextpack.

Reads user-supplied context paths (any mix of files and directories) into a
flat list of FileOutcome records. Directories are walked recursively with
.gitignore filtering; every per-path failure becomes an error outcome so one
bad path never stops the rest from being read.
"""

import asyncio
import logging
import os
from typing import List, Optional, Sequence

from contextpack.binary_detection import is_binary_content
from contextpack.config import ALWAYS_SKIP_DIRECTORIES, MAX_FILE_SIZE_BYTES
from contextpack.file_system import LocalFileSystem
from contextpack.gitignore_handler import GitIgnoreHandler, get_default_handler
from contextpack.outcomes import ErrorCode, FileOutcome

logger = logging.getLogger(__name__)


def format_megabytes(size_bytes: int) -> str:
    megabytes = size_bytes / (1024 * 1024)
    if megabytes == int(megabytes):
        return f"{int(megabytes)}MB"
    return f"{megabytes:.2f}MB"


def _access_failure(path: str, error: OSError, kind: str = "file") -> FileOutcome:
    if isinstance(error, (FileNotFoundError, NotADirectoryError)):
        return FileOutcome.failure(path, ErrorCode.NOT_FOUND, f"File not found: {path}")
    return FileOutcome.failure(
        path, ErrorCode.ACCESS_DENIED, f"Permission denied to read {kind}: {path}"
    )


class ContextReader:
    """
    Reads files and directory trees into FileOutcome records.
    """

    def __init__(
        self,
        file_system=None,
        gitignore_handler: Optional[GitIgnoreHandler] = None,
        max_file_size: int = MAX_FILE_SIZE_BYTES,
    ):
        """
        Initialize the context reader.

        Args:
            file_system: Filesystem collaborator; defaults to LocalFileSystem.
            gitignore_handler (Optional[GitIgnoreHandler]): Ignore rule provider.
                A new handler sharing file_system is created when omitted.
            max_file_size (int): Size ceiling in bytes for a single file.
        """
        self.file_system = file_system or LocalFileSystem()
        self.gitignore_handler = gitignore_handler or GitIgnoreHandler(self.file_system)
        self.max_file_size = max_file_size

    async def read_file(self, file_path: str) -> FileOutcome:
        """
        Read one file, validating it along the way.

        Args:
            file_path (str): Absolute or relative path; kept as-is in the outcome.

        Returns:
            FileOutcome: The content, or the reason the file was rejected.
        """
        try:
            return await self._read_file(file_path)
        except Exception as e:
            logger.debug("Unexpected error reading %s", file_path, exc_info=True)
            return FileOutcome.failure(
                file_path, ErrorCode.PROCESSING_ERROR, f"Error processing file {file_path}: {e}"
            )

    async def _read_file(self, file_path: str) -> FileOutcome:
        resolved = file_path if os.path.isabs(file_path) else os.path.abspath(file_path)

        try:
            await self.file_system.access(resolved)
        except OSError as e:
            return _access_failure(file_path, e)

        try:
            file_stat = await self.file_system.stat(resolved)
        except OSError as e:
            return FileOutcome.failure(
                file_path, ErrorCode.STAT_FAILED, f"Unable to get file stats for {file_path}: {e}"
            )

        if not file_stat.is_file:
            return FileOutcome.failure(
                file_path, ErrorCode.NOT_A_FILE, f"Path is not a file: {file_path}"
            )

        if file_stat.size > self.max_file_size:
            logger.debug("Skipping oversized file %s (%d bytes)", file_path, file_stat.size)
            return FileOutcome.failure(
                file_path,
                ErrorCode.TOO_LARGE,
                f"File {file_path} ({format_megabytes(file_stat.size)}) exceeds the "
                f"maximum allowed size of {format_megabytes(self.max_file_size)}",
            )

        try:
            content = await self.file_system.read_text(resolved)
        except OSError:
            return FileOutcome.failure(
                file_path, ErrorCode.READ_ERROR, f"Error reading file: {file_path}"
            )

        if is_binary_content(content):
            logger.debug("Binary file detected: %s", file_path)
            return FileOutcome.failure(
                file_path, ErrorCode.BINARY_FILE, f"Binary file detected: {file_path}"
            )

        return FileOutcome.success(file_path, content)

    async def read_directory(self, directory_path: str) -> List[FileOutcome]:
        """
        Recursively read every non-ignored file under a directory.

        Args:
            directory_path (str): Directory to walk. Outcome paths are built by
                joining this path (as given) with the discovered entry names.

        Returns:
            List[FileOutcome]: One outcome per file visited, in no particular order.
        """
        resolved = directory_path if os.path.isabs(directory_path) else os.path.abspath(directory_path)

        try:
            await self.file_system.access(resolved)
        except OSError as e:
            return [_access_failure(directory_path, e, kind="directory")]

        try:
            dir_stat = await self.file_system.stat(resolved)
        except OSError as e:
            return [
                FileOutcome.failure(
                    directory_path,
                    ErrorCode.STAT_FAILED,
                    f"Unable to get stats for {directory_path}: {e}",
                )
            ]

        if dir_stat.is_file:
            return [await self.read_file(directory_path)]
        if not dir_stat.is_directory:
            return [
                FileOutcome.failure(
                    directory_path,
                    ErrorCode.INVALID_PATH_TYPE,
                    f"Path is neither a file nor a directory: {directory_path}",
                )
            ]

        return await self._walk(directory_path, resolved)

    async def _walk(self, display_path: str, resolved: str) -> List[FileOutcome]:
        # Entries are matched against the rules of the directory being listed only
        try:
            entries = await self.file_system.readdir(resolved)
        except OSError as e:
            return [
                FileOutcome.failure(
                    display_path,
                    ErrorCode.READ_ERROR,
                    f"Error reading directory: {display_path} ({e})",
                )
            ]

        results: List[FileOutcome] = []
        for name in entries:
            entry_display = os.path.join(display_path, name)
            entry_resolved = os.path.join(resolved, name)

            try:
                entry_stat = await self.file_system.lstat(entry_resolved)
            except OSError as e:
                results.append(
                    FileOutcome.failure(
                        entry_display,
                        ErrorCode.STAT_FAILED,
                        f"Unable to get file stats for {entry_display}: {e}",
                    )
                )
                continue

            if entry_stat.is_symlink:
                logger.debug("Skipping symbolic link: %s", entry_display)

            elif entry_stat.is_file:
                if await self.gitignore_handler.should_ignore(resolved, entry_resolved):
                    logger.debug("Skipping git-ignored file: %s", entry_display)
                    continue
                results.append(await self.read_file(entry_display))

            elif entry_stat.is_directory:
                if name in ALWAYS_SKIP_DIRECTORIES:
                    logger.debug("Skipping excluded directory: %s", entry_display)
                    continue
                if await self.gitignore_handler.should_ignore(
                    resolved, entry_resolved, is_directory=True
                ):
                    logger.debug("Skipping git-ignored directory: %s", entry_display)
                    continue
                results.extend(await self._walk(entry_display, entry_resolved))

            else:
                logger.debug("Skipping special file: %s", entry_display)

        return results

    async def read_context_paths(self, paths: Sequence[str]) -> List[FileOutcome]:
        """
        Read a mix of file and directory paths concurrently.

        Args:
            paths (Sequence[str]): User-supplied context paths.

        Returns:
            List[FileOutcome]: All outcomes flattened, grouped by input path in
            input order. A path reachable twice is reported twice.
        """
        if not paths:
            return []

        per_path = await asyncio.gather(*(self._read_context_path(path) for path in paths))
        return [outcome for outcomes in per_path for outcome in outcomes]

    async def _read_context_path(self, path: str) -> List[FileOutcome]:
        try:
            resolved = path if os.path.isabs(path) else os.path.abspath(path)

            try:
                await self.file_system.access(resolved)
            except OSError as e:
                return [_access_failure(path, e, kind="path")]

            try:
                path_stat = await self.file_system.stat(resolved)
            except OSError as e:
                return [
                    FileOutcome.failure(
                        path, ErrorCode.STAT_FAILED, f"Unable to get stats for {path}: {e}"
                    )
                ]

            if path_stat.is_file:
                return [await self.read_file(path)]
            if path_stat.is_directory:
                return await self.read_directory(path)
            return [
                FileOutcome.failure(
                    path,
                    ErrorCode.INVALID_PATH_TYPE,
                    f"Path is neither a file nor a directory: {path}",
                )
            ]
        except Exception as e:
            logger.debug("Unexpected error processing %s", path, exc_info=True)
            return [
                FileOutcome.failure(
                    path, ErrorCode.PROCESSING_ERROR, f"Error processing path {path}: {e}"
                )
            ]


async def read_context_paths(paths: Sequence[str]) -> List[FileOutcome]:
    """Read context paths with a reader bound to the process-wide ignore cache."""
    reader = ContextReader(gitignore_handler=get_default_handler())
    return await reader.read_context_paths(paths)
