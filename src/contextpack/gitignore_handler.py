"""
GitIgnore Handler for contextpack.

This module loads per-directory ignore rule sets (default exclusions plus the
directory's own .gitignore) and answers whether a path should be left out of
the gathered context. Pattern matching itself is delegated to pathspec.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import pathspec

from contextpack.config import DEFAULT_IGNORE_PATTERNS
from contextpack.file_system import LocalFileSystem
from contextpack.path_utils import normalize_for_matching

logger = logging.getLogger(__name__)

GITIGNORE_FILENAME = ".gitignore"


@dataclass(frozen=True)
class IgnoreRuleSet:
    """Compiled ignore rules anchored at one directory."""

    base_path: str
    patterns: Tuple[str, ...]
    spec: pathspec.GitIgnoreSpec

    def check(self, relative_path: str) -> Optional[bool]:
        """
        Evaluate a base-relative, forward-slash path against the rules.

        Returns:
            Optional[bool]: True if the last matching rule ignores the path,
            False if it was re-included by a negation, None if nothing matched.
        """
        return self.spec.check_file(relative_path).include


class GitIgnoreHandler:
    """
    Loads and caches ignore rule sets, one per directory.

    Rule sets are built lazily on first use and reused for the handler's
    lifetime. Concurrent first lookups for the same directory may both build
    the rule set; the results are identical so the later store is harmless.
    """

    def __init__(self, file_system=None):
        """
        Initialize the GitIgnore handler.

        Args:
            file_system: Filesystem collaborator; defaults to LocalFileSystem.
        """
        self.file_system = file_system or LocalFileSystem()
        self._cache: Dict[str, IgnoreRuleSet] = {}

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    async def get_rule_set(self, directory_path: str) -> IgnoreRuleSet:
        """
        Return the rule set for a directory, reading its .gitignore if needed.

        Args:
            directory_path (str): Directory whose rules are requested.

        Returns:
            IgnoreRuleSet: Default exclusions followed by the .gitignore patterns.
        """
        key = os.path.abspath(directory_path)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        patterns: List[str] = list(DEFAULT_IGNORE_PATTERNS)
        patterns.extend(await self._read_gitignore_lines(key))

        rule_set = IgnoreRuleSet(
            base_path=key,
            patterns=tuple(patterns),
            spec=pathspec.GitIgnoreSpec.from_lines(patterns),
        )
        self._cache[key] = rule_set
        return rule_set

    async def _read_gitignore_lines(self, directory_path: str) -> List[str]:
        gitignore_path = os.path.join(directory_path, GITIGNORE_FILENAME)
        if not await self.file_system.exists(gitignore_path):
            return []

        try:
            content = await self.file_system.read_text(gitignore_path)
        except (OSError, UnicodeError) as e:
            logger.warning("Could not read .gitignore file %s: %s", gitignore_path, e)
            return []

        lines = content.splitlines()
        logger.debug("Loaded %d line(s) from %s", len(lines), gitignore_path)
        return lines

    async def check(
        self, base_path: str, relative_path: str, is_directory: bool = False
    ) -> Optional[bool]:
        """
        Tri-state verdict for a path relative to base_path.

        Returns:
            Optional[bool]: True (ignored), False (re-included by a negation)
            or None (no rule matched).
        """
        if relative_path == "." or relative_path == ".." or relative_path.startswith("../"):
            return None

        rule_set = await self.get_rule_set(base_path)
        if is_directory and not relative_path.endswith("/"):
            relative_path += "/"
        return rule_set.check(relative_path)

    async def should_ignore(
        self, base_path: str, candidate_path: str, is_directory: bool = False
    ) -> bool:
        """
        Check if a path should be ignored according to base_path's rules.

        Args:
            base_path (str): Directory whose rule set applies.
            candidate_path (str): Absolute path, or path relative to base_path.
            is_directory (bool): Whether the candidate is a directory, so that
                directory-only patterns such as 'tmp/' apply to it.

        Returns:
            bool: True if the last matching rule ignores the path. Paths outside
            base_path are never ignored.
        """
        relative_path = normalize_for_matching(candidate_path, os.path.abspath(base_path))
        return bool(await self.check(base_path, relative_path, is_directory))

    def clear_cache(self):
        """Drop every cached rule set."""
        self._cache.clear()


_default_handler = GitIgnoreHandler()


def get_default_handler() -> GitIgnoreHandler:
    return _default_handler


async def should_ignore_path(base_path: str, candidate_path: str) -> bool:
    """Module-level shortcut using the process-wide handler."""
    return await _default_handler.should_ignore(base_path, candidate_path)


def clear_ignore_cache():
    """Clear the process-wide handler's rule set cache."""
    _default_handler.clear_cache()
