"""
Path normalization helpers.

Converts mixed-separator and OS-specific path strings into the canonical
forward-slash form used for ignore-rule matching and display.
"""

import posixpath
import re

_DRIVE_PATTERN = re.compile(r"^[A-Za-z]:/")


def _to_forward_slashes(path: str) -> str:
    return path.replace("\\", "/")


def is_absolute(path: str) -> bool:
    """Return True for POSIX absolute paths and Windows drive paths."""
    path = _to_forward_slashes(path)
    return path.startswith("/") or bool(_DRIVE_PATTERN.match(path))


def normalize(path: str) -> str:
    """
    Normalize a path to forward slashes with '.' and '..' segments collapsed.

    Args:
        path (str): Path using any separator style.

    Returns:
        str: Canonical path. An empty path normalizes to '.'.
    """
    if not path:
        return "."
    return posixpath.normpath(_to_forward_slashes(path))


def normalize_for_matching(candidate_path: str, base_path: str) -> str:
    """
    Express a candidate path relative to a base path for ignore-rule matching.

    Absolute candidates are made relative to base_path. Relative candidates are
    taken to be relative to base_path already and are only normalized. The
    result never has a leading './'; a candidate equal to the base yields '.'.

    Args:
        candidate_path (str): Path to express relative to base_path.
        base_path (str): Directory the rules are anchored to.

    Returns:
        str: Forward-slash relative path.
    """
    candidate = normalize(candidate_path)
    if not is_absolute(candidate):
        return candidate

    base = normalize(base_path)
    if candidate == base:
        return "."
    if is_absolute(base):
        return posixpath.relpath(candidate, base)
    return candidate
