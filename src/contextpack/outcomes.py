"""
Result records produced while gathering context files.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Reasons a candidate context path could not be used."""

    NOT_FOUND = "ENOENT"
    ACCESS_DENIED = "EACCES"
    STAT_FAILED = "STAT_FAILED"
    NOT_A_FILE = "NOT_FILE"
    INVALID_PATH_TYPE = "INVALID_PATH_TYPE"
    TOO_LARGE = "FILE_TOO_LARGE"
    BINARY_FILE = "BINARY_FILE"
    READ_ERROR = "READ_ERROR"
    PROCESSING_ERROR = "PROCESSING_ERROR"


@dataclass(frozen=True)
class FileError:
    code: ErrorCode
    message: str


@dataclass(frozen=True)
class FileOutcome:
    """
    Outcome of reading one candidate file.

    Exactly one of content and error is set. Empty files succeed with
    content == "".
    """

    path: str
    content: Optional[str] = None
    error: Optional[FileError] = None

    def __post_init__(self):
        if (self.content is None) == (self.error is None):
            raise ValueError(
                f"FileOutcome for {self.path} must carry either content or an error"
            )

    @classmethod
    def success(cls, path: str, content: str) -> "FileOutcome":
        return cls(path=path, content=content if content is not None else "")

    @classmethod
    def failure(cls, path: str, code: ErrorCode, message: str) -> "FileOutcome":
        return cls(path=path, error=FileError(code=code, message=message))

    @property
    def ok(self) -> bool:
        return self.error is None
