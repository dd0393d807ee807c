"""
Prompt assembly for contextpack.

Combines the user's prompt with successfully read context files into the single
Markdown document sent to each model.
"""

import logging
from pathlib import PurePath
from typing import Iterable, List, Tuple

from contextpack.outcomes import FileOutcome
from contextpack.path_utils import normalize

logger = logging.getLogger(__name__)

LANGUAGE_BY_EXTENSION = {
    ".js": "javascript",
    ".jsx": "jsx",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".py": "python",
    ".rb": "ruby",
    ".go": "go",
    ".rs": "rust",
    ".java": "java",
    ".kt": "kotlin",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".hpp": "cpp",
    ".cs": "csharp",
    ".php": "php",
    ".swift": "swift",
    ".md": "markdown",
    ".json": "json",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".toml": "toml",
    ".xml": "xml",
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".sql": "sql",
    ".sh": "bash",
    ".bash": "bash",
    ".zsh": "bash",
}


def detect_language(file_path: str) -> str:
    """
    Pick the fenced-code language tag for a file.

    Args:
        file_path (str): Path of the context file.

    Returns:
        str: Language tag, 'text' when the extension is unknown.
    """
    suffix = PurePath(file_path.replace("\\", "/")).suffix.lower()
    return LANGUAGE_BY_EXTENSION.get(suffix, "text")


def format_combined_input(prompt: str, outcomes: Iterable[FileOutcome]) -> str:
    """
    Build the document combining context files and the prompt.

    Failed outcomes are left out. Files keep the order they were given in.

    Args:
        prompt (str): The user's prompt text.
        outcomes (Iterable[FileOutcome]): Context read results.

    Returns:
        str: Markdown with a '# CONTEXT DOCUMENTS' section (only when at least
        one file was read) followed by '# USER PROMPT'.
    """
    sections: List[str] = []

    documents = [outcome for outcome in outcomes if outcome.ok]
    if documents:
        sections.append("# CONTEXT DOCUMENTS\n")
        for outcome in documents:
            language = detect_language(outcome.path)
            sections.append(
                f"## File: {normalize(outcome.path)}\n"
                f"```{language}\n{outcome.content}\n```\n"
            )

    sections.append(f"# USER PROMPT\n\n{prompt}")
    return "\n".join(sections)


def summarize_outcomes(
    outcomes: Iterable[FileOutcome],
) -> Tuple[List[FileOutcome], List[FileOutcome]]:
    """
    Split outcomes into included and failed files, logging each failure.

    Returns:
        Tuple[List[FileOutcome], List[FileOutcome]]: (included, failed)
    """
    included: List[FileOutcome] = []
    failed: List[FileOutcome] = []
    for outcome in outcomes:
        if outcome.ok:
            included.append(outcome)
        else:
            failed.append(outcome)
            logger.warning(
                "Skipping context file %s [%s]: %s",
                outcome.path,
                outcome.error.code.value,
                outcome.error.message,
            )
    return included, failed
