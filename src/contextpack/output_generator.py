"""
Output Generation Module for contextpack.

This module formats model responses as Markdown and writes one file per model
into a timestamped run directory.
"""

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Sequence

from contextpack.llm_service import LLMResponse

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_filename(name: str) -> str:
    """Replace characters that are unsafe in file names with '-'."""
    return _UNSAFE_FILENAME_CHARS.sub("-", name)


def format_response_markdown(
    response: LLMResponse, include_metadata: bool = False, now: Optional[datetime] = None
) -> str:
    """
    Format one model response as a Markdown document.

    Args:
        response (LLMResponse): The model's response.
        include_metadata (bool): Whether to append the metadata as JSON.
        now (Optional[datetime]): Timestamp to record; defaults to the current time.

    Returns:
        str: Markdown content.
    """
    timestamp = (now or datetime.now()).isoformat(timespec="seconds")
    markdown = f"# {response.config_key}\n\nGenerated: {timestamp}\n\n"

    if response.is_mock:
        markdown += "_Generated by the mock LLM; no provider was called._\n\n"

    if response.error:
        markdown += f"## Error\n\n```\n{response.error}\n```\n\n"

    if response.text:
        markdown += f"## Response\n\n{response.text}\n\n"

    if include_metadata and response.metadata:
        markdown += "## Metadata\n\n```json\n"
        markdown += json.dumps(response.metadata, indent=2, default=str)
        markdown += "\n```\n"

    return markdown


class OutputGenerator:
    """
    Formats and writes output files with model responses.
    """

    def __init__(self, output_dir):
        """
        Initialize the output generator.

        Args:
            output_dir (str | Path): Parent directory for run directories.
        """
        self.output_dir = Path(output_dir)
        self.logger = logging.getLogger(__name__)

    def create_run_directory(self, now: Optional[datetime] = None) -> Path:
        """
        Create the run-specific directory under the output directory.

        Returns:
            Path: The created directory, named run-YYYYMMDD-HHMMSS.
        """
        run_name = f"run-{(now or datetime.now()).strftime('%Y%m%d-%H%M%S')}"
        run_dir = self.output_dir / run_name
        run_dir.mkdir(parents=True, exist_ok=True)
        self.logger.info(f"Writing output files to {run_dir}...")
        return run_dir

    def write_responses(
        self,
        responses: Sequence[LLMResponse],
        run_dir: Path,
        include_metadata: bool = False,
    ) -> Dict[str, str]:
        """
        Write one Markdown file per response.

        Args:
            responses (Sequence[LLMResponse]): Responses to write.
            run_dir (Path): Directory created by create_run_directory.
            include_metadata (bool): Whether to include response metadata.

        Returns:
            Dict[str, str]: Mapping of model config key to written file path.
        """
        output_files: Dict[str, str] = {}
        used_names = set()
        for response in responses:
            stem = sanitize_filename(
                f"{response.model_spec.provider}-{response.model_spec.model_id}"
            )
            # Distinct models can sanitize to the same name, e.g. 'a/b' and 'a:b'
            file_name = f"{stem}.md"
            suffix = 2
            while file_name in used_names:
                file_name = f"{stem}-{suffix}.md"
                suffix += 1
            used_names.add(file_name)
            file_path = Path(run_dir) / file_name
            try:
                with open(file_path, "w", encoding="utf-8") as f:
                    f.write(format_response_markdown(response, include_metadata))
                self.logger.info(f"Wrote {response.config_key} response to {file_path}")
            except Exception as e:
                self.logger.error(f"Error writing {file_path}: {str(e)}")
                raise
            output_files[response.config_key] = str(file_path)

        return output_files


def format_console_summary(
    responses: Sequence[LLMResponse], output_files: Dict[str, str]
) -> str:
    """Summarize a run for the console: one line per model."""
    succeeded = sum(1 for response in responses if not response.error)
    lines = [f"Completed {succeeded}/{len(responses)} model(s)."]
    for response in responses:
        status = "ERROR" if response.error else "OK"
        location = output_files.get(response.config_key, "(not written)")
        lines.append(f"  [{status}] {response.config_key} -> {location}")
    return "\n".join(lines)
