"""
CLI Interface for contextpack.

This module handles command-line argument parsing and validation.
"""

import argparse
from pathlib import Path

from contextpack.config import DEFAULT_CONFIG_PATH, DEFAULT_OUTPUT_DIR
from contextpack.errors import ConfigError
from contextpack.llm_service import parse_model_list


def parse_arguments(argv=None):
    """
    Parse command-line arguments for contextpack.

    Args:
        argv (list[str] | None): Arguments to parse; defaults to sys.argv[1:].

    Returns:
        argparse.Namespace: Parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(
        prog="contextpack",
        description="Send a prompt, bundled with file and directory context, to one or more LLMs.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Positional arguments; the prompt is only optional for the config actions
    parser.add_argument(
        "prompt_file",
        nargs="?",
        default=None,
        help="Path to the file containing the prompt.",
    )

    parser.add_argument(
        "context_paths",
        nargs="*",
        default=[],
        help="Files or directories to include as context. Directories are read "
        "recursively and respect .gitignore files.",
    )

    # Optional arguments
    parser.add_argument(
        "--models",
        default=None,
        help="Comma-separated list of models in provider:model_id form. "
        "Overrides the models of the selected group.",
    )

    parser.add_argument(
        "--group",
        default=None,
        help="Model group from the config file to query (default: 'default').",
    )

    parser.add_argument(
        "--config",
        default=None,
        type=Path,
        help=f"Path to the JSON config file (default: {DEFAULT_CONFIG_PATH}).",
    )

    parser.add_argument(
        "--output_dir",
        default=DEFAULT_OUTPUT_DIR,
        type=Path,
        help="Directory under which a run-specific output folder is created.",
    )

    parser.add_argument(
        "--system_prompt",
        default=None,
        help="System prompt sent to every model. Overrides the group's system prompt.",
    )

    parser.add_argument(
        "--include_metadata",
        action="store_true",
        help="Include response metadata in the output files.",
    )

    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use the mock LLM instead of calling providers.",
    )

    parser.add_argument(
        "--dry_run",
        action="store_true",
        help="Print the combined prompt and exit without querying any model.",
    )

    parser.add_argument(
        "--list_models",
        action="store_true",
        help="Print the configured model groups and exit.",
    )

    parser.add_argument(
        "--init_config",
        action="store_true",
        help="Write a starter config file and exit.",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser.parse_args(argv)


def validate_arguments(args):
    """
    Validate the parsed command-line arguments.

    Args:
        args (argparse.Namespace): Parsed command-line arguments.

    Returns:
        tuple: (is_valid, error_message)
    """
    # Config actions need neither a prompt nor an output directory
    if getattr(args, "list_models", False) or getattr(args, "init_config", False):
        return True, ""

    if args.prompt_file is None:
        return False, "A prompt file is required"
    prompt_file = Path(args.prompt_file)
    if not prompt_file.exists():
        return False, f"Input file not found: {args.prompt_file}"
    if not prompt_file.is_file():
        return False, f"Input path is not a file: {args.prompt_file}"

    if args.models is not None:
        try:
            models = parse_model_list(args.models)
        except ConfigError as e:
            return False, e.message
        if not models:
            return False, "At least one model must be specified"

    # A dry run never writes output
    if getattr(args, "dry_run", False):
        return True, ""

    # Check if output directory exists or can be created
    output_dir = Path(args.output_dir)
    if not output_dir.exists():
        try:
            output_dir.mkdir(parents=True)
        except Exception as e:
            return False, f"Error creating output directory: {str(e)}"
    elif not output_dir.is_dir():
        return False, f"Output path exists but is not a directory: {args.output_dir}"

    return True, ""
