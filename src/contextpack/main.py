"""
Main entry point for the contextpack CLI.

This module ties together all components and provides the main execution flow.
"""

import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from contextpack.cli import parse_arguments, validate_arguments
from contextpack.config import LOG_LEVEL
from contextpack.context_reader import read_context_paths
from contextpack.errors import (
    ConfigError,
    ContextPackError,
    InputError,
    create_file_not_found_error,
    format_cli_error,
)
from contextpack.llm_service import LLMService, parse_model_list, query_models
from contextpack.logging_config import setup_logging
from contextpack.output_generator import OutputGenerator, format_console_summary
from contextpack.prompt_formatter import format_combined_input, summarize_outcomes
from contextpack.user_config import (
    format_model_listing,
    init_user_config,
    load_user_config,
    resolve_run_settings,
)

# Modes whose stdout is the product; their log lines go to stderr instead
_PRINTING_FLAGS = ("--dry_run", "--list_models")


def _setup_logging_and_env(argv):
    """Sets up logging and environment variables."""
    load_dotenv()
    level = logging.DEBUG if "--verbose" in argv else LOG_LEVEL
    stream = sys.stderr if any(flag in argv for flag in _PRINTING_FLAGS) else sys.stdout
    return setup_logging(level, stream=stream)


def _parse_and_validate_args(argv):
    """Parses and validates command-line arguments."""
    args = parse_arguments(argv)
    if args.prompt_file is not None and not Path(args.prompt_file).exists():
        raise create_file_not_found_error(args.prompt_file)
    if args.models is not None:
        # Surface model format errors with their suggestions
        parse_model_list(args.models)
    is_valid, error_message = validate_arguments(args)
    if not is_valid:
        raise InputError(error_message)
    return args


def _resolve_settings(args):
    """Picks the models and system prompt from the flags and the user config."""
    user_config = load_user_config(args.config)
    models, system_prompt = resolve_run_settings(
        user_config,
        group_name=args.group,
        models=args.models,
        system_prompt=args.system_prompt,
    )
    if not models:
        raise ConfigError("At least one model must be specified")
    return models, system_prompt


def _read_prompt(prompt_file):
    """Reads the prompt text."""
    try:
        with open(prompt_file, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(
            f"Could not read prompt file {prompt_file}: {str(e)}",
            ["Make sure the prompt file is readable UTF-8 text"],
        ) from e


async def _gather_context(context_paths, logger):
    """Reads context files and reports which ones were skipped."""
    if not context_paths:
        return []

    logger.info(f"Including {len(context_paths)} context path(s)")
    outcomes = await read_context_paths(context_paths)
    included, failed = summarize_outcomes(outcomes)
    logger.info(
        "Read %d context file(s); %d could not be used", len(included), len(failed)
    )
    return outcomes


async def _run(args, models, system_prompt, logger):
    prompt = _read_prompt(args.prompt_file)
    outcomes = await _gather_context(args.context_paths, logger)
    combined_input = format_combined_input(prompt, outcomes)

    if args.dry_run:
        print(combined_input)
        return 0

    services = [
        LLMService(model_spec, use_mock=args.mock, system_prompt=system_prompt)
        for model_spec in models
    ]
    logger.info(f"Running prompt against {len(services)} model(s)")
    responses = await query_models(services, combined_input)

    output_generator = OutputGenerator(args.output_dir)
    run_dir = output_generator.create_run_directory()
    output_files = output_generator.write_responses(
        responses, run_dir, include_metadata=args.include_metadata
    )

    print(format_console_summary(responses, output_files))
    if any(service.is_mock for service in services):
        logger.warning(
            "Note: some responses came from the mock LLM. Set the provider API keys in a .env file for real output."
        )
    return 0


def main(argv=None):
    """
    Main entry point for contextpack.

    Args:
        argv (list[str] | None): Command-line arguments; defaults to sys.argv[1:].

    Returns:
        int: Process exit status.
    """
    argv = sys.argv[1:] if argv is None else list(argv)
    logger = _setup_logging_and_env(argv)
    try:
        args = _parse_and_validate_args(argv)

        if args.init_config:
            path = init_user_config(args.config)
            print(f"Created config file: {path}")
            return 0
        if args.list_models:
            print(format_model_listing(load_user_config(args.config)))
            return 0

        models, system_prompt = _resolve_settings(args)
        return asyncio.run(_run(args, models, system_prompt, logger))
    except ContextPackError as e:
        logger.error(format_cli_error(e))
        return 1
    except Exception as e:
        logger.error(f"An unexpected error occurred in main: {str(e)}")
        logger.debug("Traceback:", exc_info=True)
        return 1


def run():
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
