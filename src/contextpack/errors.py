"""
Application errors reported by the contextpack CLI.

Each error carries a category and a list of suggestions so the CLI can tell the
user what went wrong and how to fix it.
"""

from typing import Iterable, List, Optional

from contextpack.config import SUPPORTED_PROVIDERS


class ContextPackError(Exception):
    """Base error with a display category and fix-it suggestions."""

    category = "Unknown"

    def __init__(self, message: str, suggestions: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.message = message
        self.suggestions: List[str] = list(suggestions or [])


class InputError(ContextPackError):
    category = "Input"


class ConfigError(ContextPackError):
    category = "Configuration"


class ProviderError(ContextPackError):
    category = "API"


def format_cli_error(error: ContextPackError) -> str:
    """Render an error and its suggestions for the console."""
    lines = [f"[{error.category}] {error.message}"]
    if error.suggestions:
        lines.append("Suggestions:")
        lines.extend(f"  - {suggestion}" for suggestion in error.suggestions)
    return "\n".join(lines)


def create_model_format_error(model_specification: str) -> ConfigError:
    """
    Build an error for a model string not in 'provider:model_id' form.

    Args:
        model_specification (str): The string the user passed.

    Returns:
        ConfigError: Error with suggestions targeted at the specific mistake.
    """
    providers = ", ".join(SUPPORTED_PROVIDERS)
    suggestions = ['Use the format "provider:model_id", e.g. "openai:gpt-4o-mini"']

    if ":" not in model_specification:
        suggestions.append(
            f'Add a colon between provider and model ID: "provider:{model_specification}"'
        )
    else:
        provider, _, model_id = model_specification.partition(":")
        if not provider:
            suggestions.append(f'Specify a provider before the model ID: "provider{model_specification}"')
        elif not model_id:
            suggestions.append(f'Specify a model ID after the provider: "{model_specification}model_id"')
        elif provider not in SUPPORTED_PROVIDERS:
            return ConfigError(
                f'Unknown provider "{provider}" in model "{model_specification}"',
                [f"Available providers: {providers}"],
            )

    suggestions.append(f"Available providers: {providers}")
    return ConfigError(f'Invalid model format: "{model_specification}"', suggestions)


def create_file_not_found_error(path: str) -> InputError:
    return InputError(
        f"Input file not found: {path}",
        [
            "Check the prompt file path for typos",
            "Prompt files are read relative to the current directory",
            f"Example: contextpack {path} path/to/context-dir/",
        ],
    )
