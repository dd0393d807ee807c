# src/contextpack/config.py
"""Configuration settings for the contextpack application."""

import os
from pathlib import Path

# General Configuration
DEFAULT_OUTPUT_DIR = Path(os.getenv("CONTEXTPACK_OUTPUT_DIR", "./contextpack-reports"))
DEFAULT_MODELS = os.getenv("CONTEXTPACK_MODELS", "openai:gpt-4o-mini")

# Context file limits
MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024  # Files above 10MB are skipped as context.
BINARY_SAMPLE_SIZE = 4096  # Characters inspected when sniffing for binary content.
BINARY_THRESHOLD_PERCENT = 10  # Control-character percentage above which content is binary.

# LLM Configuration
SUPPORTED_PROVIDERS = ("openai", "anthropic", "google", "openrouter")
API_KEY_ENV_VARS = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "google": "GEMINI_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
}

# Logging Configuration
LOG_LEVEL = os.getenv("CONTEXTPACK_LOG_LEVEL", "INFO")  # e.g., DEBUG, INFO, WARNING, ERROR

# Patterns every ignore rule set starts with, before a directory's .gitignore
DEFAULT_IGNORE_PATTERNS = [
    "node_modules",
    ".git",
    "dist",
    "build",
    "coverage",
    ".cache",
    ".next",
    ".nuxt",
    ".output",
    ".vscode",
    ".idea",
    ".gitignore",
]

# Directory names that are never descended into, whatever .gitignore says
ALWAYS_SKIP_DIRECTORIES = frozenset(
    {
        ".git",
        ".svn",
        ".hg",
        "node_modules",
        "dist",
        "build",
        "coverage",
        ".cache",
        ".next",
        ".nuxt",
        ".output",
        ".vscode",
        ".idea",
    }
)

# User configuration file holding model groups and system prompts
DEFAULT_CONFIG_PATH = Path(
    os.getenv("CONTEXTPACK_CONFIG", str(Path.home() / ".config" / "contextpack.json"))
)
