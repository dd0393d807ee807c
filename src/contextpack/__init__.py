"""
contextpack CLI

A command-line tool that sends a prompt, optionally bundled with file and directory
context, to one or more LLM providers and writes each model's response to disk.
Directory context is gathered recursively and respects .gitignore files.
"""

__version__ = "0.1.0"
