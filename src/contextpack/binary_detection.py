"""
Binary content sniffing for context files.
"""

from typing import Optional

from contextpack.config import BINARY_SAMPLE_SIZE, BINARY_THRESHOLD_PERCENT

_ALLOWED_CONTROL_CHARS = frozenset({"\t", "\n", "\r"})


def is_binary_content(content: Optional[str]) -> bool:
    """
    Decide whether text content is actually binary data.

    Only a bounded prefix is inspected. A NUL character marks the content as
    binary straight away; otherwise it is binary when control characters
    (other than tab, LF and CR) plus DEL make up more than
    BINARY_THRESHOLD_PERCENT of the sample.

    Args:
        content (Optional[str]): Decoded file content.

    Returns:
        bool: True if the content should be treated as binary.
    """
    if not content:
        return False

    sample = content[:BINARY_SAMPLE_SIZE]
    if "\0" in sample:
        return True

    non_printable = 0
    for char in sample:
        code_point = ord(char)
        if (code_point < 32 and char not in _ALLOWED_CONTROL_CHARS) or code_point == 127:
            non_printable += 1

    return (non_printable / len(sample)) * 100 > BINARY_THRESHOLD_PERCENT
