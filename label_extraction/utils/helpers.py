"""
Helper Utilities Module.

Small text and filesystem helpers shared by the resolvers, the
acquisition layer and the command-line driver.

Functions:
    - split_lines: Turn raw page text into trimmed non-empty lines
    - join_lines: Rebuild the full page text from lines
    - title_case: Capitalize every word, lowercase the rest
    - ensure_directory: Create directory if it doesn't exist
"""

import re
from pathlib import Path
from typing import Iterable, List, Union


def split_lines(text: str) -> List[str]:
    """
    Split page text into trimmed, non-empty lines in reading order.

    Args:
        text: Raw text as returned by a text layer or OCR.

    Returns:
        List of trimmed lines; empty list for empty input.

    Example:
        >>> split_lines("  SHOPPERS \\n\\n KART ")
        ['SHOPPERS', 'KART']
    """
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def join_lines(lines: Iterable[str]) -> str:
    """Join lines back into newline separated page text."""
    return '\n'.join(lines)


def title_case(text: str) -> str:
    """
    Capitalize the first letter of every whitespace separated word.

    Unlike str.title(), letters after apostrophes and digits are left
    lowercase.

    Example:
        >>> title_case("AMAR singh")
        'Amar Singh'
    """
    return ' '.join(
        word[:1].upper() + word[1:].lower()
        for word in re.split(r'\s+', text.strip())
        if word
    )


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path
