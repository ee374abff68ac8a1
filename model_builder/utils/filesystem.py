"""Whole-file token replacement.

Every file is read completely, transformed in memory and written back.
There is no backup and no atomic rename; I/O errors propagate.
"""

import logging
from pathlib import Path
from typing import Iterable, Sequence

logger = logging.getLogger(__name__)

TokenMap = Sequence[tuple[str, str]]


def apply_tokens(
    text: str,
    tokens: TokenMap,
    begin_token: str = "",
    end_token: str = "",
) -> str:
    """Apply an ordered token map to a string.

    Each pair is applied with a full ``str.replace`` before the next pair
    is considered, so a replacement value that contains a later search
    string is substituted again.

    Args:
        text: Text to transform.
        tokens: Ordered ``(search, replace)`` pairs.
        begin_token: Decoration expected before each search string.
        end_token: Decoration expected after each search string.

    Returns:
        The transformed text.
    """
    for search, replace in tokens:
        text = text.replace(f"{begin_token}{search}{end_token}", replace)
    return text


def replace_tokens(
    files: Iterable[str],
    begin_token: str,
    end_token: str,
    tokens: TokenMap,
) -> list[str]:
    """Replace tokens in every given file, rewriting each one in place.

    Args:
        files: Paths of the files to rewrite.
        begin_token: Decoration expected before each search string.
        end_token: Decoration expected after each search string.
        tokens: Ordered ``(search, replace)`` pairs.

    Returns:
        The list of rewritten file paths.

    Raises:
        OSError: If a file cannot be read or written.
    """
    rewritten = []
    for file_path in files:
        path = Path(file_path)
        with open(path, encoding="utf-8", newline="") as f:
            content = f.read()
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(apply_tokens(content, tokens, begin_token, end_token))
        logger.debug("Replaced tokens in %s", path)
        rewritten.append(str(path))
    return rewritten
