"""Index arithmetic over comment text.

Every function here is total: a position outside the text yields ``None``
instead of raising.
"""

from typing import Optional


def _in_range(text: str, pos: int, allow_end: bool = False) -> bool:
    limit = len(text) if allow_end else len(text) - 1
    return 0 <= pos <= limit


def skip_whitespace(text: str, pos: int) -> Optional[int]:
    """Index of the first non-whitespace character at or after `pos`."""
    if not _in_range(text, pos, allow_end=True):
        return None
    for index in range(pos, len(text)):
        if not text[index].isspace():
            return index
    return None


def find_matching_close(
    text: str, open_pos: int, open_char: str = "{", close_char: str = "}"
) -> Optional[int]:
    """Index of the closer that balances the opener at `open_pos`."""
    if not _in_range(text, open_pos) or text[open_pos] != open_char:
        return None
    depth = 0
    for index in range(open_pos, len(text)):
        char = text[index]
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return index
    return None


def line_start(text: str, pos: int) -> Optional[int]:
    if not _in_range(text, pos, allow_end=True):
        return None
    return text.rfind("\n", 0, pos) + 1


def count_newlines_before(text: str, pos: int) -> Optional[int]:
    if not _in_range(text, pos, allow_end=True):
        return None
    return text.count("\n", 0, pos)


def find_closing_marker(text: str, pos: int, marker: str = "*/") -> Optional[int]:
    """Index of the next `marker` at or after `pos`."""
    if not _in_range(text, pos, allow_end=True):
        return None
    index = text.find(marker, pos)
    return index if index != -1 else None
