import re
import textwrap
from dataclasses import dataclass
from typing import Optional

from .scanner import find_matching_close, skip_whitespace

CODE_TAG = "{@code"
EMPTY_CODE_TAG = "{@code}"

_COMMENT_PREFIX = re.compile(r"^[ \t]*\*+[ \t]?")


@dataclass(frozen=True)
class ExtractedCode:
    code: str
    end_pos: int


def has_comment_prefix(line: str) -> bool:
    return _COMMENT_PREFIX.match(line) is not None


def strip_comment_prefix(line: str) -> str:
    """Drop a leading ``*`` marker run and at most one space after it."""
    return _COMMENT_PREFIX.sub("", line, count=1)


def is_code_tag_at(text: str, pos: int) -> bool:
    if not text.startswith(CODE_TAG, pos):
        return False
    after = pos + len(CODE_TAG)
    # {@codex is some other inline tag
    return after == len(text) or text[after].isspace() or text[after] == "}"


def extract_code(text: str, marker_pos: int) -> Optional[ExtractedCode]:
    """Extract the code of the ``{@code ...}`` tag starting at `marker_pos`.

    Returns None when there is no code tag at `marker_pos`, when nothing but
    whitespace follows the tag, or when its braces never balance. The tag's own
    opening brace counts as depth one, so nested braces in the code are kept.
    """
    if not is_code_tag_at(text, marker_pos):
        return None
    content_start = marker_pos + len(CODE_TAG)
    if skip_whitespace(text, content_start) is None:
        return None
    close = find_matching_close(text, marker_pos, "{", "}")
    if close is None:
        return None

    raw_lines = text[content_start:close].split("\n")
    # the first line follows the tag directly and carries no marker
    lines = [raw_lines[0].rstrip()]
    lines.extend(strip_comment_prefix(line).rstrip() for line in raw_lines[1:])

    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    code = textwrap.dedent("\n".join(line if line.strip() else "" for line in lines)).strip()
    return ExtractedCode(code=code, end_pos=close + 1)
