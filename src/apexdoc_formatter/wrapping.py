"""Greedy word wrapping measured in display columns."""

import unicodedata
from dataclasses import replace
from typing import List

from .models import CommentLayout, ParagraphSegment, Segment, TagEntry, TextSegment


def display_width(text: str) -> int:
    """Printable width: East Asian wide characters take two columns, combining marks none."""
    width = 0
    for char in text:
        if unicodedata.combining(char):
            continue
        width += 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
    return width


def wrap(text: str, first_line_width: int, continuation_width: int) -> List[str]:
    """Pack words greedily into lines.

    The first line is limited to `first_line_width`, the rest to
    `continuation_width`. Words are never split: a word wider than the limit
    gets a line of its own, and the first line stays empty when even the first
    word does not fit.
    """
    words = text.split()
    if not words:
        return [text]

    lines: List[str] = []
    current: List[str] = []
    current_width = 0
    limit = first_line_width
    for word in words:
        word_width = display_width(word)
        if current and current_width + 1 + word_width <= limit:
            current.append(word)
            current_width += 1 + word_width
            continue
        if current or not lines and word_width > limit:
            lines.append(" ".join(current))
            limit = continuation_width
        current = [word]
        current_width = word_width
    lines.append(" ".join(current))
    return lines


def wrap_segments(segments: List[Segment], layout: CommentLayout) -> List[Segment]:
    """Wrap prose and tag content to the comment's effective width."""
    width = layout.effective_width
    wrapped: List[Segment] = []
    for segment in segments:
        if isinstance(segment, (TextSegment, ParagraphSegment)):
            if segment.preformatted or not segment.content.strip() or width <= 0:
                wrapped.append(segment)
                continue
            lines = wrap(segment.content, width, width)
            if lines and not lines[0]:
                lines = lines[1:]
            wrapped.append(replace(segment, lines=tuple(lines)))
        elif isinstance(segment, TagEntry):
            wrapped.append(_wrap_tag(segment, width))
        else:
            wrapped.append(segment)
    return wrapped


def _wrap_tag(entry: TagEntry, width: int) -> TagEntry:
    preceding = entry.preceding_text
    if preceding and width > 0:
        lines = [line for line in wrap(preceding, width, width) if line]
        preceding = "\n".join(lines)

    first_width = width - display_width(f"@{entry.name} ")
    content = entry.content
    if content.strip() and first_width > 0:
        content = "\n".join(wrap(content, first_width, width))
    return replace(entry, content=content, preceding_text=preceding)
