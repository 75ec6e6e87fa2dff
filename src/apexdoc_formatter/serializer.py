import re
from typing import List

from .code_blocks import EMPTY_CODE_TAG
from .markers import OPEN_MARKER
from .models import CodeBlock, CommentLayout, ParagraphSegment, Segment, TagEntry, TextSegment
from .wrapping import display_width

ACCESS_MODIFIERS = ("public", "private", "protected", "static", "final", "global")

_MODIFIER_START = re.compile(r"^(?:%s)\b" % "|".join(ACCESS_MODIFIERS), re.IGNORECASE)


def serialize(segments: List[Segment], layout: CommentLayout) -> str:
    """Render segments as a complete ``/** ... */`` comment."""
    output = [layout.indent + OPEN_MARKER]
    emitted = False
    for segment in segments:
        lines = _trim_trailing_blank(render_segment(segment, layout))
        if not lines:
            continue
        if segment.blank_before and emitted:
            output.append(layout.blank_line)
        output.extend(_prefixed(line, layout) for line in lines)
        emitted = True
    output.append(layout.indent + " */")
    return "\n".join(output)


def render_segment(segment: Segment, layout: CommentLayout) -> List[str]:
    """Logical lines of one segment, without comment markers."""
    if isinstance(segment, (TextSegment, ParagraphSegment)):
        if segment.lines:
            return list(segment.lines)
        return [segment.content] if segment.content else []
    if isinstance(segment, TagEntry):
        return _render_tag(segment)
    if isinstance(segment, CodeBlock):
        return _render_code(segment, layout)
    raise TypeError(f"unknown segment type: {type(segment).__name__}")


def _render_tag(entry: TagEntry) -> List[str]:
    lines = []
    if entry.preceding_text:
        lines.extend(line.strip() for line in entry.preceding_text.split("\n") if line.strip())
    content_lines = entry.content.split("\n") if entry.content else [""]
    first = content_lines[0].strip()
    lines.append(f"@{entry.name} {first}" if first else f"@{entry.name}")
    lines.extend(line.strip() for line in content_lines[1:])
    return lines


def _render_code(block: CodeBlock, layout: CommentLayout) -> List[str]:
    code = block.code
    if not code.strip():
        return [EMPTY_CODE_TAG]
    code_lines = [line.rstrip() for line in code.split("\n")]
    if not block.format_failed:
        code_lines = apply_code_blank_lines(code_lines)
    if len(code_lines) == 1:
        single = f"{{@code {code_lines[0].strip()} }}"
        if display_width(single) <= layout.effective_width:
            return [single]
    return ["{@code", *code_lines, "}"]


def starts_with_access_modifier(line: str) -> bool:
    return _MODIFIER_START.match(line.strip()) is not None


def apply_code_blank_lines(lines: List[str]) -> List[str]:
    """Collapse blank runs and separate a closing brace from a following member."""
    result: List[str] = []
    for index, line in enumerate(lines):
        if not line.strip():
            if result and result[-1] != "":
                result.append("")
            continue
        result.append(line)
        if line.rstrip().endswith("}") and index + 1 < len(lines):
            following = lines[index + 1].strip()
            if following.startswith("@") or starts_with_access_modifier(following):
                result.append("")
    return _trim_trailing_blank(result)


def _trim_trailing_blank(lines: List[str]) -> List[str]:
    while lines and not lines[-1].strip():
        lines = lines[:-1]
    return lines


def _prefixed(line: str, layout: CommentLayout) -> str:
    if not line.strip():
        return layout.blank_line
    if line.startswith(layout.line_prefix):
        return line
    return layout.line_prefix + line
