"""Bridge between ``{@code}`` blocks and an external code printer.

Snippets are rarely complete compilation units, so each one is wrapped in a
throwaway class before printing and unwrapped again afterwards.
"""

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Protocol

from .errors import CodePrinterError
from .indentation import create_indent, get_indent_level
from .logging import get_logger
from .models import CodeBlock, FormatterConfig, LayoutOptions, Segment
from .names import ANNOTATION, NameNormalizer, TableNormalizer

logger = get_logger("snippets")

CONTAINER_CLASS = "public class Temp"
MEMBER_SIGNATURE = "void method()"

_ANNOTATION_NAME = re.compile(r"(?<![\w.@])@([A-Za-z_][A-Za-z0-9_]*)")


class CodePrinter(Protocol):
    def format(self, source_text: str, options: LayoutOptions) -> str:
        """Lay out a complete compilation unit; raise CodePrinterError when it cannot."""
        ...


class SnippetShape(Enum):
    ANNOTATION = "annotation"
    STATEMENT = "statement"

    @classmethod
    def detect(cls, code: str) -> "SnippetShape":
        return cls.ANNOTATION if code.lstrip().startswith("@") else cls.STATEMENT

    def wrap(self, code: str) -> str:
        if self is SnippetShape.ANNOTATION:
            return f"{CONTAINER_CLASS} {{\n{code}\n{MEMBER_SIGNATURE} {{}}\n}}"
        return f"{CONTAINER_CLASS} {{\n{MEMBER_SIGNATURE} {{\n{code}\n}}\n}}"


@dataclass(frozen=True)
class SnippetResult:
    code: str
    failed: bool = False


def normalize_annotation_names(code: str, normalizer: NameNormalizer) -> str:
    return _ANNOTATION_NAME.sub(
        lambda match: "@" + normalizer.normalize(ANNOTATION, match.group(1)), code
    )


def unwrap(printed: str, shape: SnippetShape, tab_width: int, use_tabs: Optional[bool]) -> str:
    """Recover the snippet from a printed container.

    Raises CodePrinterError when the printed text does not have the layout the
    container implies.
    """
    lines = printed.split("\n")
    if shape is SnippetShape.STATEMENT:
        body, member_indent = _method_body(lines, tab_width)
    else:
        body, member_indent = _class_members(lines, tab_width)

    base = member_indent + tab_width
    reindented = []
    for line in body:
        if not line.strip():
            reindented.append("")
            continue
        level = max(0, get_indent_level(line, tab_width) - base)
        reindented.append(create_indent(level, tab_width, use_tabs) + line.strip())

    while reindented and not reindented[0]:
        reindented.pop(0)
    while reindented and not reindented[-1]:
        reindented.pop()
    return "\n".join(reindented)


def _find_line(lines: List[str], needle: str) -> int:
    for index, line in enumerate(lines):
        if needle in line:
            return index
    raise CodePrinterError(f"printed container lost {needle!r}")


def _brace_delta(line: str) -> int:
    return line.count("{") - line.count("}")


def _method_body(lines: List[str], tab_width: int):
    start = _find_line(lines, MEMBER_SIGNATURE)
    depth = _brace_delta(lines[start])
    if depth != 1:
        raise CodePrinterError("container method body is not on its own lines")
    body = []
    for line in lines[start + 1:]:
        depth += _brace_delta(line)
        if depth <= 0:
            return body, get_indent_level(lines[start], tab_width)
        body.append(line)
    raise CodePrinterError("container method is not closed")


def _class_members(lines: List[str], tab_width: int):
    start = _find_line(lines, CONTAINER_CLASS)
    if _brace_delta(lines[start]) != 1:
        raise CodePrinterError("container class body is not on its own lines")
    member_indent = get_indent_level(lines[start], tab_width)
    depth = 0
    body = []
    for line in lines[start + 1:]:
        if depth == 0 and (MEMBER_SIGNATURE in line or line.strip() == "}"):
            return body, member_indent
        body.append(line)
        depth += _brace_delta(line)
    raise CodePrinterError("container class is not closed")


class SnippetFormatter:
    """Formats one snippet at a time through a code printer."""

    def __init__(
        self,
        printer: CodePrinter,
        config: FormatterConfig,
        normalizer: Optional[NameNormalizer] = None,
        print_width: Optional[int] = None,
    ):
        self.printer = printer
        self.config = config
        self.normalizer = normalizer or TableNormalizer.default()
        self.options = LayoutOptions(
            print_width=print_width if print_width is not None else config.print_width,
            tab_width=config.tab_width,
            use_tabs=config.use_tabs,
        )

    def format(self, raw_code: str) -> SnippetResult:
        if not raw_code.strip():
            return SnippetResult(raw_code)
        code = normalize_annotation_names(raw_code, self.normalizer)
        shape = SnippetShape.detect(code)
        try:
            printed = self.printer.format(shape.wrap(code), self.options)
            formatted = unwrap(printed, shape, self.config.tab_width, self.config.use_tabs)
        except Exception as e:
            logger.debug("Keeping code block as written, printer failed: %s", e)
            return SnippetResult(raw_code, failed=True)
        if not formatted.strip():
            logger.debug("Keeping code block as written, printer returned no code")
            return SnippetResult(raw_code, failed=True)
        return SnippetResult(formatted)


def format_code_blocks(segments: List[Segment], formatter: SnippetFormatter) -> List[Segment]:
    """Run every code block through `formatter`, last block first.

    Blocks are handled one at a time in reverse source order so that each
    replacement leaves the offsets of the blocks before it intact.
    """
    result = list(segments)
    indexed = [(i, s) for i, s in enumerate(result) if isinstance(s, CodeBlock)]
    for index, block in sorted(indexed, key=lambda item: item[1].start_offset, reverse=True):
        outcome = formatter.format(block.raw_code)
        result[index] = replace(block, formatted_code=outcome.code, format_failed=outcome.failed)
    return result
