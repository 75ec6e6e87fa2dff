from typing import List, Optional, Tuple

from ..indentation import get_indent_level
from ..logging import get_logger
from ..markers import is_doc_comment
from ..models import FormatterConfig
from ..pipeline import DocCommentFormatter
from ..scanner import find_closing_marker
from .base import FormattingContext, TextRule, Transformation

logger = get_logger("doc_comments")


def find_doc_comments(source: str) -> List[Tuple[int, int]]:
    """Spans of every ``/** ... */`` comment outside string literals and line comments."""
    spans = []
    index = 0
    length = len(source)
    while index < length:
        char = source[index]
        if char == "'":
            index += 1
            while index < length and source[index] not in "'\n":
                index += 2 if source[index] == "\\" else 1
            index += 1
        elif source.startswith("//", index):
            newline = source.find("\n", index)
            index = length if newline == -1 else newline
        elif source.startswith("/*", index):
            close = find_closing_marker(source, index + 2, "*/")
            if close is None:
                logger.debug("Unterminated block comment at offset %d", index)
                break
            end = close + 2
            if source.startswith("/**", index) and not source.startswith("/**/", index):
                spans.append((index, end))
            index = end
        else:
            index += 1
    return spans


class DocCommentRule(TextRule):
    """Reformats every multi-line documentation comment in a file."""

    def __init__(self, config: FormatterConfig, formatter: Optional[DocCommentFormatter] = None):
        self.config = config
        self.formatter = formatter or DocCommentFormatter(config)

    @property
    def rule_id(self) -> str: return "D001"
    @property
    def name(self) -> str: return "doc-comment"

    def analyze(self, context: FormattingContext) -> List[Transformation]:
        source = context.source
        transformations = []
        for start, end in find_doc_comments(source):
            comment = source[start:end]
            if not is_doc_comment(comment):
                continue
            line_start = source.rfind("\n", 0, start) + 1
            leading = source[line_start:start]
            own_line = not leading.strip()
            if own_line:
                indent = get_indent_level(leading, self.config.tab_width)
            else:
                indent = len(leading.expandtabs(self.config.tab_width))

            # without a tab preference the comment keeps the whitespace it was written with
            indent_text = leading if own_line and self.config.use_tabs is None else None
            formatted = self.formatter.format_comment(comment, indent, indent_text)
            if own_line:
                replace_from, new_content = line_start, formatted
            else:
                replace_from, new_content = start, formatted.lstrip()
            if source[replace_from:end] != new_content:
                transformations.append(Transformation(replace_from, end, new_content))
        return transformations
