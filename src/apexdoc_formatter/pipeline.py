from dataclasses import replace
from typing import List, Optional

from .logging import get_logger
from .markers import extract_body, is_doc_comment, normalize_markers
from .models import Comment, CommentLayout, FormatterConfig, Segment, TagEntry
from .names import GROUP, TAG, NameNormalizer, TableNormalizer
from .segmenter import ConsumedLines, segment
from .serializer import serialize
from .snippets import CodePrinter, SnippetFormatter, format_code_blocks
from .wrapping import wrap_segments

logger = get_logger("pipeline")

MAX_PASSES = 4

__all__ = ["DocCommentFormatter", "is_doc_comment", "normalize_tag_names"]


def normalize_tag_names(segments: List[Segment], normalizer: NameNormalizer) -> List[Segment]:
    """Canonical tag spellings, plus the group name that opens ``@group`` content."""
    result = []
    for seg in segments:
        if isinstance(seg, TagEntry):
            name = normalizer.normalize(TAG, seg.name.lower())
            content = seg.content
            if name == "group" and content:
                first, _, rest = content.partition(" ")
                group = normalizer.normalize(GROUP, first)
                content = f"{group} {rest}" if rest else group
            seg = replace(seg, name=name, content=content)
        result.append(seg)
    return result


class DocCommentFormatter:
    """Formats a single ``/** ... */`` comment."""

    def __init__(
        self,
        config: FormatterConfig,
        printer: Optional[CodePrinter] = None,
        normalizer: Optional[NameNormalizer] = None,
    ):
        self.config = config.validate()
        self.normalizer = normalizer or TableNormalizer.default()
        if printer is None and config.format_code:
            from .printer import TreeSitterPrinter

            printer = TreeSitterPrinter()
        self.printer = printer

    def parse(
        self, comment_text: str, base_indent: int = 0, indent_text: Optional[str] = None
    ) -> Comment:
        layout = CommentLayout.from_config(self.config, base_indent, indent_text)
        body = extract_body(normalize_markers(comment_text))
        segments = segment(body, ConsumedLines())
        segments = normalize_tag_names(segments, self.normalizer)
        if self.printer is not None and self.config.format_code:
            snippets = SnippetFormatter(
                self.printer, self.config, self.normalizer, print_width=layout.effective_width
            )
            segments = format_code_blocks(segments, snippets)
        return Comment(segments=wrap_segments(segments, layout), layout=layout)

    def format_comment(
        self, comment_text: str, base_indent: int = 0, indent_text: Optional[str] = None
    ) -> str:
        """Return the formatted comment, its first line indented by `base_indent` columns.

        `indent_text`, when given, is used verbatim as the indentation of every
        line instead of one built from `base_indent`. Text that is not a
        multi-line documentation comment is returned as is.
        """
        if not is_doc_comment(comment_text):
            return comment_text
        result = self._format_once(comment_text, base_indent, indent_text)
        for _ in range(MAX_PASSES - 1):
            again = self._format_once(result, base_indent, indent_text)
            if again == result:
                return result
            logger.debug("Formatting pass changed the comment again; reformatting")
            result = again
        logger.debug("Comment did not settle after %d passes", MAX_PASSES)
        return result

    def _format_once(self, comment_text: str, base_indent: int, indent_text: Optional[str]) -> str:
        comment = self.parse(comment_text, base_indent, indent_text)
        return serialize(comment.segments, comment.layout)
