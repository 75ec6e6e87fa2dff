"""Split a documentation comment body into typed segments."""

import re
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence, Set

from .code_blocks import CODE_TAG, extract_code, strip_comment_prefix
from .logging import get_logger
from .models import CodeBlock, ParagraphSegment, Segment, TagEntry, TextSegment

logger = get_logger("segmenter")

TAG_PATTERN = re.compile(r"(?:^|(?<=\s))@([A-Za-z_][A-Za-z0-9_]*)")
_SENTENCE_END = (".", "!", "?")


@dataclass(frozen=True)
class Region:
    """A contiguous span of the comment body, either prose or code."""
    kind: str
    start: int
    end: int
    code: Optional[str] = None

    @property
    def is_code(self) -> bool:
        return self.kind == "code"


@dataclass(frozen=True)
class Continuation:
    content: str
    next_index: int


class ConsumedLines:
    """Trimmed line texts already absorbed into a tag's content."""

    def __init__(self, lines: Iterable[str] = ()):
        self._lines: Set[str] = set(lines)

    def add(self, line: str) -> None:
        self._lines.add(line.strip())

    def __contains__(self, line: str) -> bool:
        return line.strip() in self._lines

    def __len__(self) -> int:
        return len(self._lines)


def clean_line(line: str) -> str:
    return strip_comment_prefix(line).strip()


def split_regions(body: str) -> List[Region]:
    """Partition `body` into alternating prose and code regions.

    The regions cover the body exactly, in order, without overlap. A code tag
    whose braces never balance stays inside the surrounding prose.
    """
    regions: List[Region] = []
    prose_start = 0
    search_from = 0
    while True:
        marker = body.find(CODE_TAG, search_from)
        if marker == -1:
            break
        extracted = extract_code(body, marker)
        if extracted is None:
            logger.debug("Leaving unbalanced or empty code tag at offset %d as written", marker)
            search_from = marker + len(CODE_TAG)
            continue
        if marker > prose_start:
            regions.append(Region("prose", prose_start, marker))
        regions.append(Region("code", marker, extracted.end_pos, code=extracted.code))
        prose_start = search_from = extracted.end_pos
    if prose_start < len(body):
        regions.append(Region("prose", prose_start, len(body)))
    return regions


def collect_continuation(
    tag_name: str,
    initial_content: str,
    source_lines: Sequence[str],
    from_index: int,
    consumed: ConsumedLines,
) -> Continuation:
    """Absorb the lines that continue a tag's content.

    Collection stops at a blank line, a line holding another tag anywhere in
    it or a line starting with a code tag. Every absorbed line is recorded in
    `consumed`.
    """
    parts = [initial_content.strip()] if initial_content.strip() else []
    index = from_index
    while index < len(source_lines):
        text = clean_line(source_lines[index])
        if not text or TAG_PATTERN.search(text) or text.startswith(CODE_TAG):
            break
        parts.append(text)
        consumed.add(text)
        index += 1
    if index > from_index:
        logger.debug("@%s absorbed %d continuation line(s)", tag_name, index - from_index)
    return Continuation(content=" ".join(parts), next_index=index)


def split_sentences(lines: Sequence[str]) -> List[List[str]]:
    """Group lines into paragraphs, breaking after a line that ends a sentence
    when the next line starts with an upper-case letter."""
    paragraphs: List[List[str]] = []
    current: List[str] = []
    for line in lines:
        if current and current[-1].endswith(_SENTENCE_END) and line[:1].isupper():
            paragraphs.append(current)
            current = []
        current.append(line)
    if current:
        paragraphs.append(current)
    return paragraphs


class _SegmentBuilder:
    def __init__(self, consumed: ConsumedLines):
        self.consumed = consumed
        self.segments: List[Segment] = []
        self.blank_pending = False

    def emit(self, segment: Segment) -> None:
        if self.blank_pending and self.segments:
            segment = _with_blank_before(segment)
        self.blank_pending = False
        self.segments.append(segment)

    def add_code(self, region: Region) -> None:
        self.emit(CodeBlock(raw_code=region.code, start_offset=region.start, end_offset=region.end))

    def add_prose(self, text: str) -> None:
        raw_lines = text.split("\n")
        last = len(raw_lines) - 1
        block: List[str] = []
        for index, raw in enumerate(raw_lines):
            if clean_line(raw):
                block.append(raw)
                continue
            # the first and last line of a region share a physical line with a
            # comment marker or a code tag, so they are not blank lines
            if index in (0, last):
                continue
            self.add_block(block)
            block = []
            self.blank_pending = True
        self.add_block(block)

    def add_block(self, raw_lines: List[str]) -> None:
        if not raw_lines:
            return
        texts = [clean_line(line) for line in raw_lines]
        if any(CODE_TAG in text for text in texts):
            self.emit(ParagraphSegment(content=" ".join(texts), lines=tuple(texts), preformatted=True))
            return
        if not any(TAG_PATTERN.search(text) for text in texts):
            for paragraph in split_sentences(texts):
                if all(line in self.consumed for line in paragraph):
                    continue
                self.emit(ParagraphSegment(content=" ".join(paragraph), lines=tuple(paragraph)))
            return

        leftovers: List[str] = []
        open_tag: Optional[int] = None
        index = 0
        while index < len(texts):
            text = texts[index]
            matches = list(TAG_PATTERN.finditer(text))
            if not matches:
                leftovers.append(text)
                open_tag = None
                index += 1
                continue
            lead = text[: matches[0].start()].strip()
            if lead and open_tag is not None:
                # text ahead of a mid-line tag still belongs to the tag above it
                previous = self.segments[open_tag]
                self.segments[open_tag] = replace(previous, content=f"{previous.content} {lead}".strip())
                lead = ""
            elif lead and leftovers:
                leftovers.append(lead)
                lead = ""
            self._flush_leftovers(leftovers)
            leftovers = []
            index += 1
            for position, match in enumerate(matches):
                end = matches[position + 1].start() if position + 1 < len(matches) else len(text)
                content = text[match.end():end].strip()
                if position == len(matches) - 1:
                    continuation = collect_continuation(
                        match.group(1), content, raw_lines, index, self.consumed
                    )
                    content = continuation.content
                    index = continuation.next_index
                self.emit(TagEntry(
                    name=match.group(1).lower(),
                    content=content,
                    preceding_text=(lead or None) if position == 0 else None,
                ))
            open_tag = len(self.segments) - 1
        self._flush_leftovers(leftovers)

    def _flush_leftovers(self, lines: List[str]) -> None:
        kept = [line for line in lines if line not in self.consumed]
        if kept:
            self.emit(TextSegment(content=" ".join(kept), lines=tuple(kept)))


def _with_blank_before(segment: Segment) -> Segment:
    return replace(segment, blank_before=True)


def segment(body: str, consumed: Optional[ConsumedLines] = None) -> List[Segment]:
    """Segment a comment body (the text between ``/**`` and ``*/``).

    Input holding nothing but markers and whitespace yields a single empty
    text segment.
    """
    builder = _SegmentBuilder(consumed if consumed is not None else ConsumedLines())
    for region in split_regions(body):
        if region.is_code:
            builder.add_code(region)
        else:
            builder.add_prose(body[region.start:region.end])
    if not builder.segments:
        return [TextSegment(content="", lines=())]
    return builder.segments
