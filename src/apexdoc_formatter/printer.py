"""Default code printer for ``{@code}`` snippets.

Apex has no grammar package on the index, so snippets are parsed with the Java
grammar, which covers the class, method and statement syntax the two are
known to share. Anything the grammar rejects raises CodePrinterError and the
snippet is kept as written.
"""

import re
from typing import Dict, List

from tree_sitter import Language, Node, Parser

from .errors import CodePrinterError
from .indentation import create_indent, leading_whitespace
from .models import LayoutOptions
from .rules.base import Transformation, apply_transformations

BLOCK_TYPES = (
    "block",
    "class_body",
    "interface_body",
    "enum_body",
    "constructor_body",
    "switch_block",
)

_SKIPPED_CHILDREN = ("{", "}", ";", "line_comment", "block_comment")


class TreeSitterPrinter:
    """Lays out source text by walking a tree-sitter parse."""

    def __init__(self):
        self._parser = None

    @property
    def parser(self) -> Parser:
        if self._parser is None:
            import tree_sitter_java as tsjava

            self._parser = Parser(Language(tsjava.language()))
        return self._parser

    def format(self, source_text: str, options: LayoutOptions) -> str:
        text = source_text.replace("\r\n", "\n")
        root = self._parse(text)
        if root.has_error:
            raise CodePrinterError("source does not parse")

        for layout_pass in (self._expand_blocks, self._split_statements):
            text = apply_transformations(text, layout_pass(root, text))
            root = self._parse(text)

        text = "\n".join(line.rstrip() for line in text.split("\n"))
        root = self._parse(text)
        text = apply_transformations(text, self._indent(root, text, options))
        text = re.sub(r"\n{3,}", "\n\n", text)
        return text.strip("\n") + "\n"

    def _parse(self, text: str) -> Node:
        return self.parser.parse(text.encode("utf-8")).root_node

    def _expand_blocks(self, root: Node, text: str) -> List[Transformation]:
        """Move block contents off the lines holding their braces."""
        offsets = _CharOffsets(text)
        transformations = []

        def traverse(node):
            if node.type in BLOCK_TYPES and node.named_child_count > 0:
                open_brace = node.children[0] if node.children[0].type == "{" else None
                close_brace = node.children[-1] if node.children[-1].type == "}" else None
                if open_brace:
                    end = offsets.char(open_brace.end_byte)
                    line_end = text.find("\n", end)
                    after = text[end:line_end if line_end != -1 else len(text)].strip()
                    if after and not after.startswith(("//", "/*")):
                        transformations.append(Transformation(end, end, "\n"))
                if close_brace:
                    start = offsets.char(close_brace.start_byte)
                    before = text[text.rfind("\n", 0, start) + 1:start].strip()
                    if before:
                        transformations.append(Transformation(start, start, "\n"))
            for child in node.children:
                traverse(child)

        traverse(root)
        return transformations

    def _split_statements(self, root: Node, text: str) -> List[Transformation]:
        """Put each statement or member of a block on its own line."""
        offsets = _CharOffsets(text)
        transformations = []

        def traverse(node):
            if node.type in BLOCK_TYPES or node.type == "program":
                previous = None
                for child in node.children:
                    if child.type in _SKIPPED_CHILDREN:
                        if child.type == "{":
                            previous = None
                        continue
                    if previous is not None and child.start_point[0] == previous.end_point[0]:
                        start = offsets.char(child.start_byte)
                        pos = start
                        while pos > 0 and text[pos - 1] in " \t":
                            pos -= 1
                        transformations.append(Transformation(pos, start, "\n"))
                    previous = child
            for child in node.children:
                traverse(child)

        traverse(root)
        return transformations

    def _indent(self, root: Node, text: str, options: LayoutOptions) -> List[Transformation]:
        """Indent every line that starts a node by its block depth."""
        line_depths: Dict[int, int] = {}

        def traverse(node, depth):
            row = node.start_point[0]
            if depth > line_depths.get(row, -1):
                line_depths[row] = depth
            is_indenter = node.type in BLOCK_TYPES
            for child in node.children:
                if child.type in ("{", "}"):
                    traverse(child, depth)
                else:
                    traverse(child, depth + 1 if is_indenter else depth)
            # closing brace goes back to the block's own depth
            if is_indenter and node.children and node.children[-1].type == "}":
                line_depths[node.children[-1].start_point[0]] = depth

        traverse(root, 0)

        transformations = []
        lines = text.split("\n")
        line_start = 0
        for row, line in enumerate(lines):
            if row in line_depths and line.strip():
                current = leading_whitespace(line)
                target = create_indent(
                    line_depths[row] * options.tab_width, options.tab_width, options.use_tabs
                )
                if current != target:
                    transformations.append(
                        Transformation(line_start, line_start + len(current), target)
                    )
            line_start += len(line) + 1
        return transformations


class _CharOffsets:
    """Maps tree-sitter byte offsets onto string indices."""

    def __init__(self, text: str):
        self._data = text.encode("utf-8")
        self._ascii = len(self._data) == len(text)

    def char(self, byte_offset: int) -> int:
        if self._ascii:
            return byte_offset
        return len(self._data[:byte_offset].decode("utf-8", errors="ignore"))
