from dataclasses import dataclass, field
from typing import List, Optional, Union

from .errors import ConfigurationError
from .indentation import create_indent


@dataclass
class FormatterConfig:
    print_width: Optional[int] = 80
    tab_width: int = 2
    use_tabs: Optional[bool] = None
    format_code: bool = True

    def validate(self) -> "FormatterConfig":
        """Raise ConfigurationError unless the layout options are usable."""
        if self.print_width is None:
            raise ConfigurationError("print_width is required")
        if isinstance(self.print_width, bool) or not isinstance(self.print_width, int):
            raise ConfigurationError(f"print_width must be an integer, got {self.print_width!r}")
        if self.print_width <= 0:
            raise ConfigurationError(f"print_width must be positive, got {self.print_width}")
        if isinstance(self.tab_width, bool) or not isinstance(self.tab_width, int) or self.tab_width <= 0:
            raise ConfigurationError(f"tab_width must be a positive integer, got {self.tab_width!r}")
        return self


@dataclass(frozen=True)
class LayoutOptions:
    """Options handed to a code printer."""
    print_width: int
    tab_width: int
    use_tabs: Optional[bool] = None


@dataclass(frozen=True)
class CommentLayout:
    """Geometry of one comment: where it sits and how wide it may grow."""
    base_indent: int
    print_width: int
    tab_width: int = 2
    use_tabs: Optional[bool] = None
    indent_text: Optional[str] = None

    @classmethod
    def from_config(
        cls, config: FormatterConfig, base_indent: int = 0, indent_text: Optional[str] = None
    ) -> "CommentLayout":
        return cls(
            base_indent=max(0, base_indent),
            print_width=config.print_width,
            tab_width=config.tab_width,
            use_tabs=config.use_tabs,
            indent_text=indent_text,
        )

    @property
    def indent(self) -> str:
        if self.indent_text is not None:
            return self.indent_text
        return create_indent(self.base_indent, self.tab_width, self.use_tabs)

    @property
    def line_prefix(self) -> str:
        return self.indent + " * "

    @property
    def blank_line(self) -> str:
        return self.indent + " *"

    @property
    def effective_width(self) -> int:
        # columns left after the indent and the " * " marker
        return self.print_width - (self.base_indent + 3)


# Segments


@dataclass(frozen=True)
class TextSegment:
    """Prose lines left over around tags."""
    content: str
    lines: tuple = ()
    blank_before: bool = False
    preformatted: bool = False


@dataclass(frozen=True)
class ParagraphSegment:
    content: str
    lines: tuple = ()
    blank_before: bool = False
    preformatted: bool = False


@dataclass(frozen=True)
class TagEntry:
    name: str
    content: str
    preceding_text: Optional[str] = None
    blank_before: bool = False


@dataclass(frozen=True)
class CodeBlock:
    raw_code: str
    start_offset: int
    end_offset: int
    formatted_code: Optional[str] = None
    format_failed: bool = False
    blank_before: bool = False

    def __post_init__(self):
        if self.start_offset >= self.end_offset:
            raise ValueError(
                f"code block span must be non-empty: {self.start_offset}..{self.end_offset}"
            )

    @property
    def code(self) -> str:
        return self.formatted_code if self.formatted_code is not None else self.raw_code


Segment = Union[TextSegment, ParagraphSegment, TagEntry, CodeBlock]


@dataclass
class Comment:
    segments: List[Segment]
    layout: CommentLayout


@dataclass
class FormatResult:
    source: str
    modified: bool
    errors: List[str] = field(default_factory=list)
    file_path: str = ""


@dataclass
class FormatResults:
    results: List[FormatResult]
    total_files: int
    modified_files: int
    error_files: int
