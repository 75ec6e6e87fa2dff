from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Transformation:
    """Replace source[start_byte:end_byte] with new_content.

    Offsets index the Python string, not its UTF-8 encoding.
    """
    start_byte: int
    end_byte: int
    new_content: str
    priority: int = 0


@dataclass
class FormattingContext:
    source: str
    file_path: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def lines(self) -> List[str]:
        return self.source.splitlines(keepends=True)


class FormattingRule(ABC):
    @property
    @abstractmethod
    def rule_id(self) -> str:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def analyze(self, context: FormattingContext) -> List[Transformation]:
        """Return the edits this rule wants applied to context.source."""
        pass


class TextRule(FormattingRule):
    """Rule that works on raw source text without a parse tree."""


def apply_transformations(source: str, transforms: List[Transformation]) -> str:
    """Splice non-overlapping transformations into `source` in one pass.

    Edits are taken in descending start order, so every splice happens at
    offsets the later ones have not moved. An edit overlapping one already
    taken is dropped.
    """
    ordered = sorted(transforms, key=lambda t: (t.start_byte, t.end_byte, t.priority), reverse=True)
    pieces = []
    boundary = len(source)
    for t in ordered:
        if t.end_byte > boundary or t.start_byte > t.end_byte:
            continue
        pieces.append(source[t.end_byte:boundary])
        pieces.append(t.new_content)
        boundary = t.start_byte
    pieces.append(source[:boundary])
    return "".join(reversed(pieces))
