from .base import FormattingContext, FormattingRule, TextRule, Transformation, apply_transformations
from .doc_comments import DocCommentRule, find_doc_comments

__all__ = [
    "FormattingContext",
    "FormattingRule",
    "TextRule",
    "Transformation",
    "apply_transformations",
    "DocCommentRule",
    "find_doc_comments",
]
