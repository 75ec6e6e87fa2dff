import re

OPEN_MARKER = "/**"
CLOSE_MARKER = "*/"

_OPEN_RUN = re.compile(r"^/\*{3,}")
_CLOSE_RUN = re.compile(r"[ \t]*\*{2,}/$")


def is_doc_comment(text: str) -> bool:
    """True for a multi-line ``/** ... */`` comment.

    Single-line doc comments are left alone by the formatter.
    """
    stripped = text.strip()
    if not stripped.startswith(OPEN_MARKER) or stripped.startswith("/**/"):
        return False
    if not stripped.endswith(CLOSE_MARKER) or len(stripped) < 5:
        return False
    return "\n" in stripped


def normalize_markers(text: str) -> str:
    """Collapse ``/***`` openers to ``/**`` and ``**/`` closers to ``*/``."""
    text = _OPEN_RUN.sub(OPEN_MARKER, text.strip())
    match = _CLOSE_RUN.search(text)
    if match and match.start() >= len(OPEN_MARKER):
        text = text[: match.start()] + " " + CLOSE_MARKER
    return text


def extract_body(text: str) -> str:
    """Text between the opening and closing markers of a normalized comment."""
    if not text.startswith(OPEN_MARKER):
        raise ValueError("not a documentation comment")
    end = text.rfind(CLOSE_MARKER)
    if end < len(OPEN_MARKER):
        raise ValueError("documentation comment is not terminated")
    return text[len(OPEN_MARKER):end]
