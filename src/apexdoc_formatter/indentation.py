import re

_LEADING_WS = re.compile(r"^[ \t]*")


def leading_whitespace(line: str) -> str:
    """Return the run of spaces and tabs that starts a line."""
    return _LEADING_WS.match(line).group(0)


def get_indent_level(text: str, tab_width: int) -> int:
    """Column width of the leading whitespace, expanding tabs to tab stops."""
    column = 0
    for char in leading_whitespace(text):
        if char == "\t":
            column += tab_width - (column % tab_width)
        else:
            column += 1
    return column


def create_indent(columns: int, tab_width: int, use_tabs: bool | None) -> str:
    """Build indentation covering `columns` columns."""
    if columns <= 0:
        return ""
    if use_tabs:
        tabs, spaces = divmod(columns, tab_width)
        return "\t" * tabs + " " * spaces
    return " " * columns
