from apexdoc_formatter.code_blocks import (
    extract_code,
    has_comment_prefix,
    strip_comment_prefix,
)


def test_extract_single_line():
    text = "{@code a(); }"
    result = extract_code(text, 0)
    assert result.code == "a();"
    assert result.end_pos == len(text)


def test_extract_keeps_nested_braces():
    text = "{@code if (x) { y(); } } after"
    result = extract_code(text, 0)
    assert result.code == "if (x) { y(); }"
    assert text[result.end_pos:] == " after"


def test_extract_multiline_strips_prefixes():
    text = "{@code\n * if (a) {\n *   b();\n * }\n }"
    result = extract_code(text, 0)
    assert result.code == "if (a) {\n  b();\n}"
    assert result.end_pos == len(text)


def test_extract_keeps_inner_blank_lines():
    text = "{@code\n * a();\n *\n * b();\n }"
    assert extract_code(text, 0).code == "a();\n\nb();"


def test_unbalanced_braces_return_none():
    assert extract_code("{@code unmatched braces", 0) is None
    assert extract_code("{@code if (x) { y(); }", 0) is None


def test_nothing_after_tag_returns_none():
    assert extract_code("{@code", 0) is None
    assert extract_code("{@code   \n  ", 0) is None


def test_requires_code_tag_at_position():
    assert extract_code("x {@code a}", 0) is None
    assert extract_code("{@codex a}", 0) is None
    assert extract_code("x {@code a}", 2).code == "a"


def test_empty_code_tag():
    result = extract_code("{@code}", 0)
    assert result.code == ""
    assert result.end_pos == 7


def test_comment_prefix_helpers():
    assert strip_comment_prefix("   * text") == "text"
    assert strip_comment_prefix(" *   indented") == "  indented"
    assert has_comment_prefix(" * x")
    assert not has_comment_prefix("text")
