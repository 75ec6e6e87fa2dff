import random

import pytest

from apexdoc_formatter.errors import CodePrinterError, ConfigurationError
from apexdoc_formatter.models import FormatterConfig
from apexdoc_formatter.pipeline import DocCommentFormatter


class FailingPrinter:
    def format(self, source_text, options):
        raise CodePrinterError("does not parse")


@pytest.fixture
def formatter():
    return DocCommentFormatter(FormatterConfig(format_code=False))


def test_tag_continuation_joined(formatter):
    result = formatter.format_comment("/** @param input The input\n * continuation line\n */")
    assert result == "/**\n * @param input The input continuation line\n */"


def test_single_line_comment_untouched(formatter):
    assert formatter.format_comment("/** Short. */") == "/** Short. */"


def test_unbalanced_code_left_as_written(formatter):
    comment = "/**\n * {@code unmatched braces\n */"
    assert formatter.format_comment(comment) == comment


def test_empty_comment(formatter):
    assert formatter.format_comment("/**\n *\n *\n */") == "/**\n */"


def test_marker_runs_collapse(formatter):
    assert formatter.format_comment("/***\n * Hello\n **/") == "/**\n * Hello\n */"


def test_missing_line_markers_added(formatter):
    result = formatter.format_comment("/**\n   Hello world\n   more text\n */")
    assert result == "/**\n * Hello world more text\n */"


def test_tag_and_group_names_normalized(formatter):
    result = formatter.format_comment("/**\n * @Param x value\n * @RETURN nothing\n * @group class utilities\n */")
    assert result == (
        "/**\n"
        " * @param x value\n"
        " * @return nothing\n"
        " * @group Class utilities\n"
        " */"
    )


def test_blank_lines_collapse(formatter):
    result = formatter.format_comment("/**\n * First.\n *\n *\n *\n * Second.\n */")
    assert result == "/**\n * First.\n *\n * Second.\n */"


def test_base_indent(formatter):
    assert formatter.format_comment("/**\n * Hi\n */", base_indent=4) == "    /**\n     * Hi\n     */"


def test_long_paragraph_wrapped():
    formatter = DocCommentFormatter(FormatterConfig(print_width=40, format_code=False))
    words = " ".join(["lorem", "ipsum", "dolor", "sit", "amet"] * 10)
    result = formatter.format_comment(f"/**\n * {words}\n */")
    lines = result.split("\n")
    assert len(lines) > 3
    assert all(len(line) <= 40 for line in lines)
    body = " ".join(line[3:] for line in lines[1:-1])
    assert body == words


COMMENTS = [
    "/**\n * Summary line.\n * Another sentence that keeps going\n * @param a the first\n *   continued here\n * @return nothing\n */",
    "/**\n * Returns @return the value\n */",
    "/**\n *\n * text after blank\n *\n *\n * @throws Error when bad\n */",
    "/**\n * {@code a(); }\n * trailing text\n */",
    "/**\n * {@code never closed\n * @param x y\n */",
    "/**\n * " + "wrapping " * 30 + "\n * @param name " + "long " * 30 + "\n */",
]


@pytest.mark.parametrize("comment", COMMENTS)
def test_formatting_is_idempotent(formatter, comment):
    once = formatter.format_comment(comment)
    assert formatter.format_comment(once) == once


def test_mid_line_tags_settle_in_one_call():
    formatter = DocCommentFormatter(FormatterConfig(print_width=40, format_code=False))
    comment = "/**\n * @return alpha\n * alpha @param value\n * Epsilon @return\n */"
    once = formatter.format_comment(comment)
    assert once == "/**\n * @return alpha alpha\n * @param value Epsilon\n * @return\n */"
    assert formatter.format_comment(once) == once


WORDS = ["alpha", "beta", "Gamma", "delta", "Epsilon", "zeta", "@param value", "@return", "{@link Foo}"]


def generated_comment(seed):
    rng = random.Random(seed)
    lines = []
    for number in range(rng.randint(2, 7)):
        if lines and rng.random() < 0.15:
            lines.append(" *")
            continue
        words = [rng.choice(WORDS) for _ in range(rng.randint(1, 5))]
        words.insert(rng.randint(0, len(words)), f"item{number}")
        lines.append(" * " + " ".join(words))
    return "/**\n" + "\n".join(lines) + "\n */"


@pytest.mark.parametrize("seed", range(40))
@pytest.mark.parametrize("width", [30, 40, 80])
def test_generated_comments_are_idempotent(seed, width):
    formatter = DocCommentFormatter(FormatterConfig(print_width=width, format_code=False))
    once = formatter.format_comment(generated_comment(seed))
    assert formatter.format_comment(once) == once


def test_indent_text_used_verbatim(formatter):
    result = formatter.format_comment("/**\n * Hi\n */", base_indent=2, indent_text="\t")
    assert result == "\t/**\n\t * Hi\n\t */"


def test_failed_code_block_kept():
    formatter = DocCommentFormatter(FormatterConfig(), printer=FailingPrinter())
    result = formatter.format_comment("/**\n * {@code\n * a(   );\n *\n *\n * b();\n * }\n */")
    assert " * a(   );\n *\n *\n * b();" in result


def test_code_block_with_tree_sitter_printer():
    formatter = DocCommentFormatter(FormatterConfig())
    result = formatter.format_comment("/**\n * Example:\n * {@code Integer x = 1; System.debug(x); }\n */")
    assert result == (
        "/**\n"
        " * Example:\n"
        " * {@code\n"
        " * Integer x = 1;\n"
        " * System.debug(x);\n"
        " * }\n"
        " */"
    )
    assert formatter.format_comment(result) == result


@pytest.mark.parametrize("width", [None, 0, -5])
def test_invalid_width_rejected(width):
    with pytest.raises(ConfigurationError):
        DocCommentFormatter(FormatterConfig(print_width=width))
