from apexdoc_formatter.engine import FormatterEngine
from apexdoc_formatter.models import FormatterConfig
from apexdoc_formatter.rules.base import FormattingContext
from apexdoc_formatter.rules.doc_comments import DocCommentRule, find_doc_comments


def make_engine(**options):
    config = FormatterConfig(format_code=False, **options)
    engine = FormatterEngine(config)
    engine.add_rule(DocCommentRule(config))
    return engine


def test_find_doc_comments():
    source = "/**\n * a\n */\nclass A { /* plain */ /** b */ }"
    spans = find_doc_comments(source)
    assert [source[s:e] for s, e in spans] == ["/**\n * a\n */", "/** b */"]


def test_find_doc_comments_skips_strings_and_line_comments():
    source = "String s = '/** x */';\n// /** y */\nString t = 'it\\'s /** z */';\n"
    assert find_doc_comments(source) == []


def test_empty_block_comment_is_not_doc():
    assert find_doc_comments("/**/ int x;") == []


def test_unterminated_comment_ignored():
    assert find_doc_comments("class A {}\n/** never closed") == []


def test_indented_comment_reformatted():
    source = (
        "public class Foo {\n"
        "    /**\n"
        "    * Adds.\n"
        "    * @param a first\n"
        "    */\n"
        "    public Integer add(Integer a) { return a; }\n"
        "}\n"
    )
    result = make_engine().format_string(source)
    assert result.modified
    assert result.source == (
        "public class Foo {\n"
        "    /**\n"
        "     * Adds.\n"
        "     * @param a first\n"
        "     */\n"
        "    public Integer add(Integer a) { return a; }\n"
        "}\n"
    )


def test_comment_after_code_keeps_column():
    source = "Integer x; /**\n * Doc\n */"
    result = make_engine().format_string(source)
    assert result.source == "Integer x; /**\n            * Doc\n            */"


def test_tab_indented_comment():
    source = "class A {\n\t/**\n\t * Doc\n\t */\n}\n"
    result = make_engine(tab_width=4, use_tabs=True).format_string(source)
    assert result.source == source
    assert not result.modified


def test_tab_indent_kept_without_tab_preference():
    source = "class A {\n\t/**\n\t *   Doc\n\t */\n}\n"
    result = make_engine().format_string(source)
    assert result.source == "class A {\n\t/**\n\t * Doc\n\t */\n}\n"


def test_single_line_doc_comment_untouched():
    source = "/** one line */\nclass A {}\n"
    result = make_engine().format_string(source)
    assert result.source == source
    assert not result.modified


def test_rule_reports_only_changes():
    config = FormatterConfig(format_code=False)
    rule = DocCommentRule(config)
    clean = "/**\n * Fine.\n */\nclass A {}\n"
    assert rule.analyze(FormattingContext(source=clean)) == []
    messy = "/**\n  *   Fine.\n */\nclass A {}\n"
    transforms = rule.analyze(FormattingContext(source=messy))
    assert len(transforms) == 1
    assert transforms[0].new_content == "/**\n * Fine.\n */"


def test_formatting_twice_changes_nothing():
    source = (
        "public class Foo {\n"
        "  /**\n"
        "   * Long description that needs to be wrapped because it is longer than forty columns.\n"
        "   * @param a first\n"
        "   *\n"
        "   * @return result\n"
        "   */\n"
        "  public Integer add(Integer a) { return a; }\n"
        "}\n"
    )
    engine = make_engine(print_width=40)
    once = engine.format_string(source)
    assert once.modified
    twice = engine.format_string(once.source)
    assert twice.source == once.source
    assert not twice.modified
