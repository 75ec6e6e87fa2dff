from apexdoc_formatter.markers import extract_body, is_doc_comment, normalize_markers
from apexdoc_formatter.names import TableNormalizer


def test_default_tables():
    normalizer = TableNormalizer.default()
    assert normalizer.normalize("tag", "PARAM") == "param"
    assert normalizer.normalize("group", "class") == "Class"
    assert normalizer.normalize("annotation", "auraenabled") == "AuraEnabled"
    assert normalizer.normalize("annotation", "Custom") == "Custom"
    assert normalizer.normalize("unknown", "x") == "x"


def test_extend_does_not_mutate():
    base = TableNormalizer.default()
    extended = base.extend({"group": {"Utilities": "Utilities"}})
    assert extended.normalize("group", "utilities") == "Utilities"
    assert extended.normalize("group", "class") == "Class"
    assert base.normalize("group", "utilities") == "utilities"


def test_is_doc_comment():
    assert is_doc_comment("/**\n * x\n */")
    assert not is_doc_comment("/** x */")
    assert not is_doc_comment("/*\n * x\n */")
    assert not is_doc_comment("/**/")


def test_normalize_markers():
    assert normalize_markers("/****\n * x\n ***/") == "/**\n * x\n */"
    assert normalize_markers("/**\n * x\n */") == "/**\n * x\n */"


def test_extract_body():
    assert extract_body("/**\n * x\n */") == "\n * x\n "
