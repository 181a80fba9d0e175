# File: tests/test_tokenizer.py
import pytest

from site_indexer.text import (
    StopwordCatalog,
    clean_html,
    default_catalog,
    detect_language,
    normalize_and_tokenize,
    preprocess_html,
    singularize_token,
    transliterate,
)


def test_preprocess_drops_script_and_english_stopwords():
    result = preprocess_html("<script>bad()</script><p>The Cats run.</p>")
    assert result.tokens == ["cat", "run"]
    assert result.language == "en"
    assert result.snippet == "The Cats run."
    assert "bad" not in result.tokens


def test_script_removal_is_case_insensitive_and_multiline():
    html = '<SCRIPT type="text/javascript">\nvar secret = 1;\n</Script><p>visible</p>'
    assert clean_html(html) == "visible"


def test_clean_html_strips_tags_comments_entities_and_whitespace():
    html = "<p>Hello  <b>world</b></p>\n\n<!-- hidden -->  caf&eacute; &amp; t&eacute;"
    assert clean_html(html) == "Hello world café & té"


def test_snippet_is_bounded_in_code_points():
    result = preprocess_html("<p>" + "é" * 300 + "</p>")
    assert len(result.snippet) == 240
    assert result.snippet == "é" * 240


def test_snippet_length_is_configurable():
    assert preprocess_html("<p>abcdef ghij</p>", snippet_length=4).snippet == "abcd"


def test_token_text_is_space_joined():
    assert preprocess_html("<p>The Cats run.</p>").token_text == "cat run"


def test_empty_text_yields_no_tokens():
    result = preprocess_html("<html><script>only()</script></html>")
    assert result.tokens == []
    assert result.snippet == ""
    assert normalize_and_tokenize("") == []
    assert normalize_and_tokenize("!!! ... ???") == []


def test_duplicates_are_kept_in_order():
    assert normalize_and_tokenize("cat dog cat cat") == ["cat", "dog", "cat", "cat"]


def test_punctuation_and_underscores_split_tokens():
    assert normalize_and_tokenize("hello,world! foo_bar 42") == ["hello", "world", "foo", "bar", "42"]


def test_transliteration_folds_accents():
    assert transliterate("canción ñandú") == "cancion nandu"
    assert normalize_and_tokenize("Canción ÑANDÚ") == ["cancion", "nandu"]


def test_non_latin_scripts_pass_through():
    assert normalize_and_tokenize("Привет мир") == ["привет", "мир"]


def test_spanish_text_is_filtered_and_singularized():
    assert normalize_and_tokenize("Las flores y las luces") == ["flor", "luz"]


@pytest.mark.parametrize(
    "tokens,expected",
    [
        (["the", "and", "de"], "en"),
        (["the", "de"], "es"),
        (["hello", "world"], "es"),
        ([], "es"),
        (["los", "perros", "de", "la", "casa"], "es"),
    ],
)
def test_detect_language(tokens, expected):
    assert detect_language(tokens) == expected


@pytest.mark.parametrize(
    "token,expected",
    [
        ("cities", "city"),
        ("wolves", "wolf"),
        ("boxes", "box"),
        ("buses", "bus"),
        ("quizzes", "quizz"),
        ("glass", "glass"),
        ("cats", "cat"),
        ("bus", "bus"),
        ("series", "sery"),
    ],
)
def test_singularize_english(token, expected):
    assert singularize_token(token, "en") == expected


@pytest.mark.parametrize(
    "token,expected",
    [
        ("luces", "luz"),
        ("flores", "flor"),
        ("tres", "tres"),
        ("casas", "casas"),
        ("robots", "robot"),
        ("mes", "mes"),
    ],
)
def test_singularize_spanish(token, expected):
    assert singularize_token(token, "es") == expected


def test_unknown_language_uses_spanish_rules():
    assert singularize_token("luces", "fr") == "luz"


def test_default_catalog_is_built_once_and_immutable():
    catalog = default_catalog()
    assert catalog is default_catalog()
    assert "the" in catalog.for_language("en")
    assert "de" in catalog.for_language("es")
    assert catalog.for_language("xx") == catalog.for_language("es")
    with pytest.raises(TypeError):
        catalog.sets["fr"] = frozenset()  # type: ignore[index]


def test_custom_catalog():
    catalog = StopwordCatalog.from_lists({"es": ["hola"], "en": ["hello", "world"]})
    assert normalize_and_tokenize("hello world hola cats", catalog) == ["hola", "cat"]
