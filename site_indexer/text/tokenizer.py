# site_indexer/text/tokenizer.py
"""
Text normalisation pipeline: HTML -> cleaned text -> indexable tokens.

The stemming below is a set of plural-stripping heuristics, not a linguistic
stemmer; its misfires ("series" -> "sery") are accepted behaviour.
"""
from __future__ import annotations

import html
import re
import unicodedata
from dataclasses import dataclass, field
from typing import List, Optional, Pattern, Sequence, Tuple

from site_indexer.text.stopwords import ENGLISH, SPANISH, StopwordCatalog, default_catalog

__all__ = (
    "ProcessedContent",
    "preprocess_html",
    "clean_html",
    "normalize_and_tokenize",
    "transliterate",
    "detect_language",
    "singularize_token",
)

SNIPPET_LENGTH = 240

_SCRIPT_RE = re.compile(r"<script\b[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
# everything except Unicode letters, numbers and whitespace
_NON_WORD_RE = re.compile(r"[^\w\s]|_")

# (pattern, replacement, minimum token length); first applicable rule wins
_Rule = Tuple[Pattern[str], str, int]

_ENGLISH_RULES: Sequence[_Rule] = (
    (re.compile(r"ies$"), "y", 0),
    (re.compile(r"ves$"), "f", 0),
    (re.compile(r"(?<=[sxz])es$"), "", 0),
    (re.compile(r"(?<!s)s$"), "", 0),
)

_SPANISH_RULES: Sequence[_Rule] = (
    (re.compile(r"ces$"), "z", 0),
    (re.compile(r"es$"), "", 5),
    (re.compile(r"(?<![aeiou])s$"), "", 0),
)

_RULES = {ENGLISH: _ENGLISH_RULES, SPANISH: _SPANISH_RULES}


@dataclass(slots=True)
class ProcessedContent:
    """Tokens and snippet derived from one page."""

    tokens: List[str] = field(default_factory=list)
    snippet: str = ""
    language: str = SPANISH

    @property
    def token_text(self) -> str:
        return " ".join(self.tokens)


def clean_html(markup: str) -> str:
    """Drop scripts, comments and tags, decode entities and collapse whitespace."""
    text = _SCRIPT_RE.sub(" ", markup)
    text = _COMMENT_RE.sub(" ", text)
    text = _TAG_RE.sub("", text)
    text = html.unescape(text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def transliterate(text: str) -> str:
    """Fold accented Latin letters to their base letters (``canción`` -> ``cancion``).

    Characters without a compatibility decomposition are left untouched.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def detect_language(tokens: Sequence[str], catalog: Optional[StopwordCatalog] = None) -> str:
    """Return ``"en"`` only if English stopwords strictly outnumber Spanish ones."""
    catalog = catalog or default_catalog()
    english = catalog.for_language(ENGLISH)
    spanish = catalog.for_language(SPANISH)
    en_score = sum(1 for token in tokens if token in english)
    es_score = sum(1 for token in tokens if token in spanish)
    return ENGLISH if en_score > es_score else SPANISH


def singularize_token(token: str, language: str) -> str:
    if len(token) <= 3:
        return token
    for pattern, replacement, min_length in _RULES.get(language, _SPANISH_RULES):
        if len(token) >= min_length and pattern.search(token):
            return pattern.sub(replacement, token, count=1)
    return token


def _tokenize(content: str, catalog: StopwordCatalog) -> Tuple[List[str], str]:
    text = transliterate(html.unescape(content).lower())
    tokens = _NON_WORD_RE.sub(" ", text).split()
    if not tokens:
        return [], SPANISH

    # detection looks at the raw tokens, before any filtering
    language = detect_language(tokens, catalog)
    stopwords = catalog.for_language(language)
    singular = (singularize_token(token, language) for token in tokens if token not in stopwords)
    return [token for token in singular if token], language


def normalize_and_tokenize(content: str, catalog: Optional[StopwordCatalog] = None) -> List[str]:
    """
    Lower-case, transliterate and split *content*, then drop the stopwords of
    the detected language and singularize what is left. Token order and
    duplicates are preserved.
    """
    if not content:
        return []
    tokens, _ = _tokenize(content, catalog or default_catalog())
    return tokens


def preprocess_html(
    markup: str,
    *,
    snippet_length: int = SNIPPET_LENGTH,
    catalog: Optional[StopwordCatalog] = None,
) -> ProcessedContent:
    """Run the whole pipeline on a page (or plain text) and return tokens plus snippet."""
    text = clean_html(markup)
    if not text:
        return ProcessedContent()
    tokens, language = _tokenize(text, catalog or default_catalog())
    return ProcessedContent(tokens=tokens, snippet=text[:snippet_length], language=language)
