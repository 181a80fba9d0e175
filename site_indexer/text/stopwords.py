# site_indexer/text/stopwords.py
"""
Stopword catalogs used for language detection and token filtering.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Tuple

SPANISH = "es"
ENGLISH = "en"
DEFAULT_LANGUAGE = SPANISH

_SPANISH_STOPWORDS: Tuple[str, ...] = (
    "de", "la", "que", "el", "en", "y", "a", "los", "del", "se", "las", "por", "un", "para",
    "con", "no", "una", "su", "al", "lo", "como", "mas", "pero", "sus", "le", "ya", "o",
    "este", "ha", "me", "si", "sin", "sobre", "es", "son", "entre", "cuando", "muy", "nos",
    "hasta", "desde", "todo", "nosotros", "usted", "ellos", "ellas", "ser", "fue", "era",
    "tambien", "tan", "solo", "donde",
)

_ENGLISH_STOPWORDS: Tuple[str, ...] = (
    "the", "and", "is", "in", "to", "of", "a", "for", "on", "with", "as", "by", "that",
    "it", "this", "an", "be", "or", "are", "from", "at", "was", "were", "but", "not",
    "have", "has", "had", "you", "your", "their", "they", "we", "our", "will", "would",
    "can", "could", "there", "about", "which", "one", "all",
)


@dataclass(frozen=True)
class StopwordCatalog:
    """Immutable language code -> stopword set lookup table."""

    sets: Mapping[str, FrozenSet[str]]

    @classmethod
    def from_lists(cls, lists: Mapping[str, Iterable[str]]) -> "StopwordCatalog":
        return cls(MappingProxyType({lang: frozenset(words) for lang, words in lists.items()}))

    @property
    def languages(self) -> Tuple[str, ...]:
        return tuple(self.sets)

    def for_language(self, language: str) -> FrozenSet[str]:
        """Stopwords of *language*; unknown languages fall back to Spanish."""
        if language in self.sets:
            return self.sets[language]
        return self.sets.get(DEFAULT_LANGUAGE, frozenset())


@lru_cache(maxsize=None)
def default_catalog() -> StopwordCatalog:
    """The built-in Spanish/English catalog, built on first use."""
    return StopwordCatalog.from_lists({SPANISH: _SPANISH_STOPWORDS, ENGLISH: _ENGLISH_STOPWORDS})


__all__ = ["StopwordCatalog", "default_catalog", "SPANISH", "ENGLISH", "DEFAULT_LANGUAGE"]
