"""site_indexer.text: нормализация текста страниц и токенизация для полнотекстового индекса."""

from .stopwords import StopwordCatalog, default_catalog
from .tokenizer import (
    ProcessedContent,
    clean_html,
    detect_language,
    normalize_and_tokenize,
    preprocess_html,
    singularize_token,
    transliterate,
)

__all__ = [
    "ProcessedContent",
    "StopwordCatalog",
    "clean_html",
    "default_catalog",
    "detect_language",
    "normalize_and_tokenize",
    "preprocess_html",
    "singularize_token",
    "transliterate",
]
