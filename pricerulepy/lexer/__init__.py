"""Lexer-level helpers: character cursor and quote-aware scanning."""

from pricerulepy.lexer.cursor import Cursor
from pricerulepy.lexer.scan import (
    NUMBER_LITERAL_RE,
    QUOTES,
    check_quotes,
    compact_expression,
    find_comparator,
    find_keyword,
    iter_keywords,
    iter_unquoted,
    keyword_at,
    split_unquoted,
    unquote,
)

__all__ = [
    "NUMBER_LITERAL_RE",
    "QUOTES",
    "Cursor",
    "check_quotes",
    "compact_expression",
    "find_comparator",
    "find_keyword",
    "iter_keywords",
    "iter_unquoted",
    "keyword_at",
    "split_unquoted",
    "unquote",
]
