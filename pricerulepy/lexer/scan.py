"""Quote-aware scanning over raw rule text.

Rule text has no token stream of its own: keywords, comparators and commas
only count when they sit outside single- or double-quoted text, so every
scanner here walks the unquoted positions of the source.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import re
from typing import Final

from pricerulepy.diagnostics.errors import UnterminatedLiteralError
from pricerulepy.model.model import COMPARATOR_SCAN_ORDER, Comparator

QUOTES: Final[frozenset[str]] = frozenset({"'", '"'})

# Plain decimal number literal, no exponent.
NUMBER_LITERAL_RE: Final = re.compile(r"[+-]?[0-9]+(\.[0-9]+)?")


def iter_unquoted(text: str) -> Iterator[int]:
    """Yield indices of characters outside quoted text.

    Quote characters themselves are never yielded. Raises
    `UnterminatedLiteralError` once the scan reaches the end inside a quote.
    """
    quote: str | None = None
    opened_at = 0
    for index, char in enumerate(text):
        if quote is not None:
            if char == quote:
                quote = None
            continue
        if char in QUOTES:
            quote = char
            opened_at = index
            continue
        yield index
    if quote is not None:
        raise UnterminatedLiteralError(
            f"Unterminated text literal starting with {quote}.",
            position=opened_at,
        )


def keyword_at(text: str, index: int, keyword: str) -> bool:
    """Whether `keyword` (lowercase) starts at `index` as a whole word.

    A whole word is bounded on both sides by whitespace or the string edges,
    so `order` or `android` never match `or` / `and`.
    """
    end = index + len(keyword)
    if text[index:end].lower() != keyword:
        return False
    if index > 0 and not text[index - 1].isspace():
        return False
    return end == len(text) or text[end].isspace()


def iter_keywords(text: str, keywords: Iterable[str]) -> Iterator[tuple[int, str]]:
    """Yield `(index, keyword)` for every top-level keyword occurrence."""
    candidates = tuple(keywords)
    for index in iter_unquoted(text):
        for keyword in candidates:
            if keyword_at(text, index, keyword):
                yield index, keyword
                break


def find_keyword(text: str, keyword: str) -> int | None:
    for index, _ in iter_keywords(text, (keyword,)):
        return index
    return None


def find_comparator(text: str) -> tuple[int, Comparator] | None:
    """Locate the first top-level comparator, longest symbol first."""
    for index in iter_unquoted(text):
        for comparator in COMPARATOR_SCAN_ORDER:
            if text.startswith(comparator.value, index):
                return index, comparator
    return None


def split_unquoted(text: str, separator: str) -> list[str]:
    """Split on a single-character separator that sits outside quotes."""
    parts: list[str] = []
    start = 0
    for index in iter_unquoted(text):
        if text[index] == separator:
            parts.append(text[start:index])
            start = index + 1
    parts.append(text[start:])
    return parts


def unquote(token: str) -> str | None:
    """Inner text of a token wrapped in one matching quote pair, else None."""
    if len(token) < 2 or token[0] not in QUOTES or token[-1] != token[0]:
        return None
    inner = token[1:-1]
    if token[0] in inner:
        return None
    return inner


def check_quotes(text: str) -> None:
    """Raise `UnterminatedLiteralError` if a quote opened in `text` never closes."""
    for _ in iter_unquoted(text):
        pass


def compact_expression(text: str) -> str:
    """Drop all whitespace from an arithmetic expression.

    Only safe for expressions that already parsed: whitespace never separates
    two operands there, so removing it keeps the meaning.
    """
    return "".join(text.split())
