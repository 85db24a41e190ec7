"""Split a condition blob into top-level clauses joined by AND/OR."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from pricerulepy.diagnostics.errors import MissingOperandError
from pricerulepy.lexer.scan import iter_keywords
from pricerulepy.model.model import Connector

CONNECTOR_KEYWORDS: Final[dict[str, Connector]] = {
    "and": Connector.AND,
    "or": Connector.OR,
}


@dataclass(frozen=True, slots=True)
class ConditionClause:
    """Raw text of one comparison plus the connector that joined it."""

    text: str
    connector: Connector | None = None
    offset: int = 0


def split_conditions(text: str) -> list[ConditionClause]:
    """Break `text` at whole-word, unquoted `and` / `or` (any case).

    The first clause never carries a connector. Empty clauses on either side
    of a connector raise `MissingOperandError`; blank input yields no clauses.
    """
    if not text.strip():
        return []

    clauses: list[ConditionClause] = []
    start = 0
    connector: Connector | None = None
    for index, keyword in iter_keywords(text, CONNECTOR_KEYWORDS):
        clauses.append(_clause(text, start, index, connector))
        connector = CONNECTOR_KEYWORDS[keyword]
        start = index + len(keyword)
    clauses.append(_clause(text, start, len(text), connector))
    return clauses


def _clause(text: str, start: int, end: int, connector: Connector | None) -> ConditionClause:
    raw = text[start:end]
    stripped = raw.strip()
    if not stripped:
        keyword = connector.value.upper() if connector is not None else "AND/OR"
        raise MissingOperandError(f"Expected a condition around {keyword}.", position=start)
    return ConditionClause(
        text=stripped,
        connector=connector,
        offset=start + (len(raw) - len(raw.lstrip())),
    )
