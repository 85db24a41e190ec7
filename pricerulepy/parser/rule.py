"""IF/THEN/ELSE clauses and multi-clause rule text."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from pricerulepy.analysis.collisions import detect_collisions
from pricerulepy.diagnostics.errors import (
    ElseWithoutIfError,
    EmptyFormulaError,
    FormulaTooLongError,
    MissingOperandError,
    MissingThenError,
)
from pricerulepy.lexer.scan import find_keyword, iter_keywords, keyword_at
from pricerulepy.model.model import Condition, Connector, Variable
from pricerulepy.parser.conditions import parse_conditions
from pricerulepy.parser.formula import FormulaParts, split_formula, validate_number_expression
from pricerulepy.parser.options import ParserOptions, resolve_options
from pricerulepy.parser.splitter import CONNECTOR_KEYWORDS


@dataclass(frozen=True, slots=True)
class RuleSegment:
    """Raw text of one clause and the connector that joined it to the previous one."""

    text: str
    connector: Connector | None = None
    offset: int = 0


@dataclass(frozen=True, slots=True)
class ParsedClause:
    conditions: tuple[Condition, ...]
    formula: str
    connector: Connector | None = None

    @property
    def formula_parts(self) -> FormulaParts:
        return split_formula(self.formula)


def split_rule_clauses(text: str) -> list[RuleSegment]:
    """Split rule text into clauses.

    A top-level AND/OR only starts a new clause when the next word is IF;
    any other AND/OR belongs to the current clause's conditions.
    """
    if not text.strip():
        return []

    segments: list[RuleSegment] = []
    start = 0
    connector: Connector | None = None
    for index, keyword in iter_keywords(text, CONNECTOR_KEYWORDS):
        after = index + len(keyword)
        next_word = len(text) - len(text[after:].lstrip())
        if not keyword_at(text, next_word, "if"):
            continue
        segments.append(_segment(text, start, index, connector))
        connector = CONNECTOR_KEYWORDS[keyword]
        start = next_word
    segments.append(_segment(text, start, len(text), connector))
    return segments


def _segment(text: str, start: int, end: int, connector: Connector | None) -> RuleSegment:
    raw = text[start:end]
    stripped = raw.strip()
    if not stripped:
        raise MissingOperandError("Expected a rule clause around AND/OR.", position=start)
    return RuleSegment(text=stripped, connector=connector, offset=start + (len(raw) - len(raw.lstrip())))


def parse_rule(
    text: str,
    variables: Mapping[str, Variable],
    *,
    connector: Connector | None = None,
    options: ParserOptions | None = None,
) -> ParsedClause:
    """Parse one `IF <conditions> THEN <formula> [ELSE <formula>]` clause or a bare formula.

    Conditions are type-checked and every AND-group must be satisfiable;
    each formula part must evaluate over the declared number variables.
    """
    resolved_options = resolve_options(options)
    body = text.strip()
    if not body:
        raise EmptyFormulaError()

    conditions: list[Condition] = []
    if keyword_at(body, 0, "if"):
        rest = body[len("if") :]
        then_index = find_keyword(rest, "then")
        if then_index is None:
            raise MissingThenError(position=len(body))
        condition_text = rest[:then_index]
        if not condition_text.strip():
            raise MissingOperandError("Expected a condition after IF.", position=len("if"))
        conditions = parse_conditions(condition_text, variables, options=resolved_options)
        parts = split_formula(rest[then_index + len("then") :])
        if not parts.then_expression or parts.else_expression == "":
            raise EmptyFormulaError()
    else:
        else_index = find_keyword(body, "else")
        if else_index is not None:
            raise ElseWithoutIfError(position=else_index)
        parts = FormulaParts(then_expression=body)

    formula = parts.join()
    if len(formula) > resolved_options.max_formula_length:
        raise FormulaTooLongError(resolved_options.max_formula_length)

    validate_number_expression(parts.then_expression, variables, options=resolved_options)
    if parts.else_expression is not None:
        validate_number_expression(parts.else_expression, variables, options=resolved_options)

    collision = detect_collisions(conditions)
    if collision is not None:
        raise collision

    return ParsedClause(conditions=tuple(conditions), formula=formula, connector=connector)
