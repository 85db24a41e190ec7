"""Condition parsing: `[NOT] left <comparator> right` joined by AND/OR."""

from __future__ import annotations

from collections.abc import Mapping
import re
from typing import Final

from pricerulepy.diagnostics.errors import MissingComparatorError, MissingOperandError, TooManyConditionsError
from pricerulepy.lexer.scan import find_comparator
from pricerulepy.model.model import Condition, Connector, Variable
from pricerulepy.parser.operands import parse_operand
from pricerulepy.parser.options import ParserOptions, resolve_options
from pricerulepy.parser.splitter import split_conditions
from pricerulepy.typecheck.compat import check_condition_types

_NOT_PREFIX: Final = re.compile(r"not\s+", re.IGNORECASE)


def parse_conditions(
    text: str,
    variables: Mapping[str, Variable],
    *,
    options: ParserOptions | None = None,
) -> list[Condition]:
    """Parse a condition blob into an ordered, type-checked condition list."""
    resolved_options = resolve_options(options)
    clauses = split_conditions(text)
    if len(clauses) > resolved_options.max_conditions:
        raise TooManyConditionsError(resolved_options.max_conditions)

    return [
        parse_condition(clause.text, variables, connector=clause.connector, offset=clause.offset, options=options)
        for clause in clauses
    ]


def parse_condition(
    text: str,
    variables: Mapping[str, Variable],
    *,
    connector: Connector | None = None,
    offset: int = 0,
    options: ParserOptions | None = None,
) -> Condition:
    body = text.strip()
    negated = False
    prefix = _NOT_PREFIX.match(body)
    if prefix is not None:
        negated = True
        offset += prefix.end()
        body = body[prefix.end() :]

    found = find_comparator(body)
    if found is None:
        raise MissingComparatorError(f'Expected a comparator in "{body}".', position=offset)
    index, comparator = found

    left_text = body[:index].strip()
    right_text = body[index + len(comparator.value) :].strip()
    if not left_text:
        raise MissingOperandError(f"Expected a value before {comparator.value}.", position=offset)
    if not right_text:
        raise MissingOperandError(f"Expected a value after {comparator.value}.", position=offset + index)

    condition = Condition(
        comparator=comparator,
        left=parse_operand(left_text, variables, options=options),
        right=parse_operand(right_text, variables, options=options),
        connector=connector,
        negated=negated,
    )
    check_condition_types(condition, variables)
    return condition
