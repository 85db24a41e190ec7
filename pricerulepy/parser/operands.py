"""Operand classification for one side of a comparison."""

from __future__ import annotations

from collections.abc import Mapping
import math
import re
from typing import Final

from pricerulepy.diagnostics.errors import (
    InvalidDateLiteralError,
    InvalidDatetimeLiteralError,
    InvalidNumberError,
    InvalidTimeLiteralError,
    MissingOperandError,
    SemanticError,
    UnrecognizedReferenceError,
)
from pricerulepy.lexer.scan import (
    NUMBER_LITERAL_RE,
    QUOTES,
    check_quotes,
    compact_expression,
    split_unquoted,
    unquote,
)
from pricerulepy.model.model import LiteralOperand, LiteralType, Operand, Variable, VariableOperand
from pricerulepy.parser.formula import validate_number_expression
from pricerulepy.parser.literals import normalize_time_literal, validate_date_literal, validate_datetime_literal
from pricerulepy.parser.options import ParserOptions

_FUNCTION_RE: Final = re.compile(r"(?P<name>[A-Za-z]+)\s*\((?P<args>.*)\)", re.DOTALL)
_ARITHMETIC_CHARS: Final[frozenset[str]] = frozenset("+-*/()")

_FUNCTION_ERRORS: Final[dict[LiteralType, type[SemanticError]]] = {
    LiteralType.DATE: InvalidDateLiteralError,
    LiteralType.TIME: InvalidTimeLiteralError,
    LiteralType.DATETIME: InvalidDatetimeLiteralError,
}


def parse_operand(
    token: str,
    variables: Mapping[str, Variable],
    *,
    options: ParserOptions | None = None,
) -> Operand:
    """Classify `token` as a literal or a declared variable reference.

    Classifiers run in a fixed order and the first match wins: number,
    quoted text, `date()` / `time()` / `datetime()`, arithmetic over number
    variables, bare variable key.
    """
    text = token.strip()
    if not text:
        raise MissingOperandError()

    if NUMBER_LITERAL_RE.fullmatch(text):
        if not math.isfinite(float(text)):
            raise InvalidNumberError(f'Number "{text}" is too large.')
        return LiteralOperand(value=text, value_type=LiteralType.NUMBER)

    inner = unquote(text)
    if inner == "":
        raise MissingOperandError("Text values cannot be empty.")
    if inner is not None:
        return LiteralOperand(value=inner, value_type=LiteralType.TEXT)
    if text[0] in QUOTES:
        check_quotes(text)

    function = _FUNCTION_RE.fullmatch(text)
    if function is not None:
        name = function.group("name").lower()
        if name in _FUNCTION_ERRORS:
            return _parse_function_literal(LiteralType(name), function.group("args"))

    if any(char in _ARITHMETIC_CHARS for char in text):
        validate_number_expression(text, variables, options=options)
        return LiteralOperand(value=compact_expression(text), value_type=LiteralType.NUMBER)

    if text in variables:
        return VariableOperand(key=text)

    raise UnrecognizedReferenceError(text)


def _parse_function_literal(value_type: LiteralType, raw_args: str) -> LiteralOperand:
    error_type = _FUNCTION_ERRORS[value_type]
    args = [arg.strip() for arg in split_unquoted(raw_args, ",")]
    values = [unquote(arg) for arg in args]
    if any(value is None for value in values):
        raise error_type(f"{value_type.value}() arguments must be quoted strings.")

    match value_type, values:
        case LiteralType.DATE, [str(value)]:
            normalized = validate_date_literal(value)
        case LiteralType.TIME, [str(value)]:
            normalized = normalize_time_literal(value)
        case LiteralType.TIME, [str(value), str(meridiem)]:
            normalized = normalize_time_literal(value, meridiem)
        case LiteralType.DATETIME, [str(value)]:
            normalized = validate_datetime_literal(value)
        case _:
            raise error_type(f"Wrong number of arguments to {value_type.value}().")

    return LiteralOperand(value=normalized, value_type=value_type)
