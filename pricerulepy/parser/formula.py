"""Price formulas: recursive-descent evaluation and THEN/ELSE splitting.

Grammar::

    expr   := term (('+' | '-') term)*
    term   := factor (('*' | '/') factor)*
    factor := ('+' | '-') factor | '(' expr ')' | number | variable

Nesting through parentheses and unary signs is bounded by
`ParserOptions.max_nesting_depth` so deep input fails with a reportable error
instead of exhausting the interpreter stack.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
import math
from typing import TypeAlias

from pricerulepy.diagnostics.errors import (
    DivisionByZeroError,
    EmptyFormulaError,
    FormulaTooLongError,
    InvalidNumberError,
    NestingTooDeepError,
    TypeMismatchError,
    UnbalancedParenthesesError,
    UnexpectedCharacterError,
    UnexpectedEndError,
    UnknownVariableError,
)
from pricerulepy.lexer.cursor import Cursor
from pricerulepy.lexer.scan import find_keyword
from pricerulepy.model.model import Variable, VariableType
from pricerulepy.parser.options import ParserOptions, resolve_options

VariableValues: TypeAlias = Mapping[str, float]
VariableCallback: TypeAlias = Callable[[str], None]


def evaluate_formula(
    expression: str,
    variables: VariableValues | None = None,
    *,
    on_variable: VariableCallback | None = None,
    options: ParserOptions | None = None,
) -> float:
    """Evaluate `expression` against `variables` and return a finite number."""
    resolved_options = resolve_options(options)
    if not expression.strip():
        raise EmptyFormulaError()
    if len(expression) > resolved_options.max_formula_length:
        raise FormulaTooLongError(resolved_options.max_formula_length)

    parser = _FormulaParser(
        expression,
        variables if variables is not None else {},
        on_variable=on_variable,
        max_depth=resolved_options.max_nesting_depth,
    )
    return parser.parse()


def validate_formula(
    expression: str,
    numeric_keys: Collection[str],
    *,
    options: ParserOptions | None = None,
) -> tuple[str, ...]:
    """Check that `expression` is well formed over the given number variables.

    Variables are zero-filled. A division by zero seen only under zero-filling
    is retried with every variable set to one, so `price / booking_hours`
    passes while `price / 0` does not. Returns the referenced variable keys in
    first-use order.
    """
    used: dict[str, None] = {}

    def record(key: str) -> None:
        used.setdefault(key, None)

    try:
        evaluate_formula(expression, dict.fromkeys(numeric_keys, 0.0), on_variable=record, options=options)
    except DivisionByZeroError:
        used.clear()
        evaluate_formula(expression, dict.fromkeys(numeric_keys, 1.0), on_variable=record, options=options)
    return tuple(used)


def validate_number_expression(
    expression: str,
    variables: Mapping[str, Variable],
    *,
    options: ParserOptions | None = None,
) -> tuple[str, ...]:
    """Like `validate_formula`, over the number variables among `variables`.

    A declared variable of another type is reported as a type mismatch
    instead of an unknown variable.
    """
    numeric_keys = [key for key, variable in variables.items() if variable.type == VariableType.NUMBER]
    try:
        return validate_formula(expression, numeric_keys, options=options)
    except UnknownVariableError as exc:
        variable = variables.get(exc.key)
        if variable is None:
            raise
        raise TypeMismatchError(
            exc.key,
            variable.type.value,
            VariableType.NUMBER.value,
            message=f'"{exc.key}" is a {variable.type.value} variable and cannot be used in arithmetic.',
            position=exc.position,
        ) from exc


def collect_formula_variables(
    expression: str,
    numeric_keys: Collection[str],
    *,
    options: ParserOptions | None = None,
) -> tuple[str, ...]:
    """Return the number variables `expression` references, in first-use order."""
    return validate_formula(expression, numeric_keys, options=options)


class _FormulaParser:
    def __init__(
        self,
        expression: str,
        variables: VariableValues,
        *,
        on_variable: VariableCallback | None,
        max_depth: int,
    ) -> None:
        self._cursor = Cursor(expression)
        self._variables = variables
        self._on_variable = on_variable
        self._max_depth = max_depth
        self._depth = 0

    def parse(self) -> float:
        value = self._parse_expression()
        self._cursor.skip_whitespace()
        if not self._cursor.is_eof:
            raise UnexpectedCharacterError(self._cursor.current_char(), position=self._cursor.position)
        if not math.isfinite(value):
            raise InvalidNumberError()
        return value

    def _parse_expression(self) -> float:
        value = self._parse_term()
        while True:
            self._cursor.skip_whitespace()
            char = self._cursor.current_char()
            if char not in ("+", "-"):
                return value
            self._cursor.advance()
            next_value = self._parse_term()
            value = value + next_value if char == "+" else value - next_value

    def _parse_term(self) -> float:
        value = self._parse_factor()
        while True:
            self._cursor.skip_whitespace()
            char = self._cursor.current_char()
            if char not in ("*", "/"):
                return value
            operator_position = self._cursor.position
            self._cursor.advance()
            next_value = self._parse_factor()
            if char == "*":
                value *= next_value
                continue
            if next_value == 0:
                raise DivisionByZeroError(position=operator_position)
            value /= next_value

    def _parse_factor(self) -> float:
        self._cursor.skip_whitespace()
        if self._cursor.is_eof:
            raise UnexpectedEndError(position=self._cursor.position)

        char = self._cursor.current_char()
        if char in ("+", "-"):
            self._cursor.advance()
            with self._nested():
                value = self._parse_factor()
            return -value if char == "-" else value

        if char == "(":
            open_position = self._cursor.position
            self._cursor.advance()
            with self._nested():
                value = self._parse_expression()
            self._cursor.skip_whitespace()
            if self._cursor.current_char() != ")":
                raise UnbalancedParenthesesError(position=open_position)
            self._cursor.advance()
            return value

        if _is_digit(char) or char == ".":
            return self._parse_number()

        if _is_variable_start(char):
            return self._parse_variable()

        raise UnexpectedCharacterError(char, position=self._cursor.position)

    def _parse_number(self) -> float:
        start = self._cursor.position
        raw = self._cursor.take_while(_is_digit)
        if self._cursor.current_char() == ".":
            self._cursor.advance()
            raw += "." + self._cursor.take_while(_is_digit)

        if raw == ".":
            raise InvalidNumberError("Invalid number literal.", position=start)
        value = float(raw)
        if not math.isfinite(value):
            raise InvalidNumberError(f'Invalid number "{raw}".', position=start)
        return value

    def _parse_variable(self) -> float:
        start = self._cursor.position
        key = self._cursor.take_while(_is_variable_part)
        if key not in self._variables:
            raise UnknownVariableError(key, position=start)
        if self._on_variable is not None:
            self._on_variable(key)
        return float(self._variables[key])

    @contextmanager
    def _nested(self) -> Iterator[None]:
        self._depth += 1
        try:
            if self._depth > self._max_depth:
                raise NestingTooDeepError(self._max_depth, position=self._cursor.position)
            yield
        finally:
            self._depth -= 1


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_variable_start(char: str) -> bool:
    return char == "_" or "a" <= char <= "z" or "A" <= char <= "Z"


def _is_variable_part(char: str) -> bool:
    return _is_variable_start(char) or _is_digit(char)


@dataclass(frozen=True, slots=True)
class FormulaParts:
    then_expression: str
    else_expression: str | None = None

    def join(self) -> str:
        if self.else_expression is None:
            return self.then_expression
        return f"{self.then_expression} ELSE {self.else_expression}"


def split_formula(formula: str) -> FormulaParts:
    """Split at the first whole-word `ELSE` (any case)."""
    trimmed = formula.strip()
    index = find_keyword(trimmed, "else")
    if index is None:
        return FormulaParts(then_expression=trimmed)
    return FormulaParts(
        then_expression=trimmed[:index].strip(),
        else_expression=trimmed[index + len("else") :].strip(),
    )
