"""Canonical rule text rendering."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from pricerulepy.lexer.scan import compact_expression
from pricerulepy.model.model import Condition, Definition, LiteralOperand, LiteralType, Operand, VariableOperand

if TYPE_CHECKING:
    from pricerulepy.parser.rule import ParsedClause


def render_operand(operand: Operand) -> str:
    match operand:
        case VariableOperand(key=key):
            return key
        case LiteralOperand(value=value, value_type=LiteralType.NUMBER):
            return compact_expression(value)
        case LiteralOperand(value=value, value_type=LiteralType.TEXT):
            return f'"{value}"' if "'" in value else f"'{value}'"
        case LiteralOperand(value=value, value_type=value_type):
            return f"{value_type.value}('{value}')"


def serialize_condition(condition: Condition) -> str:
    text = f"{render_operand(condition.left)} {condition.comparator.value} {render_operand(condition.right)}"
    return f"NOT {text}" if condition.negated else text


def serialize_conditions(conditions: Sequence[Condition]) -> str:
    """Join conditions with their uppercased connectors."""
    parts: list[str] = []
    for index, condition in enumerate(conditions):
        if index > 0:
            parts.append((condition.connector or "and").upper())
        parts.append(serialize_condition(condition))
    return " ".join(parts)


def serialize_clause(conditions: Sequence[Condition], formula: str) -> str:
    """Render `IF <conditions> THEN <formula>`, or the bare formula without conditions."""
    normalized_formula = formula.strip()
    if not conditions:
        return normalized_formula
    return f"IF {serialize_conditions(conditions)} THEN {normalized_formula}"


def serialize_definition(definition: Definition) -> str:
    return serialize_clause(definition.conditions, definition.formula)


def serialize_clauses(clauses: Sequence[ParsedClause]) -> str:
    parts: list[str] = []
    for index, clause in enumerate(clauses):
        if index > 0:
            parts.append((clause.connector or "and").upper())
        parts.append(serialize_clause(clause.conditions, clause.formula))
    return " ".join(parts)
