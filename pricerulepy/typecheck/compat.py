"""Operand type compatibility for a single comparison."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from pricerulepy.diagnostics.errors import TypeMismatchError, UnknownVariableError
from pricerulepy.model.model import (
    Condition,
    LiteralOperand,
    LiteralType,
    Operand,
    Variable,
    VariableOperand,
    VariableType,
)

ACCEPTED_LITERALS: Final[dict[VariableType, frozenset[LiteralType]]] = {
    VariableType.NUMBER: frozenset({LiteralType.NUMBER}),
    VariableType.TEXT: frozenset({LiteralType.TEXT}),
    VariableType.DATE: frozenset({LiteralType.DATE, LiteralType.DATETIME}),
    VariableType.TIME: frozenset({LiteralType.TIME}),
}


def check_condition_types(condition: Condition, variables: Mapping[str, Variable]) -> None:
    """Raise `TypeMismatchError` when the two sides of `condition` cannot be compared."""
    check_operand_types(condition.left, condition.right, variables)


def check_operand_types(left: Operand, right: Operand, variables: Mapping[str, Variable]) -> None:
    match left, right:
        case VariableOperand(), VariableOperand():
            left_variable = _resolve(left, variables)
            right_variable = _resolve(right, variables)
            if left_variable.type != right_variable.type:
                raise TypeMismatchError(left_variable.key, left_variable.type.value, right_variable.type.value)
        case VariableOperand(), LiteralOperand():
            _check_variable_literal(_resolve(left, variables), right)
        case LiteralOperand(), VariableOperand():
            _check_variable_literal(_resolve(right, variables), left)
        case LiteralOperand(), LiteralOperand():
            if _literal_family(left.value_type) != _literal_family(right.value_type):
                raise TypeMismatchError(None, left.value_type.value, right.value_type.value)


def _resolve(operand: VariableOperand, variables: Mapping[str, Variable]) -> Variable:
    variable = variables.get(operand.key)
    if variable is None:
        raise UnknownVariableError(operand.key)
    return variable


def _check_variable_literal(variable: Variable, literal: LiteralOperand) -> None:
    if literal.value_type not in ACCEPTED_LITERALS[variable.type]:
        raise TypeMismatchError(variable.key, variable.type.value, literal.value_type.value)


def _literal_family(value_type: LiteralType) -> LiteralType:
    # date and datetime literals compare with each other
    if value_type == LiteralType.DATETIME:
        return LiteralType.DATE
    return value_type
