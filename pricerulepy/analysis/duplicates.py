"""Detection of structurally duplicate IF clauses."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging
from typing import TypeAlias

from pricerulepy.analysis.collisions import normalize_constraint
from pricerulepy.diagnostics.errors import DuplicateConditionError
from pricerulepy.format.serializer import serialize_conditions
from pricerulepy.lexer.scan import compact_expression
from pricerulepy.model.model import Condition, LiteralOperand, LiteralType, Operand, VariableOperand

logger = logging.getLogger(__name__)

ClauseSignature: TypeAlias = tuple[str, ...]


def operand_signature(operand: Operand) -> str:
    match operand:
        case VariableOperand(key=key):
            return f"var:{key}"
        case LiteralOperand(value=value, value_type=LiteralType.NUMBER):
            return f"number:{compact_expression(value)}"
        case LiteralOperand(value=value, value_type=value_type):
            return f"{value_type.value}:{value}"


def condition_signature(condition: Condition) -> str:
    """Signature shared by every spelling of the same comparison.

    `NOT` is folded into the comparator. A variable goes left of a literal,
    and two variables are ordered by key, flipping the comparator to match.
    """
    constraint = normalize_constraint(condition)
    if constraint is not None:
        return constraint.fingerprint

    comparator = condition.comparator.negated if condition.negated else condition.comparator
    left, right = condition.left, condition.right
    match left, right:
        case LiteralOperand(), VariableOperand():
            left, right, comparator = right, left, comparator.flipped
        case VariableOperand(key=left_key), VariableOperand(key=right_key) if right_key < left_key:
            left, right, comparator = right, left, comparator.flipped
    return f"{operand_signature(left)}|{comparator.value}|{operand_signature(right)}"


def clause_signature(conditions: Sequence[Condition]) -> ClauseSignature:
    """Canonical signature of one IF clause's conditions.

    When every connector in the clause is the same, the condition order is
    irrelevant and the signatures are sorted; mixed connectors keep their
    written order, each signature prefixed with its connector.
    """
    connectors = {condition.connector for condition in conditions[1:]}
    if len(connectors) <= 1:
        connector = next(iter(connectors)).value if connectors else "and"
        return (connector, *sorted(condition_signature(condition) for condition in conditions))
    return tuple(
        f"{condition.connector.value if condition.connector else ''}:{condition_signature(condition)}"
        for condition in conditions
    )


def find_duplicate_clause(clauses: Iterable[Sequence[Condition]]) -> DuplicateConditionError | None:
    """Return an error for the first clause whose signature repeats an earlier one.

    Clauses without conditions (bare formulas) are not compared.
    """
    seen: dict[ClauseSignature, int] = {}
    for index, conditions in enumerate(clauses):
        if not conditions:
            continue
        signature = clause_signature(conditions)
        if signature in seen:
            logger.debug("clause %d duplicates clause %d", index, seen[signature])
            return DuplicateConditionError(serialize_conditions(conditions))
        seen[signature] = index
    return None
