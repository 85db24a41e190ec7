"""Definition editing helpers.

Each helper returns a new `Definition`; the input is never modified, so a
failed edit leaves the caller's previous definition intact.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
import re

from pricerulepy.diagnostics.errors import InvalidDefinitionError, VariableInUseError
from pricerulepy.model.model import (
    LANGUAGE_KEYWORDS,
    RESERVED_VARIABLE_KEYS,
    Condition,
    Definition,
    Variable,
    VariableOperand,
    VariableType,
)

_NON_KEY_RUN = re.compile(r"[^a-z0-9]+")
_USER_INPUT_TYPES = frozenset({VariableType.NUMBER, VariableType.TEXT})


def ensure_unique_key(desired: str, existing: Iterable[str]) -> str:
    """Derive a snake_case key from a label that does not collide with `existing`.

    Language keywords count as taken, so a label "Or" becomes `or_1`.
    """
    taken = set(existing) | LANGUAGE_KEYWORDS
    normalized = _NON_KEY_RUN.sub("_", desired.lower()).strip("_") or "custom"
    if normalized not in taken:
        return normalized

    suffix = 1
    while f"{normalized}_{suffix}" in taken:
        suffix += 1
    return f"{normalized}_{suffix}"


def used_variable_keys(definition: Definition) -> frozenset[str]:
    used: set[str] = set()
    for condition in definition.conditions:
        for operand in (condition.left, condition.right):
            if isinstance(operand, VariableOperand):
                used.add(operand.key)
    return frozenset(used)


def add_variable(
    definition: Definition,
    label: str,
    type: VariableType,
    *,
    initial_value: str | None = None,
    user_input: bool = False,
) -> Definition:
    trimmed = label.strip()
    if not trimmed:
        raise InvalidDefinitionError("Give the variable a label.", path=("variables",))
    if user_input and type not in _USER_INPUT_TYPES:
        raise InvalidDefinitionError(
            f"Only number and text variables can be user input, not {type}.",
            path=("variables",),
        )

    key = ensure_unique_key(trimmed, (variable.key for variable in definition.variables))
    variable = Variable(
        key=key,
        label=trimmed,
        type=type,
        initial_value=None if user_input else (initial_value or None),
        user_input=user_input,
    )
    return replace(definition, variables=(*definition.variables, variable))


def remove_variable(definition: Definition, key: str) -> Definition:
    if key in RESERVED_VARIABLE_KEYS:
        raise VariableInUseError(key, "it is a built-in variable")
    if key in used_variable_keys(definition):
        raise VariableInUseError(key, "it is referenced by a condition")
    if definition.variable(key) is None:
        raise InvalidDefinitionError(f'Unknown variable "{key}".', path=("variables",))
    return replace(
        definition,
        variables=tuple(variable for variable in definition.variables if variable.key != key),
    )


def remove_condition(definition: Definition, condition_id: str) -> Definition:
    remaining = [condition for condition in definition.conditions if condition.id != condition_id]
    if remaining and remaining[0].connector is not None:
        remaining[0] = replace(remaining[0], connector=None)
    return replace(definition, conditions=tuple(remaining))


def replace_clause(
    definition: Definition,
    conditions: Iterable[Condition],
    formula: str,
) -> Definition:
    return replace(definition, conditions=tuple(conditions), formula=formula)
