"""Structural validation of stored definitions and rules."""

from __future__ import annotations

import re
from typing import Final

from pricerulepy.diagnostics.errors import InvalidDefinitionError, RuleError
from pricerulepy.model.model import (
    LANGUAGE_KEYWORDS,
    Definition,
    LiteralOperand,
    LiteralType,
    PriceRule,
    VariableOperand,
    VariableType,
)
from pricerulepy.parser.options import ParserOptions, resolve_options
from pricerulepy.typecheck.compat import check_operand_types

VARIABLE_KEY_RE: Final = re.compile(r"[a-z_][a-z0-9_]*")
_ELSE_WORD_RE: Final = re.compile(r"(?<!\S)else(?!\S)", re.IGNORECASE)
_USER_INPUT_TYPES: Final[frozenset[VariableType]] = frozenset({VariableType.NUMBER, VariableType.TEXT})


def validate_definition(definition: Definition, options: ParserOptions | None = None) -> None:
    """Raise `InvalidDefinitionError` at the first structural problem in `definition`."""
    resolved_options = resolve_options(options)

    seen: set[str] = set()
    for index, variable in enumerate(definition.variables):
        path = ("variables", index)
        if not VARIABLE_KEY_RE.fullmatch(variable.key):
            raise InvalidDefinitionError(
                f'Variable key "{variable.key}" must be lowercase letters, digits and underscores.',
                path=(*path, "key"),
            )
        if variable.key in LANGUAGE_KEYWORDS:
            raise InvalidDefinitionError(
                f'Variable key "{variable.key}" is a rule keyword.',
                path=(*path, "key"),
            )
        if variable.key in seen:
            raise InvalidDefinitionError(f'Duplicate variable key "{variable.key}".', path=(*path, "key"))
        seen.add(variable.key)
        if not variable.label.strip():
            raise InvalidDefinitionError("Give each variable a label.", path=(*path, "label"))
        if variable.user_input and variable.type not in _USER_INPUT_TYPES:
            raise InvalidDefinitionError(
                "Only number and text variables can be user input.",
                path=(*path, "userInput"),
            )

    if len(definition.conditions) > resolved_options.max_conditions:
        raise InvalidDefinitionError(
            f"Number of conditions exceeds maximum of {resolved_options.max_conditions}.",
            path=("conditions",),
        )

    variables = definition.variables_by_key
    for index, condition in enumerate(definition.conditions):
        path = ("conditions", index)
        if index == 0 and condition.connector is not None:
            raise InvalidDefinitionError("The first condition cannot have a connector.", path=(*path, "connector"))
        if index > 0 and condition.connector is None:
            raise InvalidDefinitionError("Join each condition with AND or OR.", path=(*path, "connector"))
        for side in ("left", "right"):
            operand = getattr(condition, side)
            match operand:
                case VariableOperand(key=key) if key not in variables:
                    raise InvalidDefinitionError(f'Unknown variable "{key}".', path=(*path, side))
                case LiteralOperand(value=""):
                    raise InvalidDefinitionError("Literal values cannot be empty.", path=(*path, side))
                case LiteralOperand(value=value, value_type=LiteralType.TEXT) if "'" in value and '"' in value:
                    raise InvalidDefinitionError(
                        "Text values cannot contain both single and double quotes.",
                        path=(*path, side),
                    )
        try:
            check_operand_types(condition.left, condition.right, variables)
        except RuleError as exc:
            raise InvalidDefinitionError(exc.message, path=path) from exc

    if not definition.formula.strip():
        raise InvalidDefinitionError("Add a formula to determine the price action.", path=("formula",))
    if len(definition.formula) > resolved_options.max_formula_length:
        raise InvalidDefinitionError(
            f"Formula exceeds maximum length of {resolved_options.max_formula_length} characters.",
            path=("formula",),
        )
    if not definition.conditions and _ELSE_WORD_RE.search(definition.formula):
        raise InvalidDefinitionError("ELSE needs at least one condition.", path=("formula",))


def validate_rule(rule: PriceRule, options: ParserOptions | None = None) -> None:
    resolved_options = resolve_options(options)
    if not rule.name.strip():
        raise InvalidDefinitionError("Name is required.", path=("name",))
    if rule.description is not None and len(rule.description) > resolved_options.max_description_length:
        raise InvalidDefinitionError(
            f"Description exceeds maximum length of {resolved_options.max_description_length} characters.",
            path=("description",),
        )
    try:
        validate_definition(rule.definition, resolved_options)
    except InvalidDefinitionError as exc:
        raise InvalidDefinitionError(exc.message, path=("definition", *exc.path)) from exc
