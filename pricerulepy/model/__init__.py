"""Price rule data model, editing helpers and JSON-shaped codec."""

from pricerulepy.model.codec import (
    condition_from_dict,
    condition_to_dict,
    definition_from_dict,
    definition_to_dict,
    operand_from_dict,
    operand_to_dict,
    rule_from_dict,
    rule_to_dict,
    variable_from_dict,
    variable_to_dict,
)
from pricerulepy.model.edit import (
    add_variable,
    ensure_unique_key,
    remove_condition,
    remove_variable,
    replace_clause,
    used_variable_keys,
)
from pricerulepy.model.model import (
    COMPARATOR_SCAN_ORDER,
    LANGUAGE_KEYWORDS,
    RESERVED_VARIABLE_KEYS,
    RESERVED_VARIABLES,
    Comparator,
    Condition,
    Connector,
    Definition,
    LiteralOperand,
    LiteralType,
    Operand,
    PriceRule,
    Variable,
    VariableOperand,
    VariableType,
    default_definition,
    new_condition_id,
)

__all__ = [
    "COMPARATOR_SCAN_ORDER",
    "LANGUAGE_KEYWORDS",
    "RESERVED_VARIABLES",
    "RESERVED_VARIABLE_KEYS",
    "Comparator",
    "Condition",
    "Connector",
    "Definition",
    "LiteralOperand",
    "LiteralType",
    "Operand",
    "PriceRule",
    "Variable",
    "VariableOperand",
    "VariableType",
    "add_variable",
    "condition_from_dict",
    "condition_to_dict",
    "default_definition",
    "definition_from_dict",
    "definition_to_dict",
    "ensure_unique_key",
    "new_condition_id",
    "operand_from_dict",
    "operand_to_dict",
    "remove_condition",
    "remove_variable",
    "replace_clause",
    "rule_from_dict",
    "rule_to_dict",
    "used_variable_keys",
    "variable_from_dict",
    "variable_to_dict",
]
