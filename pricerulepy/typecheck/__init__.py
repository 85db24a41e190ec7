"""Type compatibility and structural validation."""

from pricerulepy.typecheck.compat import ACCEPTED_LITERALS, check_condition_types, check_operand_types
from pricerulepy.typecheck.definition import VARIABLE_KEY_RE, validate_definition, validate_rule

__all__ = [
    "ACCEPTED_LITERALS",
    "VARIABLE_KEY_RE",
    "check_condition_types",
    "check_operand_types",
    "validate_definition",
    "validate_rule",
]
