"""Rule-language parsing: formulas, literals, operands, conditions and clauses."""

from pricerulepy.parser.conditions import parse_condition, parse_conditions
from pricerulepy.parser.formula import (
    FormulaParts,
    collect_formula_variables,
    evaluate_formula,
    split_formula,
    validate_formula,
    validate_number_expression,
)
from pricerulepy.parser.literals import normalize_time_literal, validate_date_literal, validate_datetime_literal
from pricerulepy.parser.operands import parse_operand
from pricerulepy.parser.options import DEFAULT_OPTIONS, MAX_NESTING_DEPTH_LIMIT, ParserOptions, resolve_options
from pricerulepy.parser.rule import ParsedClause, RuleSegment, parse_rule, split_rule_clauses
from pricerulepy.parser.splitter import CONNECTOR_KEYWORDS, ConditionClause, split_conditions

__all__ = [
    "CONNECTOR_KEYWORDS",
    "DEFAULT_OPTIONS",
    "MAX_NESTING_DEPTH_LIMIT",
    "ConditionClause",
    "FormulaParts",
    "ParsedClause",
    "ParserOptions",
    "RuleSegment",
    "collect_formula_variables",
    "evaluate_formula",
    "normalize_time_literal",
    "parse_condition",
    "parse_conditions",
    "parse_operand",
    "parse_rule",
    "resolve_options",
    "split_conditions",
    "split_formula",
    "split_rule_clauses",
    "validate_date_literal",
    "validate_datetime_literal",
    "validate_formula",
    "validate_number_expression",
]
