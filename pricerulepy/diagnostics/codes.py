"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final, Literal

Severity = Literal["error", "warning"]
Category = Literal["lexical", "syntax", "semantic", "consistency", "definition"]


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: Category | None = None


# -------------------------
# Lexical
# -------------------------

LEXER_UNEXPECTED_CHARACTER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNEXPECTED_CHARACTER",
    message="Unexpected character.",
    hint="Remove the character or wrap text values in quotes.",
    category="lexical",
)

LEXER_UNTERMINATED_LITERAL: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_LITERAL",
    message="Unterminated text literal.",
    hint="Close the text with the same quote it was opened with.",
    category="lexical",
)

# -------------------------
# Syntax
# -------------------------

SYNTAX_MISSING_COMPARATOR: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SYNTAX_MISSING_COMPARATOR",
    message="Condition is missing a comparator.",
    hint="Use one of <, <=, >, >=, = or !=.",
    category="syntax",
)

SYNTAX_MISSING_OPERAND: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SYNTAX_MISSING_OPERAND",
    message="Condition is missing an operand.",
    hint="Each side of a comparison and each side of AND/OR needs a value.",
    category="syntax",
)

SYNTAX_MISSING_THEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SYNTAX_MISSING_THEN",
    message="IF without THEN.",
    hint="Write rules as `IF <conditions> THEN <formula> [ELSE <formula>]`.",
    category="syntax",
)

SYNTAX_ELSE_WITHOUT_IF: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SYNTAX_ELSE_WITHOUT_IF",
    message="ELSE is only allowed after IF ... THEN.",
    category="syntax",
)

SYNTAX_UNBALANCED_PARENTHESES: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SYNTAX_UNBALANCED_PARENTHESES",
    message="Expected closing parenthesis.",
    category="syntax",
)

SYNTAX_UNEXPECTED_END: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SYNTAX_UNEXPECTED_END",
    message="Unexpected end of expression.",
    category="syntax",
)

SYNTAX_EMPTY_FORMULA: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SYNTAX_EMPTY_FORMULA",
    message="Enter a formula before validating.",
    category="syntax",
)

SYNTAX_FORMULA_TOO_LONG: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SYNTAX_FORMULA_TOO_LONG",
    message="Formula exceeds maximum length.",
    category="syntax",
)

SYNTAX_NESTING_TOO_DEEP: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SYNTAX_NESTING_TOO_DEEP",
    message="Formula exceeds maximum nesting depth.",
    hint="Flatten nested parentheses or repeated signs.",
    category="syntax",
)

SYNTAX_TOO_MANY_CONDITIONS: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SYNTAX_TOO_MANY_CONDITIONS",
    message="Too many conditions.",
    category="syntax",
)

SYNTAX_MULTIPLE_CLAUSES: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SYNTAX_MULTIPLE_CLAUSES",
    message="A price rule definition holds exactly one IF clause.",
    hint="Split the clauses into separate price rules.",
    category="syntax",
)

# -------------------------
# Semantic
# -------------------------

SEMANTIC_UNKNOWN_VARIABLE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SEMANTIC_UNKNOWN_VARIABLE",
    message="Unknown variable.",
    hint="Declare the variable before referencing it.",
    category="semantic",
)

SEMANTIC_UNRECOGNIZED_REFERENCE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SEMANTIC_UNRECOGNIZED_REFERENCE",
    message="Unrecognized reference.",
    hint="Use a declared variable, a number, quoted text, or date(), time(), datetime().",
    category="semantic",
)

SEMANTIC_TYPE_MISMATCH: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SEMANTIC_TYPE_MISMATCH",
    message="Operand types are not comparable.",
    category="semantic",
)

SEMANTIC_DIVISION_BY_ZERO: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SEMANTIC_DIVISION_BY_ZERO",
    message="Division by zero.",
    category="semantic",
)

SEMANTIC_INVALID_NUMBER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SEMANTIC_INVALID_NUMBER",
    message="Expression evaluates to an invalid number.",
    category="semantic",
)

SEMANTIC_INVALID_DATE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SEMANTIC_INVALID_DATE",
    message="Invalid date literal.",
    hint="Use date('YYYY-MM-DD').",
    category="semantic",
)

SEMANTIC_INVALID_TIME: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SEMANTIC_INVALID_TIME",
    message="Invalid time literal.",
    hint="Use time('HH:MM') or time('HH:MM', 'AM').",
    category="semantic",
)

SEMANTIC_INVALID_DATETIME: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SEMANTIC_INVALID_DATETIME",
    message="Invalid datetime literal.",
    hint="Use an ISO-8601 value such as datetime('2024-01-15T10:30:00Z').",
    category="semantic",
)

# -------------------------
# Consistency
# -------------------------

CONSISTENCY_DUPLICATE_CONDITION: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CONSISTENCY_DUPLICATE_CONDITION",
    message="Duplicate condition.",
    hint="Remove the repeated condition.",
    category="consistency",
)

CONSISTENCY_CONFLICTING_CONDITIONS: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CONSISTENCY_CONFLICTING_CONDITIONS",
    message="Conditions can never be true together.",
    hint="Join alternatives with OR instead of AND.",
    category="consistency",
)

# -------------------------
# Definition
# -------------------------

DEFINITION_INVALID: Final[DiagnosticSpec] = DiagnosticSpec(
    code="DEFINITION_INVALID",
    message="Invalid price rule.",
    category="definition",
)

DEFINITION_VARIABLE_IN_USE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="DEFINITION_VARIABLE_IN_USE",
    message="Variable cannot be removed.",
    hint="Remove the conditions that reference it first.",
    category="definition",
)
