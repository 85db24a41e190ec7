"""Diagnostics."""

from pricerulepy.diagnostics.codes import Category, DiagnosticSpec, Severity
from pricerulepy.diagnostics.diagnostic import Diagnostic
from pricerulepy.diagnostics.errors import (
    ConflictingConditionsError,
    ConsistencyError,
    DefinitionError,
    DivisionByZeroError,
    DuplicateConditionError,
    ElseWithoutIfError,
    EmptyFormulaError,
    FormulaTooLongError,
    InvalidDateLiteralError,
    InvalidDatetimeLiteralError,
    InvalidDefinitionError,
    InvalidNumberError,
    InvalidTimeLiteralError,
    LexicalError,
    MissingComparatorError,
    MissingOperandError,
    MissingThenError,
    MultipleClausesError,
    NestingTooDeepError,
    RuleError,
    RuleSyntaxError,
    SemanticError,
    TooManyConditionsError,
    TypeMismatchError,
    UnbalancedParenthesesError,
    UnexpectedCharacterError,
    UnexpectedEndError,
    UnknownVariableError,
    UnrecognizedReferenceError,
    UnterminatedLiteralError,
    VariableInUseError,
)
from pricerulepy.diagnostics.report import diagnostics_from_errors, format_diagnostic, has_errors

__all__ = [
    "Category",
    "ConflictingConditionsError",
    "ConsistencyError",
    "DefinitionError",
    "Diagnostic",
    "DiagnosticSpec",
    "DivisionByZeroError",
    "DuplicateConditionError",
    "ElseWithoutIfError",
    "EmptyFormulaError",
    "FormulaTooLongError",
    "InvalidDateLiteralError",
    "InvalidDatetimeLiteralError",
    "InvalidDefinitionError",
    "InvalidNumberError",
    "InvalidTimeLiteralError",
    "LexicalError",
    "MissingComparatorError",
    "MissingOperandError",
    "MissingThenError",
    "MultipleClausesError",
    "NestingTooDeepError",
    "RuleError",
    "RuleSyntaxError",
    "SemanticError",
    "Severity",
    "TooManyConditionsError",
    "TypeMismatchError",
    "UnbalancedParenthesesError",
    "UnexpectedCharacterError",
    "UnexpectedEndError",
    "UnknownVariableError",
    "UnrecognizedReferenceError",
    "UnterminatedLiteralError",
    "VariableInUseError",
    "diagnostics_from_errors",
    "format_diagnostic",
    "has_errors",
]
