"""Typed errors raised by the rule-language engine.

Every error binds a `DiagnosticSpec` so the authoring form can render it
inline, and groups under one of the categories below:

- `LexicalError`: characters the language cannot tokenize.
- `RuleSyntaxError`: well-formed characters in an invalid arrangement.
- `SemanticError`: references and values that do not resolve or type-check.
- `ConsistencyError`: condition sets that are duplicated or unsatisfiable.
- `DefinitionError`: structural problems in a stored definition or an edit.
"""

from __future__ import annotations

from typing import ClassVar

from pricerulepy.diagnostics.codes import (
    CONSISTENCY_CONFLICTING_CONDITIONS,
    CONSISTENCY_DUPLICATE_CONDITION,
    DEFINITION_INVALID,
    DEFINITION_VARIABLE_IN_USE,
    LEXER_UNEXPECTED_CHARACTER,
    LEXER_UNTERMINATED_LITERAL,
    SEMANTIC_DIVISION_BY_ZERO,
    SEMANTIC_INVALID_DATE,
    SEMANTIC_INVALID_DATETIME,
    SEMANTIC_INVALID_NUMBER,
    SEMANTIC_INVALID_TIME,
    SEMANTIC_TYPE_MISMATCH,
    SEMANTIC_UNKNOWN_VARIABLE,
    SEMANTIC_UNRECOGNIZED_REFERENCE,
    SYNTAX_ELSE_WITHOUT_IF,
    SYNTAX_EMPTY_FORMULA,
    SYNTAX_FORMULA_TOO_LONG,
    SYNTAX_MISSING_COMPARATOR,
    SYNTAX_MISSING_OPERAND,
    SYNTAX_MISSING_THEN,
    SYNTAX_MULTIPLE_CLAUSES,
    SYNTAX_NESTING_TOO_DEEP,
    SYNTAX_TOO_MANY_CONDITIONS,
    SYNTAX_UNBALANCED_PARENTHESES,
    SYNTAX_UNEXPECTED_END,
    DiagnosticSpec,
)
from pricerulepy.diagnostics.diagnostic import Diagnostic


class RuleError(Exception):
    """Base class for every error the engine reports."""

    spec: ClassVar[DiagnosticSpec] = DEFINITION_INVALID

    def __init__(self, message: str | None = None, *, position: int | None = None) -> None:
        self.message = message if message is not None else self.spec.message
        self.position = position
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return self.spec.code

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            code=self.spec.code,
            message=self.message,
            position=self.position,
            severity=self.spec.severity,
            hint=self.spec.hint,
            category=self.spec.category,
        )


class LexicalError(RuleError):
    pass


class RuleSyntaxError(RuleError):
    pass


class SemanticError(RuleError):
    pass


class ConsistencyError(RuleError):
    pass


class DefinitionError(RuleError):
    pass


# -------------------------
# Lexical
# -------------------------


class UnexpectedCharacterError(LexicalError):
    spec = LEXER_UNEXPECTED_CHARACTER

    def __init__(self, char: str, *, position: int | None = None) -> None:
        self.char = char
        super().__init__(f'Unexpected character "{char}".', position=position)


class UnterminatedLiteralError(LexicalError):
    spec = LEXER_UNTERMINATED_LITERAL


# -------------------------
# Syntax
# -------------------------


class MissingComparatorError(RuleSyntaxError):
    spec = SYNTAX_MISSING_COMPARATOR


class MissingOperandError(RuleSyntaxError):
    spec = SYNTAX_MISSING_OPERAND


class MissingThenError(RuleSyntaxError):
    spec = SYNTAX_MISSING_THEN


class ElseWithoutIfError(RuleSyntaxError):
    spec = SYNTAX_ELSE_WITHOUT_IF


class UnbalancedParenthesesError(RuleSyntaxError):
    spec = SYNTAX_UNBALANCED_PARENTHESES


class UnexpectedEndError(RuleSyntaxError):
    spec = SYNTAX_UNEXPECTED_END


class EmptyFormulaError(RuleSyntaxError):
    spec = SYNTAX_EMPTY_FORMULA


class FormulaTooLongError(RuleSyntaxError):
    spec = SYNTAX_FORMULA_TOO_LONG

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Formula exceeds maximum length of {limit} characters.")


class NestingTooDeepError(RuleSyntaxError):
    spec = SYNTAX_NESTING_TOO_DEEP

    def __init__(self, limit: int, *, position: int | None = None) -> None:
        self.limit = limit
        super().__init__(f"Formula exceeds maximum nesting depth of {limit}.", position=position)


class TooManyConditionsError(RuleSyntaxError):
    spec = SYNTAX_TOO_MANY_CONDITIONS

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Number of conditions exceeds maximum of {limit}.")


class MultipleClausesError(RuleSyntaxError):
    spec = SYNTAX_MULTIPLE_CLAUSES

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"{SYNTAX_MULTIPLE_CLAUSES.message} Found {count}.")


# -------------------------
# Semantic
# -------------------------


class UnknownVariableError(SemanticError):
    spec = SEMANTIC_UNKNOWN_VARIABLE

    def __init__(self, key: str, *, position: int | None = None) -> None:
        self.key = key
        super().__init__(f'Unknown variable "{key}".', position=position)


class UnrecognizedReferenceError(SemanticError):
    spec = SEMANTIC_UNRECOGNIZED_REFERENCE

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f'Unrecognized reference "{token}".')


class TypeMismatchError(SemanticError):
    spec = SEMANTIC_TYPE_MISMATCH

    def __init__(
        self,
        variable_key: str | None,
        expected_kind: str,
        actual_kind: str,
        *,
        message: str | None = None,
        position: int | None = None,
    ) -> None:
        self.variable_key = variable_key
        self.expected_kind = expected_kind
        self.actual_kind = actual_kind
        if message is None and variable_key is None:
            message = f"Cannot compare a {expected_kind} value with a {actual_kind} value."
        elif message is None:
            message = f'"{variable_key}" expects a {expected_kind} value but was compared with {actual_kind}.'
        super().__init__(message, position=position)


class DivisionByZeroError(SemanticError):
    spec = SEMANTIC_DIVISION_BY_ZERO


class InvalidNumberError(SemanticError):
    spec = SEMANTIC_INVALID_NUMBER


class InvalidDateLiteralError(SemanticError):
    spec = SEMANTIC_INVALID_DATE


class InvalidTimeLiteralError(SemanticError):
    spec = SEMANTIC_INVALID_TIME


class InvalidDatetimeLiteralError(SemanticError):
    spec = SEMANTIC_INVALID_DATETIME


# -------------------------
# Consistency
# -------------------------


class DuplicateConditionError(ConsistencyError):
    spec = CONSISTENCY_DUPLICATE_CONDITION

    def __init__(self, signature: str) -> None:
        self.signature = signature
        super().__init__(f"Duplicate condition `{signature}`.")


class ConflictingConditionsError(ConsistencyError):
    spec = CONSISTENCY_CONFLICTING_CONDITIONS

    def __init__(self, variable_key: str) -> None:
        self.variable_key = variable_key
        super().__init__(f'Conditions on "{variable_key}" can never be true together.')


# -------------------------
# Definition
# -------------------------


class InvalidDefinitionError(DefinitionError):
    spec = DEFINITION_INVALID

    def __init__(self, message: str, *, path: tuple[str | int, ...] = ()) -> None:
        self.path = path
        super().__init__(message)


class VariableInUseError(DefinitionError):
    spec = DEFINITION_VARIABLE_IN_USE

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        super().__init__(f'Variable "{key}" cannot be removed: {reason}.')
