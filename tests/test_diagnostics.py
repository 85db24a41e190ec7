from dataclasses import replace

from pricerulepy.diagnostics import (
    Diagnostic,
    MissingThenError,
    RuleSyntaxError,
    UnexpectedCharacterError,
    diagnostics_from_errors,
    format_diagnostic,
    has_errors,
)


def test_error_converts_to_diagnostic() -> None:
    diagnostic = UnexpectedCharacterError("$", position=3).to_diagnostic()

    assert diagnostic == Diagnostic(
        code="LEXER_UNEXPECTED_CHARACTER",
        message='Unexpected character "$".',
        position=3,
        severity="error",
        hint="Remove the character or wrap text values in quotes.",
        category="lexical",
    )


def test_default_message_comes_from_code() -> None:
    error = MissingThenError()

    assert isinstance(error, RuleSyntaxError)
    assert error.code == "SYNTAX_MISSING_THEN"
    assert str(error) == "IF without THEN."


def test_diagnostics_from_errors_skips_missing() -> None:
    diagnostics = diagnostics_from_errors(None, MissingThenError(position=7), None)

    assert [diagnostic.code for diagnostic in diagnostics] == ["SYNTAX_MISSING_THEN"]
    assert has_errors(diagnostics)


def test_warnings_are_not_errors() -> None:
    warning = replace(MissingThenError().to_diagnostic(), severity="warning")

    assert not has_errors([warning])
    assert not has_errors([])


def test_format_diagnostic() -> None:
    diagnostic = MissingThenError(position=7).to_diagnostic()

    assert format_diagnostic(diagnostic) == (
        "ERROR SYNTAX_MISSING_THEN at 7: IF without THEN.\n"
        "  hint: Write rules as `IF <conditions> THEN <formula> [ELSE <formula>]`."
    )
    assert format_diagnostic(Diagnostic(code="X", message="m", severity="warning")) == "WARNING X: m"
