"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from pricerulepy.diagnostics.diagnostic import Diagnostic
from pricerulepy.diagnostics.errors import RuleError


def diagnostics_from_errors(*errors: RuleError | None) -> list[Diagnostic]:
    return [error.to_diagnostic() for error in errors if error is not None]


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity == "error" for d in diagnostics)


def format_diagnostic(diagnostic: Diagnostic) -> str:
    location = f" at {diagnostic.position}" if diagnostic.position is not None else ""
    text = f"{diagnostic.severity.upper()} {diagnostic.code}{location}: {diagnostic.message}"
    if diagnostic.hint:
        text = f"{text}\n  hint: {diagnostic.hint}"
    return text
