"""Diagnostics core types."""

from dataclasses import dataclass

from pricerulepy.diagnostics.codes import Category, Severity


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic handed back to the authoring form."""

    code: str
    message: str
    position: int | None = None
    severity: Severity = "error"
    hint: str | None = None
    category: Category | None = None
