"""Pipeline run result carriers."""

from __future__ import annotations

from dataclasses import dataclass

from pricerulepy.diagnostics import Diagnostic
from pricerulepy.model.model import Definition
from pricerulepy.parser.rule import ParsedClause


@dataclass(frozen=True, slots=True)
class RuleCheckResult:
    """Outcome of checking rule text against a definition.

    `definition` is only set when the text holds exactly one clause and
    parsed cleanly; `canonical_text` whenever it parsed cleanly.
    """

    source_text: str
    clauses: tuple[ParsedClause, ...]
    definition: Definition | None
    canonical_text: str | None
    diagnostics: list[Diagnostic]
    has_errors: bool
