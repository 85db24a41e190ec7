"""Entrypoints that run split, parse, analysis and formatting over one rule text."""

from __future__ import annotations

from dataclasses import replace
import logging

from pricerulepy.analysis.duplicates import find_duplicate_clause
from pricerulepy.diagnostics import Diagnostic, EmptyFormulaError, MultipleClausesError, RuleError, has_errors
from pricerulepy.format.serializer import serialize_clauses
from pricerulepy.model.edit import replace_clause
from pricerulepy.model.model import Definition
from pricerulepy.parser.options import ParserOptions, resolve_options
from pricerulepy.parser.rule import ParsedClause, parse_rule, split_rule_clauses
from pricerulepy.pipeline.results import RuleCheckResult

logger = logging.getLogger(__name__)


def parse_rule_text(
    text: str,
    definition: Definition,
    options: ParserOptions | None = None,
) -> tuple[ParsedClause, ...]:
    """Parse every clause of `text` against the variables of `definition`."""
    resolved_options = resolve_options(options)
    segments = split_rule_clauses(text)
    if not segments:
        raise EmptyFormulaError()

    variables = definition.variables_by_key
    clauses = tuple(
        parse_rule(segment.text, variables, connector=segment.connector, options=resolved_options)
        for segment in segments
    )
    duplicate = find_duplicate_clause(clause.conditions for clause in clauses)
    if duplicate is not None:
        raise duplicate
    logger.debug("parsed %d clause(s) from %d characters", len(clauses), len(text))
    return clauses


def apply_rule_text(
    definition: Definition,
    text: str,
    options: ParserOptions | None = None,
    *,
    parse: tuple[ParsedClause, ...] | None = None,
) -> Definition:
    """Return a copy of `definition` holding the single clause in `text`.

    Raises on any rule error, leaving `definition` untouched.
    """
    clauses = _resolve_parse(text, definition, options=options, parse=parse)
    if len(clauses) != 1:
        raise MultipleClausesError(len(clauses))
    return replace_clause(definition, clauses[0].conditions, clauses[0].formula)


def check_rule_text(
    text: str,
    definition: Definition,
    options: ParserOptions | None = None,
    *,
    parse: tuple[ParsedClause, ...] | None = None,
) -> RuleCheckResult:
    """Check rule text and report problems as diagnostics instead of raising."""
    try:
        clauses = _resolve_parse(text, definition, options=options, parse=parse)
    except RuleError as exc:
        logger.debug("rule text rejected with %s", exc.code)
        diagnostics = [exc.to_diagnostic()]
        return RuleCheckResult(
            source_text=text,
            clauses=(),
            definition=None,
            canonical_text=None,
            diagnostics=diagnostics,
            has_errors=has_errors(diagnostics),
        )

    diagnostics: list[Diagnostic] = []
    updated: Definition | None = None
    if len(clauses) == 1:
        updated = replace_clause(definition, clauses[0].conditions, clauses[0].formula)
    else:
        diagnostics.append(replace(MultipleClausesError(len(clauses)).to_diagnostic(), severity="warning"))

    return RuleCheckResult(
        source_text=text,
        clauses=clauses,
        definition=updated,
        canonical_text=serialize_clauses(clauses),
        diagnostics=diagnostics,
        has_errors=has_errors(diagnostics),
    )


def _resolve_parse(
    text: str,
    definition: Definition,
    *,
    options: ParserOptions | None,
    parse: tuple[ParsedClause, ...] | None,
) -> tuple[ParsedClause, ...]:
    if parse is not None:
        if options is not None:
            raise ValueError("Pass either parse or options, not both")
        return parse
    return parse_rule_text(text, definition, options)
