import pytest

from pricerulepy.diagnostics import (
    ConflictingConditionsError,
    DuplicateConditionError,
    MultipleClausesError,
    TypeMismatchError,
)
from pricerulepy.model import Connector, default_definition
from pricerulepy.parser import ParserOptions
from pricerulepy.pipeline import apply_rule_text, check_rule_text, parse_rule_text
from tests._shared_cases import INVALID_RULE_CASES, SAMPLE_DEFINITION, VALID_RULE_CASES, RuleCase, case_id


@pytest.mark.parametrize("case", VALID_RULE_CASES, ids=case_id)
def test_check_rule_text_accepts_valid_rules(case: RuleCase) -> None:
    result = check_rule_text(case.source, SAMPLE_DEFINITION)

    assert result.has_errors is False
    assert len(result.clauses) == case.clause_count
    assert result.canonical_text is not None
    if case.clause_count == 1:
        assert result.definition is not None
        assert result.diagnostics == []


@pytest.mark.parametrize("case", INVALID_RULE_CASES, ids=case_id)
def test_check_rule_text_reports_invalid_rules(case: RuleCase) -> None:
    result = check_rule_text(case.source, SAMPLE_DEFINITION)

    assert result.has_errors is True
    assert result.definition is None
    assert result.canonical_text is None
    assert [diagnostic.code for diagnostic in result.diagnostics] == [case.error_code]


def test_parse_rule_text_records_clause_connectors() -> None:
    clauses = parse_rule_text("IF guests > 10 THEN guests * 2 AND IF city = 'Manila' THEN 5", SAMPLE_DEFINITION)

    assert [clause.connector for clause in clauses] == [None, Connector.AND]


def test_parse_rule_text_raises_conflicts() -> None:
    with pytest.raises(ConflictingConditionsError):
        parse_rule_text("IF booking_hours > 10 AND booking_hours < 5 THEN 0", SAMPLE_DEFINITION)


def test_parse_rule_text_raises_duplicate_clauses() -> None:
    with pytest.raises(DuplicateConditionError):
        parse_rule_text("IF a > 1 AND b < 2 THEN x OR IF b < 2 AND a > 1 THEN y", SAMPLE_DEFINITION)


def test_apply_rule_text_replaces_clause_without_touching_input() -> None:
    original = apply_rule_text(SAMPLE_DEFINITION, "IF guests > 2 THEN guests * 3")

    updated = apply_rule_text(original, "IF booking_hours >= 4 THEN booking_hours*10 ELSE booking_hours*8")

    assert updated.variables == original.variables
    assert updated.formula == "booking_hours*10 ELSE booking_hours*8"
    assert original.formula == "guests * 3"
    assert len(original.conditions) == 1


def test_apply_rule_text_is_atomic_on_failure() -> None:
    original = apply_rule_text(SAMPLE_DEFINITION, "IF guests > 2 THEN guests * 3")

    with pytest.raises(TypeMismatchError):
        apply_rule_text(original, "IF city = 5 THEN 1")
    assert original.formula == "guests * 3"


def test_apply_rule_text_rejects_multiple_clauses() -> None:
    with pytest.raises(MultipleClausesError, match="Found 2"):
        apply_rule_text(SAMPLE_DEFINITION, "IF guests > 10 THEN 2 OR IF guests < 3 THEN 1")


def test_check_rule_text_warns_on_multiple_clauses() -> None:
    result = check_rule_text("IF guests > 10 THEN 2 OR IF guests < 3 THEN 1", SAMPLE_DEFINITION)

    assert result.has_errors is False
    assert result.definition is None
    assert result.canonical_text == "IF guests > 10 THEN 2 OR IF guests < 3 THEN 1"
    assert [(diagnostic.code, diagnostic.severity) for diagnostic in result.diagnostics] == [
        ("SYNTAX_MULTIPLE_CLAUSES", "warning")
    ]


def test_check_rule_text_uses_definition_variables() -> None:
    result = check_rule_text("IF guests > 2 THEN 1", default_definition())

    assert result.has_errors is True
    assert result.diagnostics[0].code == "SEMANTIC_UNRECOGNIZED_REFERENCE"


def test_check_rule_text_reuses_provided_parse() -> None:
    clauses = parse_rule_text("booking_hours * 2", SAMPLE_DEFINITION)

    result = check_rule_text("ignored", SAMPLE_DEFINITION, parse=clauses)

    assert result.clauses is clauses
    assert result.canonical_text == "booking_hours * 2"


def test_check_rule_text_rejects_parse_with_options() -> None:
    clauses = parse_rule_text("booking_hours * 2", SAMPLE_DEFINITION)

    with pytest.raises(ValueError, match="Pass either parse or options, not both"):
        check_rule_text("ignored", SAMPLE_DEFINITION, ParserOptions(), parse=clauses)


def test_diagnostic_carries_position() -> None:
    result = check_rule_text("booking_hours $ 2", SAMPLE_DEFINITION)

    (diagnostic,) = result.diagnostics
    assert diagnostic.position == 14
    assert diagnostic.category == "lexical"


@pytest.mark.parametrize(
    "text",
    [
        "IF a > b THEN 1 OR IF b < a THEN 2",
        "IF guests > booking_hours*2 THEN 1 OR IF guests > booking_hours * 2 THEN 2",
    ],
)
def test_parse_rule_text_raises_on_reordered_or_respaced_clauses(text: str) -> None:
    with pytest.raises(DuplicateConditionError):
        parse_rule_text(text, SAMPLE_DEFINITION)


def test_canonical_text_compacts_arithmetic_operands() -> None:
    result = check_rule_text("IF guests > booking_hours * 2 THEN guests", SAMPLE_DEFINITION)

    assert result.canonical_text == "IF guests > booking_hours*2 THEN guests"
