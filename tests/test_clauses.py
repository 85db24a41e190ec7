import pytest

from pricerulepy.analysis import clause_signature, condition_signature, find_duplicate_clause
from pricerulepy.diagnostics import (
    DuplicateConditionError,
    ElseWithoutIfError,
    EmptyFormulaError,
    FormulaTooLongError,
    MissingOperandError,
    MissingThenError,
    TypeMismatchError,
)
from pricerulepy.model import Connector
from pricerulepy.parser import (
    ParsedClause,
    ParserOptions,
    RuleSegment,
    parse_conditions,
    parse_rule,
    split_rule_clauses,
)
from tests._shared_cases import SAMPLE_VARIABLES


def test_split_rule_clauses_only_splits_before_if() -> None:
    segments = split_rule_clauses("IF a > 1 AND b < 2 THEN x OR IF b > 3 THEN y")

    assert segments == [
        RuleSegment(text="IF a > 1 AND b < 2 THEN x", connector=None, offset=0),
        RuleSegment(text="IF b > 3 THEN y", connector=Connector.OR, offset=29),
    ]


def test_split_rule_clauses_ignores_identifiers_starting_with_if() -> None:
    segments = split_rule_clauses("IF a > 1 AND iffy > 2 THEN x")

    assert len(segments) == 1


def test_split_rule_clauses_rejects_leading_connector() -> None:
    with pytest.raises(MissingOperandError):
        split_rule_clauses("AND IF a > 1 THEN x")


def test_parse_rule_builds_clause() -> None:
    clause = parse_rule("IF booking_hours >= 4 THEN booking_hours*10 else booking_hours*8", SAMPLE_VARIABLES)

    assert len(clause.conditions) == 1
    assert clause.formula == "booking_hours*10 ELSE booking_hours*8"
    assert clause.formula_parts.else_expression == "booking_hours*8"
    assert clause.connector is None


def test_parse_rule_accepts_bare_formula() -> None:
    assert parse_rule("  booking_hours * 3 ", SAMPLE_VARIABLES) == ParsedClause(
        conditions=(),
        formula="booking_hours * 3",
    )


def test_parse_rule_requires_then() -> None:
    with pytest.raises(MissingThenError):
        parse_rule("IF booking_hours > 1", SAMPLE_VARIABLES)


def test_then_inside_text_literal_is_not_a_keyword() -> None:
    with pytest.raises(MissingThenError):
        parse_rule("IF city = 'now THEN later'", SAMPLE_VARIABLES)


def test_parse_rule_requires_a_condition_after_if() -> None:
    with pytest.raises(MissingOperandError):
        parse_rule("IF THEN 1", SAMPLE_VARIABLES)


@pytest.mark.parametrize("text", ["IF guests > 1 THEN ELSE 2", "IF guests > 1 THEN 2 ELSE", ""])
def test_parse_rule_rejects_empty_formula_parts(text: str) -> None:
    with pytest.raises(EmptyFormulaError):
        parse_rule(text, SAMPLE_VARIABLES)


def test_else_needs_if() -> None:
    with pytest.raises(ElseWithoutIfError):
        parse_rule("1 ELSE 2", SAMPLE_VARIABLES)


def test_parse_rule_bounds_formula_length() -> None:
    with pytest.raises(FormulaTooLongError):
        parse_rule(
            "IF guests > 1 THEN 1 + 1 ELSE 2 + 2",
            SAMPLE_VARIABLES,
            options=ParserOptions(max_formula_length=10),
        )


def test_swapped_and_conditions_share_a_signature() -> None:
    first = parse_conditions("a > 1 AND b < 2", SAMPLE_VARIABLES)
    second = parse_conditions("b < 2.0 AND 1 < a", SAMPLE_VARIABLES)

    assert clause_signature(first) == clause_signature(second)


def test_duplicate_clause_is_detected() -> None:
    first = parse_rule("IF a>1 AND b<2 THEN x", SAMPLE_VARIABLES)
    second = parse_rule("IF b<2 AND a>1 THEN y", SAMPLE_VARIABLES)

    error = find_duplicate_clause([first.conditions, second.conditions])

    assert isinstance(error, DuplicateConditionError)
    assert error.message == "Duplicate condition `b < 2 AND a > 1`."


def test_connector_kind_is_part_of_the_signature() -> None:
    both = parse_conditions("a > 1 AND b < 2", SAMPLE_VARIABLES)
    either = parse_conditions("a > 1 OR b < 2", SAMPLE_VARIABLES)

    assert find_duplicate_clause([both, either]) is None


def test_mixed_connectors_keep_written_order() -> None:
    first = parse_conditions("a > 1 AND b < 2 OR x = 3", SAMPLE_VARIABLES)
    second = parse_conditions("b < 2 AND a > 1 OR x = 3", SAMPLE_VARIABLES)

    assert clause_signature(first) != clause_signature(second)
    assert find_duplicate_clause([first, second]) is None


def test_negated_structural_signatures_differ() -> None:
    plain = parse_conditions("guests > booking_hours", SAMPLE_VARIABLES)
    negated = parse_conditions("NOT guests > booking_hours", SAMPLE_VARIABLES)

    assert find_duplicate_clause([plain, negated]) is None
    assert isinstance(find_duplicate_clause([plain, plain]), DuplicateConditionError)


def test_bare_formulas_are_not_compared() -> None:
    assert find_duplicate_clause([(), ()]) is None


def test_condition_signature_prefers_normalized_constraint() -> None:
    numeric, structural = parse_conditions("3 < guests AND NOT guests > booking_hours", SAMPLE_VARIABLES)

    assert condition_signature(numeric) == "guests|>|3.0"
    assert condition_signature(structural) == "var:booking_hours|>=|var:guests"


@pytest.mark.parametrize(
    ("first", "second"),
    [
        ("a > b", "b < a"),
        ("NOT a <= b", "b < a"),
        ("guests > booking_hours*2", "guests > booking_hours * 2"),
        ("(booking_hours + 1) < guests", "guests > (booking_hours+1)"),
    ],
)
def test_spelling_variants_are_duplicate_clauses(first: str, second: str) -> None:
    clauses = [parse_conditions(first, SAMPLE_VARIABLES), parse_conditions(second, SAMPLE_VARIABLES)]

    assert clause_signature(clauses[0]) == clause_signature(clauses[1])
    assert isinstance(find_duplicate_clause(clauses), DuplicateConditionError)


def test_formula_over_text_variable_is_a_type_mismatch() -> None:
    with pytest.raises(TypeMismatchError, match='"city" is a text variable'):
        parse_rule("IF guests > 1 THEN city * 2", SAMPLE_VARIABLES)
