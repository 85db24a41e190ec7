import pytest

from pricerulepy.diagnostics import (
    MissingComparatorError,
    MissingOperandError,
    TooManyConditionsError,
    TypeMismatchError,
    UnrecognizedReferenceError,
)
from pricerulepy.model import Comparator, Connector, LiteralOperand, LiteralType, VariableOperand
from pricerulepy.parser import ParserOptions, parse_condition, parse_conditions
from tests._shared_cases import SAMPLE_VARIABLES


def test_parse_conditions_yields_ordered_conditions() -> None:
    conditions = parse_conditions("booking_hours > 4 AND booking_hours < 10", SAMPLE_VARIABLES)

    assert len(conditions) == 2
    assert conditions[0].connector is None
    assert conditions[1].connector == Connector.AND
    assert [condition.comparator for condition in conditions] == [Comparator.GREATER_THAN, Comparator.LESS_THAN]
    assert conditions[0].left == VariableOperand("booking_hours")
    assert conditions[0].right == LiteralOperand("4", LiteralType.NUMBER)


def test_leading_not_sets_negated() -> None:
    (condition,) = parse_conditions("NOT city = 'Manila'", SAMPLE_VARIABLES)

    assert condition.negated is True
    assert condition.comparator == Comparator.EQUAL
    assert condition.left == VariableOperand("city")
    assert condition.right == LiteralOperand("Manila", LiteralType.TEXT)


def test_not_prefix_is_case_insensitive_and_needs_a_space() -> None:
    assert parse_condition("not guests = 2", SAMPLE_VARIABLES).negated is True
    with pytest.raises(UnrecognizedReferenceError):
        parse_condition("notguests = 2", SAMPLE_VARIABLES)


def test_comparator_inside_text_literal_is_ignored() -> None:
    condition = parse_condition("city != 'a<=b'", SAMPLE_VARIABLES)

    assert condition.comparator == Comparator.NOT_EQUAL
    assert condition.right == LiteralOperand("a<=b", LiteralType.TEXT)


def test_literal_may_sit_on_the_left() -> None:
    condition = parse_condition("10 >= guests", SAMPLE_VARIABLES)

    assert condition.left == LiteralOperand("10", LiteralType.NUMBER)
    assert condition.right == VariableOperand("guests")


def test_variable_to_variable_comparison() -> None:
    condition = parse_condition("guests > booking_hours", SAMPLE_VARIABLES)

    assert condition.right == VariableOperand("booking_hours")


def test_text_variable_compared_with_number_is_a_type_mismatch() -> None:
    with pytest.raises(TypeMismatchError) as exc_info:
        parse_conditions("city = 5", SAMPLE_VARIABLES)

    assert exc_info.value.variable_key == "city"
    assert exc_info.value.expected_kind == "text"
    assert exc_info.value.actual_kind == "number"


def test_missing_comparator() -> None:
    with pytest.raises(MissingComparatorError):
        parse_conditions("booking_hours 4", SAMPLE_VARIABLES)


@pytest.mark.parametrize("text", ["> 4", "booking_hours >", "NOT = 1"])
def test_missing_operand(text: str) -> None:
    with pytest.raises(MissingOperandError):
        parse_conditions(text, SAMPLE_VARIABLES)


def test_condition_count_is_bounded() -> None:
    text = " AND ".join(f"guests != {value}" for value in range(4))

    assert len(parse_conditions(text, SAMPLE_VARIABLES, options=ParserOptions(max_conditions=4))) == 4
    with pytest.raises(TooManyConditionsError, match="maximum of 3"):
        parse_conditions(text, SAMPLE_VARIABLES, options=ParserOptions(max_conditions=3))


def test_condition_ids_are_unique_but_ignored_by_equality() -> None:
    first = parse_condition("guests > 1", SAMPLE_VARIABLES)
    second = parse_condition("guests > 1", SAMPLE_VARIABLES)

    assert first.id != second.id
    assert first == second
