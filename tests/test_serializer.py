import pytest

from pricerulepy.format import render_operand, serialize_clauses, serialize_conditions, serialize_definition
from pricerulepy.model import Comparator, Condition, Connector, Definition, LiteralOperand, LiteralType, VariableOperand
from pricerulepy.parser import parse_conditions
from pricerulepy.pipeline import apply_rule_text, parse_rule_text
from pricerulepy.typecheck import validate_definition
from tests._shared_cases import SAMPLE_DEFINITION, SAMPLE_VARIABLES, VALID_RULE_CASES, RuleCase, case_id


@pytest.mark.parametrize(
    ("operand", "expected"),
    [
        (VariableOperand("booking_hours"), "booking_hours"),
        (LiteralOperand("4.5", LiteralType.NUMBER), "4.5"),
        (LiteralOperand("(guests + 1) * 2", LiteralType.NUMBER), "(guests+1)*2"),
        (LiteralOperand("Manila", LiteralType.TEXT), "'Manila'"),
        (LiteralOperand("O'Hare", LiteralType.TEXT), '"O\'Hare"'),
        (LiteralOperand("2024-01-01", LiteralType.DATE), "date('2024-01-01')"),
        (LiteralOperand("18:30", LiteralType.TIME), "time('18:30')"),
        (LiteralOperand("2024-01-01T08:00:00", LiteralType.DATETIME), "datetime('2024-01-01T08:00:00')"),
    ],
)
def test_render_operand(operand: VariableOperand | LiteralOperand, expected: str) -> None:
    assert render_operand(operand) == expected


def test_serialize_conditions_uppercases_connectors_and_not() -> None:
    conditions = parse_conditions("not city = 'Manila' or guests >= 3 and guests < 8", SAMPLE_VARIABLES)

    assert serialize_conditions(conditions) == "NOT city = 'Manila' OR guests >= 3 AND guests < 8"


def test_serialize_definition_without_conditions_is_the_formula() -> None:
    assert serialize_definition(Definition(formula="booking_hours * 2")) == "booking_hours * 2"


def test_serialize_definition_renders_if_then_else() -> None:
    definition = apply_rule_text(
        SAMPLE_DEFINITION,
        "if start_time >= time('6:00', 'PM') then booking_hours * 11 else booking_hours * 9",
    )

    assert serialize_definition(definition) == (
        "IF start_time >= time('18:00') THEN booking_hours * 11 ELSE booking_hours * 9"
    )


@pytest.mark.parametrize("case", VALID_RULE_CASES, ids=case_id)
def test_parse_serialize_round_trip(case: RuleCase) -> None:
    clauses = parse_rule_text(case.source, SAMPLE_DEFINITION)
    canonical = serialize_clauses(clauses)

    reparsed = parse_rule_text(canonical, SAMPLE_DEFINITION)

    assert reparsed == clauses
    assert serialize_clauses(reparsed) == canonical


def test_validated_definition_survives_serialize_and_parse() -> None:
    definition = Definition(
        variables=SAMPLE_DEFINITION.variables,
        conditions=(
            Condition(Comparator.GREATER_THAN, VariableOperand("guests"), LiteralOperand("2", LiteralType.NUMBER)),
            Condition(
                Comparator.EQUAL,
                VariableOperand("city"),
                LiteralOperand("Manila", LiteralType.TEXT),
                connector=Connector.AND,
                negated=True,
            ),
        ),
        formula="guests * 3 ELSE 1",
    )
    validate_definition(definition)

    (clause,) = parse_rule_text(serialize_definition(definition), definition)

    assert clause.conditions == definition.conditions
    assert clause.formula == definition.formula
