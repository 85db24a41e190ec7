"""Price rule data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final, TypeAlias
import uuid


class VariableType(StrEnum):
    NUMBER = "number"
    TEXT = "text"
    DATE = "date"
    TIME = "time"


class LiteralType(StrEnum):
    NUMBER = "number"
    TEXT = "text"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"


class Connector(StrEnum):
    AND = "and"
    OR = "or"


class Comparator(StrEnum):
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    EQUAL = "="
    NOT_EQUAL = "!="

    @property
    def negated(self) -> Comparator:
        """Comparator that holds exactly when this one does not."""
        return _NEGATED[self]

    @property
    def flipped(self) -> Comparator:
        """Comparator to use when the operands swap sides."""
        return _FLIPPED[self]

    @property
    def is_ordering(self) -> bool:
        return self not in (Comparator.EQUAL, Comparator.NOT_EQUAL)


_NEGATED: Final[dict[Comparator, Comparator]] = {
    Comparator.LESS_THAN: Comparator.GREATER_THAN_OR_EQUAL,
    Comparator.LESS_THAN_OR_EQUAL: Comparator.GREATER_THAN,
    Comparator.GREATER_THAN: Comparator.LESS_THAN_OR_EQUAL,
    Comparator.GREATER_THAN_OR_EQUAL: Comparator.LESS_THAN,
    Comparator.EQUAL: Comparator.NOT_EQUAL,
    Comparator.NOT_EQUAL: Comparator.EQUAL,
}

_FLIPPED: Final[dict[Comparator, Comparator]] = {
    Comparator.LESS_THAN: Comparator.GREATER_THAN,
    Comparator.LESS_THAN_OR_EQUAL: Comparator.GREATER_THAN_OR_EQUAL,
    Comparator.GREATER_THAN: Comparator.LESS_THAN,
    Comparator.GREATER_THAN_OR_EQUAL: Comparator.LESS_THAN_OR_EQUAL,
    Comparator.EQUAL: Comparator.EQUAL,
    Comparator.NOT_EQUAL: Comparator.NOT_EQUAL,
}

# Scan order for locating a comparator: two-character symbols first.
COMPARATOR_SCAN_ORDER: Final[tuple[Comparator, ...]] = tuple(
    sorted(Comparator, key=lambda comparator: -len(comparator.value))
)

# Words the rule language reads as syntax; none of them can name a variable.
LANGUAGE_KEYWORDS: Final[frozenset[str]] = frozenset({"if", "then", "else", "and", "or", "not"})


@dataclass(frozen=True, slots=True)
class Variable:
    """Named value a rule can reference, e.g. `booking_hours`."""

    key: str
    label: str
    type: VariableType
    initial_value: str | None = None
    user_input: bool = False


@dataclass(frozen=True, slots=True)
class VariableOperand:
    key: str


@dataclass(frozen=True, slots=True)
class LiteralOperand:
    """Typed literal; `value` keeps the normalized source text."""

    value: str
    value_type: LiteralType


Operand: TypeAlias = VariableOperand | LiteralOperand


def new_condition_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True, slots=True)
class Condition:
    """One comparison in a flat AND/OR condition list.

    `id` identifies the condition for editing and takes no part in equality.
    """

    comparator: Comparator
    left: Operand
    right: Operand
    connector: Connector | None = None
    negated: bool = False
    id: str = field(default_factory=new_condition_id, compare=False)


@dataclass(frozen=True, slots=True)
class Definition:
    variables: tuple[Variable, ...] = ()
    conditions: tuple[Condition, ...] = ()
    formula: str = ""

    def variable(self, key: str) -> Variable | None:
        for variable in self.variables:
            if variable.key == key:
                return variable
        return None

    @property
    def variables_by_key(self) -> dict[str, Variable]:
        return {variable.key: variable for variable in self.variables}

    @property
    def numeric_keys(self) -> frozenset[str]:
        return frozenset(
            variable.key for variable in self.variables if variable.type == VariableType.NUMBER
        )


@dataclass(frozen=True, slots=True)
class PriceRule:
    name: str
    definition: Definition
    description: str | None = None


RESERVED_VARIABLES: Final[tuple[Variable, ...]] = (
    Variable(
        key="input_text",
        label="Input text",
        type=VariableType.TEXT,
        initial_value="",
    ),
    Variable(
        key="booking_hours",
        label="Booking hours",
        type=VariableType.NUMBER,
        initial_value="1",
    ),
)

RESERVED_VARIABLE_KEYS: Final[frozenset[str]] = frozenset(variable.key for variable in RESERVED_VARIABLES)


def default_definition() -> Definition:
    return Definition(variables=RESERVED_VARIABLES)
