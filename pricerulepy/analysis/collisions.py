"""Self-consistency checks for AND-groups of conditions.

A condition list is read left to right with no precedence: every `or`
connector starts a new AND-group, and only conditions inside one group are
checked against each other. Within a group, each `variable <cmp> literal`
comparison narrows a per-variable state (an interval plus equality and
exclusion sets for numbers; equality and exclusions for text). A state that
admits no value is a conflict.

Numbers are compared as exact floats with no tolerance. Ordering comparisons
on text, dates and times are not tracked.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
import logging

from pricerulepy.diagnostics.errors import ConflictingConditionsError, ConsistencyError, DuplicateConditionError
from pricerulepy.lexer.scan import NUMBER_LITERAL_RE
from pricerulepy.model.model import Comparator, Condition, Connector, LiteralOperand, LiteralType, VariableOperand

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Bound:
    value: float
    inclusive: bool


@dataclass(frozen=True, slots=True)
class Constraint:
    """A comparison normalized to `key <comparator> value`."""

    key: str
    comparator: Comparator
    value: float | str

    @property
    def fingerprint(self) -> str:
        return f"{self.key}|{self.comparator.value}|{self.value}"


@dataclass(slots=True)
class NumericState:
    lower: Bound | None = None
    upper: Bound | None = None
    equal: float | None = None
    excludes: set[float] = field(default_factory=set)

    def apply(self, comparator: Comparator, value: float) -> bool:
        """Narrow the state; return False once no value satisfies it."""
        match comparator:
            case Comparator.GREATER_THAN | Comparator.GREATER_THAN_OR_EQUAL:
                self.lower = _tighter_lower(self.lower, Bound(value, comparator == Comparator.GREATER_THAN_OR_EQUAL))
            case Comparator.LESS_THAN | Comparator.LESS_THAN_OR_EQUAL:
                self.upper = _tighter_upper(self.upper, Bound(value, comparator == Comparator.LESS_THAN_OR_EQUAL))
            case Comparator.EQUAL:
                if not self._admits(value):
                    return False
                self.equal = value
                self.lower = Bound(value, True)
                self.upper = Bound(value, True)
            case Comparator.NOT_EQUAL:
                if self.equal == value:
                    return False
                self.excludes.add(value)
        return self._satisfiable()

    def _admits(self, value: float) -> bool:
        if value in self.excludes:
            return False
        if self.equal is not None and self.equal != value:
            return False
        return _above(value, self.lower) and _below(value, self.upper)

    def _satisfiable(self) -> bool:
        if self.lower is None or self.upper is None:
            return True
        if self.lower.value > self.upper.value:
            return False
        if self.lower.value == self.upper.value:
            # A single point must be included by both bounds and not excluded.
            return self.lower.inclusive and self.upper.inclusive and self.lower.value not in self.excludes
        return True


@dataclass(slots=True)
class TextState:
    equal: str | None = None
    excludes: set[str] = field(default_factory=set)

    def apply(self, comparator: Comparator, value: str) -> bool:
        match comparator:
            case Comparator.EQUAL:
                if value in self.excludes or (self.equal is not None and self.equal != value):
                    return False
                self.equal = value
            case Comparator.NOT_EQUAL:
                if self.equal == value:
                    return False
                self.excludes.add(value)
        return True


def _above(value: float, bound: Bound | None) -> bool:
    return bound is None or value > bound.value or (value == bound.value and bound.inclusive)


def _below(value: float, bound: Bound | None) -> bool:
    return bound is None or value < bound.value or (value == bound.value and bound.inclusive)


def _tighter_lower(current: Bound | None, candidate: Bound) -> Bound:
    if current is None or candidate.value > current.value:
        return candidate
    if candidate.value == current.value:
        return Bound(current.value, current.inclusive and candidate.inclusive)
    return current


def _tighter_upper(current: Bound | None, candidate: Bound) -> Bound:
    if current is None or candidate.value < current.value:
        return candidate
    if candidate.value == current.value:
        return Bound(current.value, current.inclusive and candidate.inclusive)
    return current


def normalize_constraint(condition: Condition) -> Constraint | None:
    """Fold `NOT` and operand order into a `variable <cmp> literal` constraint.

    Returns None for comparisons the detector cannot reason about: two
    variables, two literals, arithmetic literals, dates and times.
    """
    comparator = condition.comparator.negated if condition.negated else condition.comparator
    match condition.left, condition.right:
        case VariableOperand(key=key), LiteralOperand() as literal:
            pass
        case LiteralOperand() as literal, VariableOperand(key=key):
            comparator = comparator.flipped
        case _:
            return None

    match literal.value_type:
        case LiteralType.NUMBER if NUMBER_LITERAL_RE.fullmatch(literal.value):
            return Constraint(key=key, comparator=comparator, value=float(literal.value))
        case LiteralType.TEXT:
            return Constraint(key=key, comparator=comparator, value=literal.value)
    return None


def iter_and_groups(conditions: Sequence[Condition]) -> Iterator[list[Condition]]:
    group: list[Condition] = []
    for condition in conditions:
        if condition.connector == Connector.OR and group:
            yield group
            group = []
        group.append(condition)
    if group:
        yield group


def detect_collisions(conditions: Sequence[Condition]) -> ConsistencyError | None:
    """Return the first duplicate or contradiction inside an AND-group, else None."""
    for group_index, group in enumerate(iter_and_groups(conditions)):
        error = _check_group(group)
        if error is not None:
            logger.debug("AND-group %d rejected: %s", group_index, error.message)
            return error
    return None


def _check_group(group: Sequence[Condition]) -> ConsistencyError | None:
    seen: set[str] = set()
    numeric: dict[str, NumericState] = {}
    text: dict[str, TextState] = {}

    for condition in group:
        constraint = normalize_constraint(condition)
        if constraint is None:
            continue
        if constraint.fingerprint in seen:
            return DuplicateConditionError(constraint.fingerprint)
        seen.add(constraint.fingerprint)

        if isinstance(constraint.value, float):
            satisfiable = numeric.setdefault(constraint.key, NumericState()).apply(
                constraint.comparator, constraint.value
            )
        else:
            satisfiable = text.setdefault(constraint.key, TextState()).apply(constraint.comparator, constraint.value)
        if not satisfiable:
            return ConflictingConditionsError(constraint.key)
    return None
