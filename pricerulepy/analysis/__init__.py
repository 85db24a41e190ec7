"""Consistency analysis over parsed conditions and clauses."""

from pricerulepy.analysis.collisions import (
    Bound,
    Constraint,
    NumericState,
    TextState,
    detect_collisions,
    iter_and_groups,
    normalize_constraint,
)
from pricerulepy.analysis.duplicates import (
    clause_signature,
    condition_signature,
    find_duplicate_clause,
    operand_signature,
)

__all__ = [
    "Bound",
    "Constraint",
    "NumericState",
    "TextState",
    "clause_signature",
    "condition_signature",
    "detect_collisions",
    "find_duplicate_clause",
    "iter_and_groups",
    "normalize_constraint",
    "operand_signature",
]
