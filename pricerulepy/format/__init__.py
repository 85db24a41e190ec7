"""Canonical text rendering for parsed rules."""

from pricerulepy.format.serializer import (
    render_operand,
    serialize_clause,
    serialize_clauses,
    serialize_condition,
    serialize_conditions,
    serialize_definition,
)

__all__ = [
    "render_operand",
    "serialize_clause",
    "serialize_clauses",
    "serialize_condition",
    "serialize_conditions",
    "serialize_definition",
]
