"""Rule text entrypoints and their result carriers."""

from pricerulepy.format.serializer import serialize_clauses, serialize_definition
from pricerulepy.pipeline.entrypoints import apply_rule_text, check_rule_text, parse_rule_text
from pricerulepy.pipeline.results import RuleCheckResult

__all__ = [
    "RuleCheckResult",
    "apply_rule_text",
    "check_rule_text",
    "parse_rule_text",
    "serialize_clauses",
    "serialize_definition",
]
