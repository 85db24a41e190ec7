"""Parser limits and configuration options."""

from dataclasses import dataclass
from typing import Final

# Each nesting level costs a few interpreter frames; stay well under the recursion limit.
MAX_NESTING_DEPTH_LIMIT: Final = 100


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Bounds applied to every parse so a single keystroke stays cheap."""

    max_formula_length: int = 1000
    max_nesting_depth: int = 32
    max_conditions: int = 50
    max_description_length: int = 500

    def __post_init__(self) -> None:
        for name in ("max_formula_length", "max_nesting_depth", "max_conditions", "max_description_length"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be positive")
        if self.max_nesting_depth > MAX_NESTING_DEPTH_LIMIT:
            raise ValueError(f"max_nesting_depth must be at most {MAX_NESTING_DEPTH_LIMIT}")


DEFAULT_OPTIONS: Final[ParserOptions] = ParserOptions()


def resolve_options(options: ParserOptions | None) -> ParserOptions:
    return DEFAULT_OPTIONS if options is None else options
