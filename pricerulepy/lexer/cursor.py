"""Character cursor shared by the formula evaluator."""

from collections.abc import Callable


class Cursor:
    """Forward-only position over a source string.

    Each parse owns its own cursor, so concurrent parses never share state.
    """

    def __init__(self, source: str, position: int = 0) -> None:
        self._source = source
        self._position = position

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    def current_char(self) -> str:
        if self.is_eof:
            return "\0"
        return self._source[self._position]

    def advance(self, steps: int = 1) -> None:
        self._position += steps

    def skip_whitespace(self) -> None:
        while not self.is_eof and self.current_char().isspace():
            self._position += 1

    def take_while(self, predicate: Callable[[str], bool]) -> str:
        start = self._position
        while not self.is_eof and predicate(self.current_char()):
            self._position += 1
        return self._source[start : self._position]
