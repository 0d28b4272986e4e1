import enum
from typing import List, NamedTuple, Tuple

from .cursor import LOWER_ALNUM, UPPER, Cursor, Span, join_spans
from .errors import ErrorKind, InvalidReferenceError


class PathSeparator(enum.Enum):
    DOT = "."
    UNDERSCORE = "_"
    DOUBLE_UNDERSCORE = "__"
    HYPHENS = "-"


class Path(NamedTuple):
    components: Tuple[Span, ...]
    separators: Tuple[PathSeparator, ...]

    @property
    def span(self) -> Span:
        return join_spans(self.components[0], self.components[-1])


def parse_path(cursor: Cursor) -> Path:
    """Parse ``path-component ("/" path-component)*``.

    Stops in front of ``:``, ``@`` or the end of input; whatever else follows
    the last component is left for the caller to reject.
    """
    components = []
    separators: List[PathSeparator] = []
    while True:
        start = cursor.offset
        _scan_component(cursor, separators)
        components.append(cursor.span_from(start))
        if cursor.peek() != "/":
            return Path(tuple(components), tuple(separators))
        cursor.advance()


def _scan_component(cursor: Cursor, separators: List[PathSeparator]) -> None:
    _scan_alphanumeric(cursor)
    while True:
        char = cursor.peek()
        start = cursor.offset
        if char == ".":
            cursor.advance()
            separators.append(PathSeparator.DOT)
        elif char == "_":
            underscores = cursor.capture_while(frozenset("_"), limit=3)
            if underscores > 2:
                raise InvalidReferenceError(ErrorKind.PATH_INVALID_FORMAT, start + 2)
            separators.append(PathSeparator.UNDERSCORE if underscores == 1 else PathSeparator.DOUBLE_UNDERSCORE)
        elif char == "-":
            cursor.capture_while(frozenset("-"))
            separators.append(PathSeparator.HYPHENS)
        else:
            return
        _scan_alphanumeric(cursor)


def _scan_alphanumeric(cursor: Cursor) -> None:
    length = cursor.capture_while(LOWER_ALNUM)
    if cursor.test(UPPER):
        raise InvalidReferenceError(ErrorKind.NAME_CONTAINS_UPPERCASE, cursor.offset)
    if length == 0:
        raise InvalidReferenceError(ErrorKind.PATH_INVALID_FORMAT, cursor.offset)
