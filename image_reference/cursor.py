import string
from typing import FrozenSet, NamedTuple, Optional

CharClass = FrozenSet[str]

DIGITS: CharClass = frozenset(string.digits)
LOWER: CharClass = frozenset(string.ascii_lowercase)
UPPER: CharClass = frozenset(string.ascii_uppercase)
ALPHA: CharClass = LOWER | UPPER
ALNUM: CharClass = ALPHA | DIGITS
LOWER_ALNUM: CharClass = LOWER | DIGITS
HEX: CharClass = frozenset(string.hexdigits)
LOWER_HEX: CharClass = frozenset(string.digits + "abcdef")
OCI_ENCODED_CHARS: CharClass = ALNUM | frozenset("=_-")
WORD: CharClass = ALNUM | frozenset("_")
TAG_CHARS: CharClass = WORD | frozenset(".-")
DOMAIN_LABEL_CHARS: CharClass = ALNUM | frozenset("-")
IPV4_CHARS: CharClass = DIGITS | frozenset(".")
ALGORITHM_SEPARATORS: CharClass = frozenset("+._-")


class Span(NamedTuple):
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    def of(self, source: str) -> str:
        return source[self.offset:self.end]


def join_spans(first: Span, last: Span) -> Span:
    return Span(first.offset, last.end - first.offset)


class Cursor:
    """A position within ``source``, bounded by ``end``.

    Only ever moves forward through the public helpers. A failed production
    leaves the offset wherever it stopped, so callers that look ahead must
    save and restore ``offset`` themselves.
    """

    def __init__(self, source: str, offset: int = 0, end: Optional[int] = None):
        self._source = source
        self._end = len(source) if end is None else end
        self.offset = offset

    @property
    def source(self) -> str:
        return self._source

    @property
    def end(self) -> int:
        return self._end

    def remaining(self) -> int:
        return self._end - self.offset

    def at_end(self) -> bool:
        return self.offset >= self._end

    def peek(self) -> str:
        return self.peek_at(0)

    def peek_at(self, ahead: int) -> str:
        index = self.offset + ahead
        if index >= self._end:
            return ""
        return self._source[index]

    def test(self, char_class: CharClass) -> bool:
        return not self.at_end() and self._source[self.offset] in char_class

    def advance(self, count: int = 1) -> None:
        self.offset = min(self.offset + count, self._end)

    def capture_while(self, char_class: CharClass, limit: Optional[int] = None) -> int:
        stop = self._end if limit is None else min(self._end, self.offset + limit)
        start = self.offset
        index = start
        while index < stop and self._source[index] in char_class:
            index += 1
        self.offset = index
        return index - start

    def run_length(self, char_class: CharClass) -> int:
        """Length of the run at the cursor without consuming it."""
        start = self.offset
        length = self.capture_while(char_class)
        self.offset = start
        return length

    def span_from(self, start: int) -> Span:
        return Span(start, self.offset - start)
