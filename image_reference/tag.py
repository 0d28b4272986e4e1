from .cursor import TAG_CHARS, WORD, Cursor, Span
from .errors import ErrorKind, InvalidReferenceError

TAG_MAX_LENGTH = 128


def parse_tag(cursor: Cursor) -> Span:
    """Parse ``[\\w][\\w.-]{0,127}`` at the cursor, after its leading ``:``."""
    start = cursor.offset
    if not cursor.test(WORD):
        raise InvalidReferenceError(ErrorKind.TAG_INVALID_FORMAT, start)
    length = cursor.capture_while(TAG_CHARS, limit=TAG_MAX_LENGTH + 1)
    if length > TAG_MAX_LENGTH:
        raise InvalidReferenceError(ErrorKind.TAG_INVALID_FORMAT, start + TAG_MAX_LENGTH)
    return Span(start, length)
