"""Splitting a name into its optional domain and its path."""
import enum
from typing import NamedTuple, Optional

from .cursor import Cursor, Span, join_spans
from .errors import ErrorKind, InvalidReferenceError
from .host import Host, parse_host
from .path import Path, parse_path

LOCALHOST = "localhost"


class SegmentKind(enum.Enum):
    DOMAIN = "domain"
    PATH = "path"


class Name(NamedTuple):
    domain: Optional[Host]
    path: Path

    @property
    def span(self) -> Span:
        if self.domain is None:
            return self.path.span
        return join_spans(self.domain.span, self.path.span)


def classify_leading_segment(source: str, start: int = 0) -> SegmentKind:
    if source.startswith("[", start):
        return SegmentKind.DOMAIN
    slash = source.find("/", start)
    if slash == -1:
        return SegmentKind.PATH
    if source.find(".", start, slash) != -1 or source.find(":", start, slash) != -1:
        return SegmentKind.DOMAIN
    if slash - start == len(LOCALHOST) and source.startswith(LOCALHOST, start):
        return SegmentKind.DOMAIN
    return SegmentKind.PATH


def parse_name(cursor: Cursor) -> Name:
    domain = None
    if classify_leading_segment(cursor.source, cursor.offset) is SegmentKind.DOMAIN:
        slash = cursor.source.find("/", cursor.offset, cursor.end)
        segment_end = cursor.end if slash == -1 else slash
        domain = parse_host(Cursor(cursor.source, cursor.offset, segment_end))
        if slash == -1:
            # a domain must be followed by a path
            raise InvalidReferenceError(ErrorKind.REFERENCE_INVALID_FORMAT, segment_end)
        cursor.offset = slash + 1
    return Name(domain, parse_path(cursor))
