"""Host parser for the domain section of a reference::

    domain           ::= host (":" port-number)?
    host             ::= domain-name | IPv4address | "[" IPv6address "]"
    domain-name      ::= domain-component ("." domain-component)*
    domain-component ::= [a-zA-Z0-9] | [a-zA-Z0-9][a-zA-Z0-9-]*[a-zA-Z0-9]
    port-number      ::= [0-9]+
"""
import enum
from typing import List, NamedTuple, Optional, Tuple

from .cursor import ALNUM, DIGITS, DOMAIN_LABEL_CHARS, HEX, IPV4_CHARS, Cursor, Span
from .errors import ErrorKind, InvalidReferenceError

IPV4_OCTET_MAX = 255
IPV4_OCTET_DIGITS_MAX = 3
IPV6_GROUPS = 8
IPV6_HEXTET_DIGITS_MAX = 4
# 8 hextets of 4 digits joined by 7 colons
IPV6_CONTENT_LENGTH_MAX = 39


class HostKind(enum.Enum):
    DOMAIN_NAME = "domain-name"
    IPV4 = "ipv4"
    IPV6 = "ipv6"


class Host(NamedTuple):
    kind: HostKind
    span: Span
    labels: Tuple[Span, ...]
    port: Optional[Span] = None

    @property
    def domain_span(self) -> Span:
        """The host together with its ``:port``, if any."""
        if self.port is None:
            return self.span
        return Span(self.span.offset, self.port.end - self.span.offset)


def parse_host(cursor: Cursor) -> Host:
    """Parse a host and optional port that must fill the cursor's whole range."""
    start = cursor.offset
    if cursor.peek() == "[":
        kind = HostKind.IPV6
        labels = _scan_ipv6(cursor)
    elif _looks_like_ipv4(cursor):
        kind = HostKind.IPV4
        labels = _scan_ipv4(cursor)
    else:
        kind = HostKind.DOMAIN_NAME
        labels = _scan_domain_name(cursor)
    span = cursor.span_from(start)
    port = _scan_port(cursor)

    if not cursor.at_end():
        if port is not None:
            raise InvalidReferenceError(ErrorKind.PORT_INVALID_FORMAT, cursor.offset)
        if kind is HostKind.IPV6:
            raise InvalidReferenceError(ErrorKind.IPV6_INVALID_CHAR, cursor.offset)
        raise InvalidReferenceError(ErrorKind.HOST_INVALID_DOMAIN_NAME, cursor.offset)

    return Host(kind, span, labels, port)


def _looks_like_ipv4(cursor: Cursor) -> bool:
    # Four numeric groups commit to IPv4; anything else is a domain name.
    length = cursor.run_length(IPV4_CHARS)
    if length == 0 or cursor.peek_at(length) not in ("", ":"):
        return False
    return cursor.source.count(".", cursor.offset, cursor.offset + length) == 3


def _scan_ipv4(cursor: Cursor) -> Tuple[Span, ...]:
    octets = []
    for index in range(4):
        if index:
            cursor.advance()  # "."
        start = cursor.offset
        length = cursor.capture_while(DIGITS)
        if length == 0:
            raise InvalidReferenceError(ErrorKind.HOST_INVALID_IPV4, start)
        if length > IPV4_OCTET_DIGITS_MAX:
            raise InvalidReferenceError(ErrorKind.HOST_INVALID_IPV4, start + IPV4_OCTET_DIGITS_MAX)
        octet = cursor.span_from(start)
        if int(octet.of(cursor.source)) > IPV4_OCTET_MAX:
            raise InvalidReferenceError(ErrorKind.HOST_INVALID_IPV4, start)
        octets.append(octet)
    return tuple(octets)


def _scan_domain_name(cursor: Cursor) -> Tuple[Span, ...]:
    labels = []
    while True:
        start = cursor.offset
        if not cursor.test(ALNUM):
            raise InvalidReferenceError(ErrorKind.HOST_INVALID_DOMAIN_NAME, cursor.offset)
        cursor.capture_while(DOMAIN_LABEL_CHARS)
        if cursor.source[cursor.offset - 1] == "-":
            raise InvalidReferenceError(ErrorKind.HOST_INVALID_DOMAIN_NAME, cursor.offset - 1)
        labels.append(cursor.span_from(start))
        if cursor.peek() != ".":
            return tuple(labels)
        cursor.advance()


def _scan_ipv6(cursor: Cursor) -> Tuple[Span, ...]:
    cursor.advance()  # "["
    content_start = cursor.offset
    hextets: List[Span] = []
    elided = False
    seen_token = False

    while True:
        if cursor.offset - content_start > IPV6_CONTENT_LENGTH_MAX:
            raise InvalidReferenceError(ErrorKind.IPV6_TOO_LONG, cursor.offset)
        char = cursor.peek()
        start = cursor.offset
        if char == "]":
            break
        if char == "":
            raise InvalidReferenceError(ErrorKind.IPV6_MISSING_CLOSING_BRACKET, cursor.offset)
        if char in HEX:
            length = cursor.capture_while(HEX, limit=IPV6_HEXTET_DIGITS_MAX + 1)
            if length > IPV6_HEXTET_DIGITS_MAX:
                raise InvalidReferenceError(ErrorKind.IPV6_TOO_MANY_HEX_DIGITS, start + IPV6_HEXTET_DIGITS_MAX)
            hextets.append(cursor.span_from(start))
            if len(hextets) > IPV6_GROUPS:
                raise InvalidReferenceError(ErrorKind.IPV6_TOO_MANY_GROUPS, start)
        elif char == ":":
            colons = cursor.capture_while(frozenset(":"), limit=3)
            if colons == 3:
                raise InvalidReferenceError(ErrorKind.IPV6_BAD_COLON, start + 2)
            if colons == 2:
                if elided:
                    raise InvalidReferenceError(ErrorKind.IPV6_BAD_COLON, start)
                elided = True
            elif not seen_token or cursor.peek() == "]":
                # a single colon only ever sits between two hextets
                raise InvalidReferenceError(ErrorKind.IPV6_BAD_COLON, start)
        else:
            raise InvalidReferenceError(ErrorKind.IPV6_INVALID_CHAR, start)
        seen_token = True

    close = cursor.offset
    if elided and len(hextets) >= IPV6_GROUPS:
        raise InvalidReferenceError(ErrorKind.IPV6_TOO_MANY_GROUPS, close)
    if not elided and len(hextets) < IPV6_GROUPS:
        raise InvalidReferenceError(ErrorKind.IPV6_TOO_FEW_GROUPS, close)
    cursor.advance()  # "]"
    return tuple(hextets)


def _scan_port(cursor: Cursor) -> Optional[Span]:
    if cursor.peek() != ":":
        return None
    cursor.advance()
    start = cursor.offset
    if cursor.capture_while(DIGITS) == 0:
        if cursor.at_end():
            raise InvalidReferenceError(ErrorKind.PORT_MISSING, start)
        raise InvalidReferenceError(ErrorKind.PORT_INVALID_FORMAT, start)
    return cursor.span_from(start)
