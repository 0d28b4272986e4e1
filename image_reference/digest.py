"""Digest parser::

    digest              ::= algorithm ":" encoded
    algorithm           ::= algorithm-component (algorithm-separator algorithm-component)*
    algorithm-separator ::= [+._-]

    distribution/reference:
    algorithm-component ::= [A-Za-z][A-Za-z0-9]*
    encoded             ::= [a-fA-F0-9]{32,}

    OCI image spec:
    algorithm-component ::= [a-z0-9]+
    encoded             ::= [a-zA-Z0-9=_-]+
"""
import enum
import types
from typing import Mapping, NamedTuple, Optional, Tuple, Union

from .cursor import (ALGORITHM_SEPARATORS, ALNUM, DIGITS, HEX, LOWER, LOWER_HEX, OCI_ENCODED_CHARS, UPPER,
                     Cursor, Span, join_spans)
from .errors import ErrorKind, InvalidReferenceError

ENCODED_MIN_LENGTH = 32

# algorithm -> length of its lowercase hex encoding
DIGEST_ALGORITHMS: Mapping[str, int] = types.MappingProxyType({
    "sha256": 64,
    "sha384": 96,
    "sha512": 128,
})


class Compliance(enum.Enum):
    UNIVERSAL = "universal"
    DISTRIBUTION = "distribution"
    OCI = "oci"


class Digest(NamedTuple):
    components: Tuple[Span, ...]
    encoded: Span
    compliance: Compliance = Compliance.UNIVERSAL

    @property
    def algorithm(self) -> Span:
        return join_spans(self.components[0], self.components[-1])

    @property
    def span(self) -> Span:
        return join_spans(self.components[0], self.encoded)


def _narrow(compliance: Compliance, toward: Compliance, standard: Compliance, offset: int) -> Compliance:
    if compliance in (Compliance.UNIVERSAL, toward) and standard in (Compliance.UNIVERSAL, toward):
        return toward
    raise InvalidReferenceError(ErrorKind.DIGEST_INVALID_FORMAT, offset)


def _scan_component(cursor: Cursor, compliance: Compliance, standard: Compliance) -> Compliance:
    char = cursor.peek()
    if char in UPPER:
        compliance = _narrow(compliance, Compliance.DISTRIBUTION, standard, cursor.offset)
    elif char in DIGITS:
        compliance = _narrow(compliance, Compliance.OCI, standard, cursor.offset)
    elif char not in LOWER:
        raise InvalidReferenceError(ErrorKind.DIGEST_INVALID_FORMAT, cursor.offset)
    cursor.advance()

    while cursor.test(ALNUM):
        if cursor.test(UPPER):
            compliance = _narrow(compliance, Compliance.DISTRIBUTION, standard, cursor.offset)
        cursor.advance()
    return compliance


def parse_digest(cursor: Cursor, standard: Compliance = Compliance.DISTRIBUTION) -> Digest:
    """Parse ``algorithm:encoded`` under ``standard``.

    ``Compliance.UNIVERSAL`` accepts anything either grammar accepts. The
    returned digest records which grammars it actually satisfies.
    """
    compliance = Compliance.UNIVERSAL
    components = []
    while True:
        start = cursor.offset
        compliance = _scan_component(cursor, compliance, standard)
        components.append(cursor.span_from(start))
        if not cursor.test(ALGORITHM_SEPARATORS):
            break
        cursor.advance()

    if cursor.peek() != ":":
        raise InvalidReferenceError(ErrorKind.DIGEST_INVALID_FORMAT, cursor.offset)
    cursor.advance()

    start = cursor.offset
    length = cursor.capture_while(HEX if standard is Compliance.DISTRIBUTION else OCI_ENCODED_CHARS)
    for index in range(start, cursor.offset):
        if cursor.source[index] not in HEX:
            compliance = _narrow(compliance, Compliance.OCI, standard, index)
    if length == 0:
        raise InvalidReferenceError(ErrorKind.DIGEST_INVALID_FORMAT, cursor.offset)
    if length < ENCODED_MIN_LENGTH:
        compliance = _narrow(compliance, Compliance.OCI, standard, cursor.offset)
    return Digest(tuple(components), Span(start, length), compliance)


def validate_digest(source: str, digest: Digest, algorithms: Optional[Mapping[str, int]] = None,
                    require_registered: bool = True) -> None:
    if algorithms is None:
        algorithms = DIGEST_ALGORITHMS
    algorithm = digest.algorithm
    expected_length = algorithms.get(algorithm.of(source))
    if expected_length is None:
        if require_registered:
            raise InvalidReferenceError(ErrorKind.DIGEST_UNSUPPORTED_ALGORITHM, algorithm.offset)
        return
    if digest.encoded.length != expected_length:
        raise InvalidReferenceError(ErrorKind.DIGEST_INVALID_LENGTH, digest.encoded.offset)
    for index in range(digest.encoded.offset, digest.encoded.end):
        if source[index] not in LOWER_HEX:
            raise InvalidReferenceError(ErrorKind.DIGEST_INVALID_FORMAT, index)


class ParsedDigest:
    """A bare ``algorithm:encoded`` string, outside of any reference."""

    def __init__(self, source: str, digest: Digest):
        self._source = source
        self._digest = digest

    @property
    def source(self) -> str:
        return self._source

    @property
    def algorithm(self) -> str:
        return self._digest.algorithm.of(self._source)

    @property
    def algorithm_components(self) -> Tuple[str, ...]:
        return tuple(component.of(self._source) for component in self._digest.components)

    @property
    def encoded(self) -> str:
        return self._digest.encoded.of(self._source)

    @property
    def compliance(self) -> Compliance:
        return self._digest.compliance

    def __str__(self) -> str:
        return self._source

    def __repr__(self) -> str:
        return f"ParsedDigest({self._source!r})"


def parse_digest_string(source: Union[str, bytes, bytearray], standard: Compliance = Compliance.DISTRIBUTION,
                        algorithms: Optional[Mapping[str, int]] = None) -> ParsedDigest:
    """Parse a digest on its own, such as a manifest or blob digest.

    Registered algorithms are always held to their length and to lowercase
    hex. Other algorithms are rejected unless the digest is allowed to be OCI.
    """
    if isinstance(source, (bytes, bytearray)):
        source = source.decode("latin-1")
    cursor = Cursor(source)
    digest = parse_digest(cursor, standard)
    if not cursor.at_end():
        raise InvalidReferenceError(ErrorKind.DIGEST_INVALID_FORMAT, cursor.offset)
    validate_digest(source, digest, algorithms,
                    require_registered=Compliance.DISTRIBUTION in (standard, digest.compliance))
    return ParsedDigest(source, digest)
