from typing import Dict, Mapping, Optional, Tuple, Union

from .cursor import Cursor, Span
from .digest import Digest, parse_digest, validate_digest
from .errors import ErrorKind, InvalidReferenceError
from .host import Host
from .name import parse_name
from .path import Path, PathSeparator
from .tag import parse_tag

# Upper bound on len(domain + "/" + path) enforced by distribution/reference.
NAME_TOTAL_LENGTH_MAX = 255

FIELDS = ("input", "name", "domain", "path", "tag", "digest_algo", "digest_encoded", "err")


class Reference:
    """A parsed ``name[:tag][@digest]`` string.

    Only the source string is stored; every component is a span into it and is
    sliced out on access. Absent components are reported as ``None``.
    """

    def __init__(self, source: str, domain: Optional[Host], path: Path,
                 tag: Optional[Span] = None, digest: Optional[Digest] = None):
        self._source = source
        self._domain = domain
        self._path = path
        self._tag = tag
        self._digest = digest

    @property
    def source(self) -> str:
        return self._source

    @property
    def name(self) -> str:
        start = self._path.span.offset if self._domain is None else self._domain.span.offset
        return self._source[start:self._path.span.end]

    @property
    def domain(self) -> Optional[str]:
        if self._domain is None:
            return None
        return self._domain.domain_span.of(self._source)

    @property
    def host(self) -> Optional[Host]:
        return self._domain

    @property
    def hostname(self) -> Optional[str]:
        if self._domain is None:
            return None
        return self._domain.span.of(self._source)

    @property
    def port(self) -> Optional[str]:
        if self._domain is None or self._domain.port is None:
            return None
        return self._domain.port.of(self._source)

    @property
    def path(self) -> str:
        return self._path.span.of(self._source)

    @property
    def path_components(self) -> Tuple[str, ...]:
        return tuple(component.of(self._source) for component in self._path.components)

    @property
    def path_separators(self) -> Tuple[PathSeparator, ...]:
        return self._path.separators

    @property
    def tag(self) -> Optional[str]:
        if self._tag is None:
            return None
        return self._tag.of(self._source)

    @property
    def digest(self) -> Optional[str]:
        if self._digest is None:
            return None
        return self._digest.span.of(self._source)

    @property
    def digest_algorithm(self) -> Optional[str]:
        if self._digest is None:
            return None
        return self._digest.algorithm.of(self._source)

    @property
    def digest_algorithm_components(self) -> Tuple[str, ...]:
        if self._digest is None:
            return ()
        return tuple(component.of(self._source) for component in self._digest.components)

    @property
    def digest_encoded(self) -> Optional[str]:
        if self._digest is None:
            return None
        return self._digest.encoded.of(self._source)

    @property
    def is_canonical(self) -> bool:
        return self._domain is not None and self._digest is not None

    def fields(self) -> Dict[str, Optional[str]]:
        return {
            "input": self._source,
            "name": self.name,
            "domain": self.domain,
            "path": self.path,
            "tag": self.tag,
            "digest_algo": self.digest_algorithm,
            "digest_encoded": self.digest_encoded,
            "err": None,
        }

    def _key(self) -> Tuple:
        return self._source, self._domain, self._path, self._tag, self._digest

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Reference):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        result = self.path
        if self.domain is not None:
            result = f"{self.domain}/{result}"
        if self.tag is not None:
            result = f"{result}:{self.tag}"
        if self.digest is not None:
            result = f"{result}@{self.digest}"
        return result

    def __repr__(self) -> str:
        return f"Reference({str(self)!r})"


def parse(source: Union[str, bytes, bytearray], max_name_length: int = NAME_TOTAL_LENGTH_MAX,
          algorithms: Optional[Mapping[str, int]] = None) -> Reference:
    """Parse ``source`` into a :class:`Reference`.

    Raises:
        InvalidReferenceError: for the leftmost part of ``source`` that does not
            match the reference grammar, then for a name longer than
            ``max_name_length``, then for a digest that does not fit its
            algorithm in ``algorithms``.
    """
    if isinstance(source, (bytes, bytearray)):
        # one character per byte, so non-ASCII bytes never match a character class
        source = source.decode("latin-1")
    if not source:
        raise InvalidReferenceError(ErrorKind.NAME_EMPTY, 0)

    cursor = Cursor(source)
    name = parse_name(cursor)
    if name.span.length > max_name_length:
        raise InvalidReferenceError(ErrorKind.NAME_TOO_LONG, name.span.offset + max_name_length,
                                    f"repository name must not be more than {max_name_length} characters")

    tag = None
    if cursor.peek() == ":":
        cursor.advance()
        tag = parse_tag(cursor)

    digest = None
    if cursor.peek() == "@":
        cursor.advance()
        digest = parse_digest(cursor)

    if not cursor.at_end():
        raise InvalidReferenceError(ErrorKind.REFERENCE_INVALID_FORMAT, cursor.offset)
    if digest is not None:
        validate_digest(source, digest, algorithms)

    return Reference(source, name.domain, name.path, tag, digest)


def parse_canonical(source: Union[str, bytes, bytearray], max_name_length: int = NAME_TOTAL_LENGTH_MAX,
                    algorithms: Optional[Mapping[str, int]] = None) -> Reference:
    """Parse a reference that must name both its domain and its digest."""
    reference = parse(source, max_name_length=max_name_length, algorithms=algorithms)
    if reference.host is None:
        raise InvalidReferenceError(ErrorKind.NAME_NOT_CANONICAL, 0)
    if reference.digest is None:
        raise InvalidReferenceError(ErrorKind.NAME_NOT_CANONICAL, len(reference.source))
    return reference
