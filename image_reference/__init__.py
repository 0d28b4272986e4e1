from .cursor import Span
from .digest import DIGEST_ALGORITHMS, Compliance, Digest, ParsedDigest, parse_digest_string
from .errors import ErrorKind, InvalidReferenceError
from .host import Host, HostKind
from .path import Path, PathSeparator
from .reference import NAME_TOTAL_LENGTH_MAX, Reference, parse, parse_canonical

__all__ = [
    "DIGEST_ALGORITHMS",
    "NAME_TOTAL_LENGTH_MAX",
    "Compliance",
    "Digest",
    "ErrorKind",
    "Host",
    "HostKind",
    "InvalidReferenceError",
    "ParsedDigest",
    "Path",
    "PathSeparator",
    "Reference",
    "Span",
    "parse",
    "parse_canonical",
    "parse_digest_string",
]
