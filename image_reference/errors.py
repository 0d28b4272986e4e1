import enum
from typing import Optional

INVALID_REFERENCE_FORMAT = "invalid reference format"


class ErrorKind(enum.Enum):
    NAME_EMPTY = "NameEmpty"
    NAME_TOO_LONG = "NameTooLong"
    NAME_CONTAINS_UPPERCASE = "NameContainsUppercase"
    NAME_NOT_CANONICAL = "NameNotCanonical"
    REFERENCE_INVALID_FORMAT = "ReferenceInvalidFormat"

    TAG_INVALID_FORMAT = "TagInvalidFormat"

    DIGEST_INVALID_FORMAT = "DigestInvalidFormat"
    DIGEST_INVALID_LENGTH = "DigestInvalidLength"
    DIGEST_UNSUPPORTED_ALGORITHM = "DigestUnsupportedAlgorithm"

    HOST_INVALID_DOMAIN_NAME = "HostInvalidDomainName"
    HOST_INVALID_IPV4 = "HostInvalidIpv4"
    PORT_MISSING = "PortMissing"
    PORT_INVALID_FORMAT = "PortInvalidFormat"

    IPV6_INVALID_CHAR = "Ipv6InvalidChar"
    IPV6_TOO_LONG = "Ipv6TooLong"
    IPV6_BAD_COLON = "Ipv6BadColon"
    IPV6_TOO_MANY_HEX_DIGITS = "Ipv6TooManyHexDigits"
    IPV6_TOO_MANY_GROUPS = "Ipv6TooManyGroups"
    IPV6_TOO_FEW_GROUPS = "Ipv6TooFewGroups"
    IPV6_MISSING_CLOSING_BRACKET = "Ipv6MissingClosingBracket"

    PATH_INVALID_FORMAT = "PathInvalidFormat"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS.get(self, INVALID_REFERENCE_FORMAT)


# Strings reported by distribution/reference and go-digest for the same failures.
# Host, port, IPv6 and path kinds all surface upstream as a plain format error.
_DESCRIPTIONS = {
    ErrorKind.NAME_EMPTY: "repository name must have at least one component",
    ErrorKind.NAME_TOO_LONG: "repository name must not be more than 255 characters",
    ErrorKind.NAME_CONTAINS_UPPERCASE: "repository name must be lowercase",
    ErrorKind.NAME_NOT_CANONICAL: "repository name must be canonical",
    ErrorKind.TAG_INVALID_FORMAT: "invalid tag format",
    ErrorKind.DIGEST_INVALID_FORMAT: "invalid checksum digest format",
    ErrorKind.DIGEST_INVALID_LENGTH: "invalid checksum digest length",
    ErrorKind.DIGEST_UNSUPPORTED_ALGORITHM: "unsupported digest algorithm",
}


class InvalidReferenceError(ValueError):
    """Raised when a string is not a valid image reference.

    ``kind`` names the grammar production that failed and ``offset`` is the
    index of the first character that could not be matched.
    """

    def __init__(self, kind: ErrorKind, offset: int, description: Optional[str] = None):
        self.kind = kind
        self.offset = offset
        self.description = description if description is not None else kind.description
        super().__init__(f"{self.description} ({kind.value} @ {offset})")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidReferenceError):
            return NotImplemented
        return (self.kind, self.offset, self.description) == (other.kind, other.offset, other.description)

    def __hash__(self) -> int:
        return hash((self.kind, self.offset, self.description))
