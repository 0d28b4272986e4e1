from pathlib import Path
from typing import List, Mapping, NamedTuple, Optional

from .errors import InvalidReferenceError
from .reference import FIELDS, NAME_TOTAL_LENGTH_MAX, parse, parse_canonical

HEADER = "\t".join(FIELDS)
_ESCAPES = (("\\", "\\\\"), ("\t", "\\t"), ("\n", "\\n"), ("\r", "\\r"))


class FixtureError(ValueError):
    pass


class FixtureRow(NamedTuple):
    input: str
    name: Optional[str] = None
    domain: Optional[str] = None
    path: Optional[str] = None
    tag: Optional[str] = None
    digest_algo: Optional[str] = None
    digest_encoded: Optional[str] = None
    err: Optional[str] = None


def escape(value: str) -> str:
    for raw, escaped in _ESCAPES:
        value = value.replace(raw, escaped)
    return value


def unescape(value: str) -> str:
    result = []
    chars = iter(value)
    for char in chars:
        if char != "\\":
            result.append(char)
            continue
        following = next(chars, "")
        result.append({"t": "\t", "n": "\n", "r": "\r", "\\": "\\"}.get(following, "\\" + following))
    return "".join(result)


def format_row(row: FixtureRow) -> str:
    return "\t".join(escape(cell or "") for cell in row)


def parse_row(line: str) -> FixtureRow:
    cells = line.split("\t")
    if len(cells) != len(FIELDS):
        raise FixtureError(f"expected {len(FIELDS)} columns, got {len(cells)}: {line!r}")
    source, *rest = (unescape(cell) for cell in cells)
    return FixtureRow(source, *(cell or None for cell in rest))


def load_fixtures(path: Path) -> List[FixtureRow]:
    if not path.exists():
        raise FixtureError(f"missing fixture file: {path}")
    lines = path.read_text(encoding="utf-8").splitlines()
    if not lines or lines[0] != HEADER:
        raise FixtureError(f"{path}: first line must be the header {HEADER!r}")
    return [parse_row(line) for line in lines[1:] if line]


def row_for(source: str, canonical: bool = False, max_name_length: int = NAME_TOTAL_LENGTH_MAX,
            algorithms: Optional[Mapping[str, int]] = None) -> FixtureRow:
    parser = parse_canonical if canonical else parse
    try:
        reference = parser(source, max_name_length=max_name_length, algorithms=algorithms)
    except InvalidReferenceError as err:
        return FixtureRow(source, err=err.description)
    return FixtureRow(**reference.fields())


def compare(actual: FixtureRow, expected: FixtureRow) -> List[str]:
    issues: List[str] = []
    for field, got, want in zip(FIELDS, actual, expected):
        if got != want:
            issues.append(f"{field} {got!r} != {want!r}")
    return issues
