import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from tqdm import tqdm

from .errors import InvalidReferenceError
from .fixtures import FixtureError, FixtureRow, compare, format_row, load_fixtures, row_for
from .reference import NAME_TOTAL_LENGTH_MAX, parse, parse_canonical

REFERENCE_MAX_NAME_LENGTH = "REFERENCE_MAX_NAME_LENGTH"


def print_error_row(row: FixtureRow, issues: List[str]) -> None:
    print(f"Input: {row.input!r}")
    for issue in issues:
        print(f"  {issue}")


def max_name_length_from_env(max_name_length: Optional[int] = None) -> int:
    if max_name_length is not None:
        return max_name_length
    value = os.environ.get(REFERENCE_MAX_NAME_LENGTH)
    if value is None:
        return NAME_TOTAL_LENGTH_MAX
    try:
        return int(value)
    except ValueError:
        print(f"{REFERENCE_MAX_NAME_LENGTH} must be an integer, got {value!r}")
        exit(2)


class ParseCommand:
    def __init__(self, reference: Optional[str], canonical: bool, max_name_length: int,
                 stdin: Optional[TextIO] = None):
        if reference is None:
            reference = (stdin or sys.stdin).readline().rstrip("\r\n")
        self._reference = reference
        self._canonical = canonical
        self._max_name_length = max_name_length

    def invoke(self) -> None:
        parser = parse_canonical if self._canonical else parse
        try:
            result = parser(self._reference, max_name_length=self._max_name_length)
        except InvalidReferenceError as err:
            print(format_row(FixtureRow(self._reference, err=err.description)))
            exit(1)
        print(format_row(FixtureRow(**result.fields())))


class CheckCommand:
    def __init__(self, fixture: Path, canonical: bool, max_name_length: int):
        self._fixture = fixture
        self._canonical = canonical
        self._max_name_length = max_name_length

    def invoke(self) -> None:
        try:
            rows = load_fixtures(self._fixture)
        except FixtureError as err:
            print(err)
            exit(2)

        failures = 0
        for expected in tqdm(rows, unit="ref", desc=self._fixture.name):
            actual = row_for(expected.input, canonical=self._canonical, max_name_length=self._max_name_length)
            issues = compare(actual, expected)
            if issues:
                failures += 1
                print_error_row(expected, issues)

        print(f"Checked {len(rows)} references, {failures} mismatched")
        if failures:
            exit(1)


def run(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="image-reference")
    parser.add_argument("--max-name-length",
                        type=int,
                        help=f"Longest accepted name, will use {REFERENCE_MAX_NAME_LENGTH} from environment "
                             f"or {NAME_TOTAL_LENGTH_MAX} if not supplied",
                        default=None)
    parser.add_argument("--canonical",
                        action="store_true",
                        help="Require both a domain and a digest",
                        default=False)

    subparsers = parser.add_subparsers(dest="command")

    parser_parse = subparsers.add_parser("parse")
    parser_parse.add_argument("reference",
                              nargs="?",
                              help="[domain/]path[:tag][@digest], read from stdin if not supplied")

    parser_check = subparsers.add_parser("check")
    parser_check.add_argument("fixture", type=Path, help="tab separated golden file")

    args = parser.parse_args(argv)
    max_name_length = max_name_length_from_env(args.max_name_length)

    if args.command == 'parse':
        ParseCommand(args.reference, args.canonical, max_name_length).invoke()
    elif args.command == 'check':
        CheckCommand(args.fixture, args.canonical, max_name_length).invoke()
    else:
        parser.print_help()
        exit(2)


if __name__ == "__main__":
    run()
