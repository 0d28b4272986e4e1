import pytest

from image_reference.cursor import Cursor
from image_reference.errors import ErrorKind, InvalidReferenceError
from image_reference.host import HostKind
from image_reference.name import SegmentKind, classify_leading_segment, parse_name


class TestClassifyLeadingSegment:

    @pytest.mark.parametrize("source", [
        "localhost/busybox",
        "docker.io/library/busybox",
        "my-registry:5000/app",
        "127.0.0.1/app",
        "[::1]/app",
        "[::1",
        "Example.com/app",
    ])
    def test_domain(self, source: str) -> None:
        assert classify_leading_segment(source) is SegmentKind.DOMAIN

    @pytest.mark.parametrize("source", [
        "busybox",
        "docker.io",
        "busybox:latest",
        "localhost",
        "localhost:5000",
        "library/busybox",
        "localhostx/busybox",
        "UPPER/busybox",
        "foo/bar.baz",
    ])
    def test_path(self, source: str) -> None:
        assert classify_leading_segment(source) is SegmentKind.PATH

    def test_start_offset(self) -> None:
        assert classify_leading_segment("xxlocalhost/foo", 2) is SegmentKind.DOMAIN
        assert classify_leading_segment("x.foo/bar", 2) is SegmentKind.PATH


class TestParseName:

    def test_no_domain(self) -> None:
        result = parse_name(Cursor("busybox"))

        assert result.domain is None
        assert result.span.of("busybox") == "busybox"

    def test_domain_and_path(self) -> None:
        source = "docker.io/library/busybox"
        result = parse_name(Cursor(source))

        assert result.domain.kind is HostKind.DOMAIN_NAME
        assert result.domain.span.of(source) == "docker.io"
        assert result.path.span.of(source) == "library/busybox"
        assert result.span.of(source) == source

    def test_domain_with_port(self) -> None:
        source = "my-registry:5000/app"
        result = parse_name(Cursor(source))

        assert result.domain.domain_span.of(source) == "my-registry:5000"
        assert result.path.span.of(source) == "app"

    def test_domain_without_path(self) -> None:
        with pytest.raises(InvalidReferenceError) as info:
            parse_name(Cursor("[::1]"))

        assert info.value.kind is ErrorKind.REFERENCE_INVALID_FORMAT
        assert info.value.offset == 5

    def test_bad_domain_is_not_retried_as_path(self) -> None:
        with pytest.raises(InvalidReferenceError) as info:
            parse_name(Cursor("foo_bar.com/app"))

        assert info.value.kind is ErrorKind.HOST_INVALID_DOMAIN_NAME
