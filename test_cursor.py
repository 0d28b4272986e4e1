from image_reference.cursor import ALNUM, DIGITS, LOWER_ALNUM, Cursor, Span, join_spans


class TestSpan:

    def test_resolves_against_source(self) -> None:
        assert Span(4, 3).of("foo/bar:tag") == "bar"
        assert Span(4, 3).end == 7

    def test_join_spans(self) -> None:
        assert join_spans(Span(0, 3), Span(4, 3)) == Span(0, 7)


class TestCursor:

    def test_peek_and_advance(self) -> None:
        cursor = Cursor("ab")

        assert cursor.peek() == "a"
        assert cursor.peek_at(1) == "b"
        cursor.advance()
        assert cursor.peek() == "b"
        cursor.advance(5)
        assert cursor.at_end()
        assert cursor.peek() == ""

    def test_capture_while_returns_run_length(self) -> None:
        cursor = Cursor("abc123-def")

        assert cursor.capture_while(ALNUM) == 6
        assert cursor.offset == 6
        assert cursor.capture_while(ALNUM) == 0
        assert cursor.peek() == "-"

    def test_capture_while_respects_limit(self) -> None:
        cursor = Cursor("123456")

        assert cursor.capture_while(DIGITS, limit=4) == 4
        assert cursor.remaining() == 2

    def test_end_bounds_the_scan(self) -> None:
        cursor = Cursor("foo.com/bar", end=7)

        assert cursor.capture_while(frozenset("fo.cm")) == 7
        assert cursor.at_end()
        assert cursor.peek() == ""
        assert not cursor.test(frozenset("/"))

    def test_run_length_does_not_consume(self) -> None:
        cursor = Cursor("abc/")

        assert cursor.run_length(LOWER_ALNUM) == 3
        assert cursor.offset == 0

    def test_non_ascii_never_matches(self) -> None:
        cursor = Cursor("éa")

        assert not cursor.test(ALNUM)
        assert cursor.capture_while(ALNUM) == 0

    def test_span_from(self) -> None:
        cursor = Cursor("library/busybox", offset=8)
        cursor.capture_while(LOWER_ALNUM)

        assert cursor.span_from(8) == Span(8, 7)
