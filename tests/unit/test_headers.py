"""Unit tests for header reading and interpretation."""

import pytest

from mail_decoder.exceptions import (
    ExpectingBoundaryError,
    NotAHeaderError,
    UnexpectedEndOfInputError,
    UnknownContentTypeError,
)
from mail_decoder.mime.cursor import LineCursor
from mail_decoder.mime.headers import (
    RawHeader,
    interpret_header,
    iter_raw_headers,
    parse_content_type,
    parse_transfer_encoding,
    read_header_block,
    read_raw_header,
)
from mail_decoder.models import ContentType, ContentTypeValue, Encoding, UnknownValue


class TestReadRawHeader:
    """Test suite for reading a single raw header."""

    def test_folded_value_is_joined_with_newlines(self) -> None:
        """Test that continuation lines are joined with newlines."""
        cursor = LineCursor(b"Subject: Hello\r\n  World\r\n\tagain\r\nFrom: a@b.c\r\n\r\n")

        header = read_raw_header(cursor)

        assert header == RawHeader(key="Subject", value="Hello\nWorld\nagain")
        assert cursor.peek() == "From: a@b.c\r\n"

    def test_whitespace_only_line_is_skipped_inside_header(self) -> None:
        """Test that whitespace-only lines do not end a header."""
        cursor = LineCursor(b"Subject: Hello\r\n   \r\n\tWorld\r\nX: y\r\n")

        assert read_raw_header(cursor).value == "Hello\nWorld"
        assert cursor.peek() == "X: y\r\n"

    def test_blank_line_ends_continuation(self) -> None:
        """Test that a blank line ends continuation reading."""
        cursor = LineCursor(b"Subject: Hello\n\n indented body\n")

        assert read_raw_header(cursor).value == "Hello"
        assert cursor.peek() == "\n"

    def test_key_is_trimmed_and_value_keeps_colons(self) -> None:
        """Test that the key is trimmed and later colons stay in the value."""
        cursor = LineCursor(b"Date : Mon, 14 Oct 2024 09:30:00 +0000\n")

        assert read_raw_header(cursor) == RawHeader(
            key="Date", value="Mon, 14 Oct 2024 09:30:00 +0000"
        )

    @pytest.mark.parametrize("line", [b"no colon here\r\n", b"not a: header\r\n", b": empty\r\n"])
    def test_not_a_header_consumes_nothing(self, line: bytes) -> None:
        """Test that a non-header line is left on the cursor."""
        cursor = LineCursor(line + b"next\r\n")

        with pytest.raises(NotAHeaderError):
            read_raw_header(cursor)
        assert cursor.position == 0

    def test_header_cut_off_by_end_of_input(self) -> None:
        """Test that an unterminated header line raises."""
        with pytest.raises(UnexpectedEndOfInputError):
            read_raw_header(LineCursor(b"Subject: Hel"))

    def test_continuation_cut_off_by_end_of_input(self) -> None:
        """Test that an unterminated continuation line raises."""
        with pytest.raises(UnexpectedEndOfInputError):
            read_raw_header(LineCursor(b"Subject: Hello\r\n Wor"))

    def test_end_of_input_after_complete_header(self) -> None:
        """Test that end of input after a full header is accepted."""
        cursor = LineCursor(b"Subject: Hello\r\n")

        assert read_raw_header(cursor).value == "Hello"
        assert cursor.at_end()


class TestHeaderBlock:
    """Test suite for reading whole header blocks."""

    def test_block_stops_after_blank_line(self) -> None:
        """Test that the blank line ending a block is consumed."""
        cursor = LineCursor(b"A: 1\r\nB: 2\r\n\r\nbody\r\n")

        raw = list(iter_raw_headers(cursor))

        assert [h.key for h in raw] == ["A", "B"]
        assert cursor.readline() == "body\r\n"

    def test_block_stops_at_non_header_line(self) -> None:
        """Test that a non-header line ends the block."""
        cursor = LineCursor(b"A: 1\n--boundary\nrest\n")

        headers = read_header_block(cursor)

        assert len(headers) == 1
        assert cursor.readline() == "--boundary\n"

    def test_raw_headers_are_read_lazily(self) -> None:
        """Test that headers are read one at a time."""
        cursor = LineCursor(b"A: 1\nB: 2\n\n")

        first = next(iter_raw_headers(cursor))

        assert first.key == "A"
        assert cursor.peek() == "B: 2\n"

    def test_block_interprets_values(self) -> None:
        """Test that header values are interpreted."""
        cursor = LineCursor(
            b"Content-Type: text/html; charset=utf-8\n"
            b"Content-Transfer-Encoding: base64\n"
            b"X-Mailer: test\n"
            b"\n"
        )

        headers = read_header_block(cursor)

        assert headers.content_type() == ContentType.text_html()
        assert headers.transfer_encoding() is Encoding.BASE64
        assert headers.text("x-mailer") == "test"

    def test_unknown_content_type_is_kept_as_text(self) -> None:
        """Test that an unsupported Content-Type is kept as raw text."""
        cursor = LineCursor(b"Content-Type: application/pdf; name=a.pdf\n\n")

        headers = read_header_block(cursor)

        assert headers.content_type() is None
        assert headers.get("Content-Type") == UnknownValue(text="application/pdf; name=a.pdf")

    def test_missing_boundary_aborts_block(self) -> None:
        """Test that a multipart type without boundary aborts the block."""
        cursor = LineCursor(b"Content-Type: multipart/mixed\n\n")

        with pytest.raises(ExpectingBoundaryError):
            read_header_block(cursor)

    def test_empty_input_is_an_empty_block(self) -> None:
        """Test that empty input gives an empty block."""
        assert len(read_header_block(LineCursor(b""))) == 0


class TestInterpretation:
    """Test suite for typed header values."""

    def test_multipart_with_quoted_boundary(self) -> None:
        """Test parsing a quoted boundary."""
        content_type = parse_content_type('multipart/alternative; boundary="abc"')

        assert content_type == ContentType.multipart("abc")
        assert content_type.boundary == "--abc"

    def test_folded_multipart_with_bare_boundary(self) -> None:
        """Test parsing a folded Content-Type with a bare boundary."""
        content_type = parse_content_type("Multipart/Mixed;\nBoundary=xyz")

        assert content_type == ContentType.multipart("xyz", subtype="mixed")

    def test_other_multipart_subtypes_are_accepted(self) -> None:
        """Test that other multipart subtypes are accepted."""
        content_type = parse_content_type('multipart/related; type="text/html"; boundary="r"')

        assert content_type.is_multipart
        assert content_type.subtype == "related"
        assert content_type.boundary == "--r"

    @pytest.mark.parametrize(
        "value", ["multipart/mixed", 'multipart/mixed; boundary=""', "multipart/alternative; charset=x"]
    )
    def test_multipart_without_boundary(self, value: str) -> None:
        """Test that a missing or empty boundary raises."""
        with pytest.raises(ExpectingBoundaryError):
            parse_content_type(value)

    def test_text_types_ignore_parameters(self) -> None:
        """Test that parameters of text types are ignored."""
        assert parse_content_type('text/plain; charset="utf-8"') == ContentType.text_plain()
        assert parse_content_type("TEXT/HTML") == ContentType.text_html()

    def test_unknown_content_type(self) -> None:
        """Test that an unsupported type raises with its name."""
        with pytest.raises(UnknownContentTypeError) as exc_info:
            parse_content_type("image/png; name=x.png")

        assert exc_info.value.content_type == "image/png"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("base64", Encoding.BASE64),
            (" BASE64 ", Encoding.BASE64),
            ("quoted-printable", Encoding.QUOTED_PRINTABLE),
            ("7bit", Encoding.IDENTITY),
            ("8bit", Encoding.IDENTITY),
            ("x-garbage", Encoding.IDENTITY),
            ("", Encoding.IDENTITY),
        ],
    )
    def test_transfer_encoding(self, value: str, expected: Encoding) -> None:
        """Test mapping of transfer encoding values."""
        assert parse_transfer_encoding(value) is expected

    def test_interpret_header_dispatch(self) -> None:
        """Test that headers are interpreted by key."""
        assert interpret_header("content-type", "text/html") == ContentTypeValue(
            content_type=ContentType.text_html()
        )
        assert interpret_header("Content-Transfer-Encoding", "base64").encoding is Encoding.BASE64
        assert interpret_header("X-Mailer", " raw ") == UnknownValue(text=" raw ")
