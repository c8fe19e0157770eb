"""Header block reading and interpretation.

Reading turns the lines at the cursor into raw ``(key, value)`` pairs, merging
folded continuation lines. Interpretation maps a raw pair to a typed
:data:`~mail_decoder.models.HeaderValue`.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

import structlog

from mail_decoder.exceptions import (
    ExpectingBoundaryError,
    NotAHeaderError,
    UnexpectedEndOfInputError,
    UnknownContentTypeError,
)
from mail_decoder.mime.cursor import LineCursor, is_blank
from mail_decoder.models import (
    ContentType,
    ContentTypeValue,
    Encoding,
    Header,
    Headers,
    HeaderValue,
    TransferEncodingValue,
    UnknownValue,
)

logger = structlog.get_logger()

_BOUNDARY_PARAM = re.compile(
    r'^boundary\s*=\s*(?:"(?P<quoted>[^"]*)"|(?P<bare>[^\s";]+))\s*$',
    re.IGNORECASE,
)

_PASS_THROUGH_ENCODINGS = frozenset({"", "7bit", "8bit", "binary"})


@dataclass(frozen=True)
class RawHeader:
    """A header as read from the message, before interpretation."""

    key: str
    value: str


def read_raw_header(cursor: LineCursor) -> RawHeader:
    """Read one header, including its folded continuation lines.

    Lines are only committed on the cursor once a header was recognized.

    Raises:
        NotAHeaderError: If the line at the cursor does not start a header.
        UnexpectedEndOfInputError: If the input ends inside the header.
    """
    first = cursor.peek()
    if first is None or is_blank(first):
        raise NotAHeaderError("no header at cursor")

    key, sep, rest = first.partition(":")
    key = key.strip()
    if not sep or not key or any(ch.isspace() for ch in key):
        raise NotAHeaderError(f"not a header line: {first[:40]!r}")
    if not first.endswith("\n"):
        raise UnexpectedEndOfInputError(f"header {key!r} cut off by end of input")

    parts = [rest.strip()]
    consumed = 1
    while True:
        line = cursor.peek(consumed)
        if line is None or is_blank(line) or line[0] not in " \t":
            break
        if not line.endswith("\n"):
            raise UnexpectedEndOfInputError(f"header {key!r} cut off by end of input")
        consumed += 1
        # Whitespace-only lines are skipped without ending the header.
        if line.strip():
            parts.append(line.strip())

    cursor.advance(consumed)
    return RawHeader(key=key, value="\n".join(parts))


def iter_raw_headers(cursor: LineCursor) -> Iterator[RawHeader]:
    """Yield the headers of a block, stopping after its terminating blank line.

    A line that does not start a header also ends the block; it is left on the
    cursor for the caller.
    """
    while True:
        line = cursor.peek()
        if line is None:
            return
        if is_blank(line):
            cursor.advance()
            return
        try:
            header = read_raw_header(cursor)
        except NotAHeaderError:
            return
        yield header


def parse_content_type(value: str) -> ContentType:
    """Interpret a Content-Type value.

    Raises:
        ExpectingBoundaryError: For a multipart type without a boundary.
        UnknownContentTypeError: For any type other than text/plain, text/html
            and multipart/*.
    """
    segments = [segment.strip() for segment in value.split(";")]
    name = segments[0]
    base = name.lower()

    if base.startswith("multipart/"):
        subtype = base.partition("/")[2]
        for segment in segments[1:]:
            match = _BOUNDARY_PARAM.match(segment)
            if not match:
                continue
            boundary = match.group("quoted")
            if boundary is None:
                boundary = match.group("bare")
            boundary = boundary.strip()
            if boundary:
                return ContentType.multipart(boundary, subtype=subtype)
        raise ExpectingBoundaryError(f"{name} declared without a boundary")

    if base == "text/plain":
        return ContentType.text_plain()
    if base == "text/html":
        return ContentType.text_html()

    raise UnknownContentTypeError(name)


def parse_transfer_encoding(value: str) -> Encoding:
    """Interpret a Content-Transfer-Encoding value; never fails."""
    name = value.strip().lower()
    if name == "base64":
        return Encoding.BASE64
    if name == "quoted-printable":
        return Encoding.QUOTED_PRINTABLE
    if name not in _PASS_THROUGH_ENCODINGS:
        logger.debug("unrecognized_transfer_encoding", encoding=name)
    return Encoding.IDENTITY


def interpret_header(key: str, value: str) -> HeaderValue:
    """Map a raw header to its typed value."""
    name = key.strip().lower()
    if name == "content-type":
        return ContentTypeValue(content_type=parse_content_type(value))
    if name == "content-transfer-encoding":
        return TransferEncodingValue(encoding=parse_transfer_encoding(value))
    return UnknownValue(text=value)


def read_header_block(cursor: LineCursor) -> Headers:
    """Read and interpret a whole header block.

    An unsupported Content-Type is kept as raw text so the part it belongs to
    can be skipped; a multipart type without boundary aborts the read.
    """
    entries: list[Header] = []
    for raw in iter_raw_headers(cursor):
        try:
            value = interpret_header(raw.key, raw.value)
        except UnknownContentTypeError as exc:
            logger.warning("unknown_content_type", content_type=exc.content_type)
            value = UnknownValue(text=raw.value)
        entries.append(Header(key=raw.key, value=value))
    return Headers(entries=tuple(entries))
