"""Entry points turning raw message bytes into :class:`~mail_decoder.models.Mail`."""

from __future__ import annotations

import structlog

from mail_decoder.config import DecoderLimits
from mail_decoder.exceptions import LimitExceededError
from mail_decoder.mime.cursor import LineCursor
from mail_decoder.mime.headers import read_header_block
from mail_decoder.mime.multipart import MultipartWalker
from mail_decoder.models import BodyPart, ContentKind, Headers, Mail

logger = structlog.get_logger()


def _as_bytes(raw: bytes | bytearray | memoryview) -> bytes:
    if isinstance(raw, str):
        raise TypeError("raw message must be bytes, not str")
    if isinstance(raw, bytes):
        return raw
    return bytes(raw)


def _open(raw: bytes | bytearray | memoryview, limits: DecoderLimits) -> LineCursor:
    data = _as_bytes(raw)
    if len(data) > limits.max_message_size:
        raise LimitExceededError("max_message_size", limits.max_message_size, len(data))
    return LineCursor(data)


def select_bodies(parts: list[BodyPart]) -> tuple[str | None, str | None]:
    """Pick the first plain-text and the first HTML body.

    Returns:
        A ``(plain, html)`` tuple; either may be None.
    """
    plain: str | None = None
    html: str | None = None
    for part in parts:
        kind = part.content_type.kind
        if kind is ContentKind.TEXT_PLAIN and plain is None:
            plain = part.content
        elif kind is ContentKind.TEXT_HTML and html is None:
            html = part.content
    return plain, html


def parse(raw: bytes | bytearray | memoryview, limits: DecoderLimits | None = None) -> Mail:
    """Parse a complete message.

    Encoded words in headers are left as they are; the ``Mail`` accessors
    decode them on demand.

    Args:
        raw: The full message bytes.
        limits: Resource limits. If None, uses the defaults.

    Returns:
        Mail: Headers plus the first plain-text and HTML bodies.

    Raises:
        MailDecoderError: If the message cannot be given a coherent shape. A
            body part that fails to decode is dropped instead.
    """
    limits = limits or DecoderLimits()
    cursor = _open(raw, limits)

    headers = read_header_block(cursor)
    parts = MultipartWalker(cursor, limits).walk(headers)
    plain, html = select_bodies(parts)

    logger.debug(
        "mail_parsed",
        header_count=len(headers),
        part_count=len(parts),
        has_plain=plain is not None,
        has_html=html is not None,
    )
    return Mail(headers=headers, plain=plain, html=html, parts=tuple(parts))


def parse_headers(
    raw: bytes | bytearray | memoryview, limits: DecoderLimits | None = None
) -> Headers:
    """Parse only the header block of a message.

    The body is never read, so this stays cheap for listings that only need
    the subject or sender.

    Args:
        raw: The message bytes, or just its header block.
        limits: Resource limits. If None, uses the defaults.

    Returns:
        Headers: The top-level headers.
    """
    limits = limits or DecoderLimits()
    return read_header_block(_open(raw, limits))
