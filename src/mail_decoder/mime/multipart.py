"""Line-driven walker over a message body.

The walker reads the body one line at a time. Lines are buffered into the
current leaf part until a boundary delimiter closes it; the buffer is then
decoded and the headers of the next part are read. Nested multipart parts
push their boundary onto a stack, so the output is a flat list of leaves in
document order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import structlog

from mail_decoder.config import DecoderLimits
from mail_decoder.exceptions import Base64DecodeError, LimitExceededError, Utf8DecodeError
from mail_decoder.mime.content import decode_content
from mail_decoder.mime.cursor import LineCursor, strip_line_break
from mail_decoder.mime.headers import read_header_block
from mail_decoder.models import BodyPart, ContentType, Encoding, Headers

logger = structlog.get_logger()


class WalkerState(str, Enum):
    """States of :class:`MultipartWalker`."""

    READING_HEADERS = "reading_headers"
    READING_BODY = "reading_body"
    DONE = "done"


@dataclass
class _Container:
    """An open multipart container."""

    boundary: str
    path: tuple[int, ...]
    child_index: int = -1


@dataclass
class _Leaf:
    """The leaf part currently being buffered."""

    content_type: ContentType | None
    encoding: Encoding
    path: tuple[int, ...]
    has_headers: bool
    buffer: list[str] = field(default_factory=list)
    size: int = 0


class MultipartWalker:
    """Collects the decoded leaf parts of one message.

    A walker is single use: create one per message.
    """

    def __init__(self, cursor: LineCursor, limits: DecoderLimits | None = None) -> None:
        self._cursor = cursor
        self._limits = limits or DecoderLimits()
        self._containers: list[_Container] = []
        self._leaf: _Leaf | None = None
        self._parts: list[BodyPart] = []
        self.state = WalkerState.READING_HEADERS

    def walk(self, headers: Headers) -> list[BodyPart]:
        """Walk the body following ``headers``.

        Args:
            headers: Headers of the message, already read from the cursor.

        Returns:
            The decoded leaf parts, in the order their delimiters closed them.

        Raises:
            ExpectingBoundaryError: If a nested part declares a multipart type
                without boundary.
            LimitExceededError: If parts nest deeper than the limit allows.
            Utf8DecodeError: If a body line is not valid UTF-8.
        """
        self._enter_part(headers, ())
        self.state = WalkerState.READING_BODY

        while True:
            line = self._cursor.readline()
            if line is None:
                self._flush(closed_by_delimiter=False)
                self.state = WalkerState.DONE
                return self._parts
            self._consume(line)

    def _consume(self, line: str) -> None:
        matched = self._match_delimiter(line)
        if matched is None:
            if self._leaf is not None and self._leaf.content_type is not None:
                self._append(line)
            return

        depth, closing = matched
        self._flush(closed_by_delimiter=True)
        # A delimiter of an outer container also closes every inner one.
        del self._containers[depth + 1 :]

        if closing:
            self._containers.pop()
            return

        container = self._containers[depth]
        container.child_index += 1
        self.state = WalkerState.READING_HEADERS
        headers = read_header_block(self._cursor)
        self._enter_part(headers, container.path + (container.child_index,))
        self.state = WalkerState.READING_BODY

    def _match_delimiter(self, line: str) -> tuple[int, bool] | None:
        """Return the depth of the container whose boundary starts ``line``."""
        if not self._containers:
            return None
        stripped = line.strip()
        if not stripped.startswith("--"):
            return None
        for depth in range(len(self._containers) - 1, -1, -1):
            boundary = self._containers[depth].boundary
            if stripped.startswith(boundary):
                return depth, stripped[len(boundary) :].startswith("--")
        return None

    def _enter_part(self, headers: Headers, path: tuple[int, ...]) -> None:
        content_type = headers.content_type()

        if content_type is not None and content_type.is_multipart:
            depth = len(self._containers) + 1
            if depth > self._limits.max_nesting_depth:
                raise LimitExceededError(
                    "max_nesting_depth", self._limits.max_nesting_depth, depth
                )
            # Lines up to the first delimiter are the preamble and are dropped.
            self._containers.append(_Container(boundary=content_type.boundary, path=path))
            self._leaf = None
            return

        if content_type is None and "Content-Type" not in headers:
            content_type = ContentType.text_plain()

        self._leaf = _Leaf(
            content_type=content_type,
            encoding=headers.transfer_encoding() or Encoding.IDENTITY,
            path=path,
            has_headers=len(headers) > 0,
        )

    def _append(self, line: str) -> None:
        leaf = self._leaf
        text = line.strip() if leaf.encoding is Encoding.BASE64 else line
        leaf.size += len(text)
        if leaf.size > self._limits.max_part_size:
            logger.warning(
                "body_part_dropped",
                path=list(leaf.path),
                content_type=leaf.content_type.mime_type,
                limit="max_part_size",
                maximum=self._limits.max_part_size,
            )
            # The rest of the part is skipped without buffering.
            leaf.content_type = None
            leaf.buffer.clear()
            return
        leaf.buffer.append(text)

    def _flush(self, closed_by_delimiter: bool) -> None:
        leaf, self._leaf = self._leaf, None
        if leaf is None:
            return
        if leaf.content_type is None:
            logger.debug("body_part_skipped", path=list(leaf.path))
            return

        content = "".join(leaf.buffer)
        if not leaf.has_headers and not content.strip():
            return
        if closed_by_delimiter:
            # The line break before a delimiter belongs to the delimiter.
            content = strip_line_break(content)

        try:
            decoded = decode_content(leaf.encoding, content)
        except (Base64DecodeError, Utf8DecodeError) as exc:
            logger.warning(
                "body_part_dropped",
                path=list(leaf.path),
                content_type=leaf.content_type.mime_type,
                encoding=leaf.encoding.value,
                error=str(exc),
            )
            return

        self._parts.append(
            BodyPart(content_type=leaf.content_type, content=decoded, path=leaf.path)
        )
