"""Line cursor over a fully buffered raw message."""

from __future__ import annotations

from collections import deque

from mail_decoder.exceptions import UnexpectedEndOfInputError, Utf8DecodeError


class LineCursor:
    """Reads a raw message one line at a time, with lookahead.

    Lines keep their terminator (``\\n`` or ``\\r\\n``); the last line may have
    none. Each line is decoded from UTF-8 only when it is first looked at, so
    a caller that stops early never touches the rest of the message.
    """

    def __init__(self, data: bytes) -> None:
        self._data = data if isinstance(data, bytes) else bytes(data)
        self._pos = 0
        # Lines already scanned past the committed position: (text, end offset).
        self._lookahead: deque[tuple[str, int]] = deque()

    @property
    def position(self) -> int:
        """Byte offset of the next unconsumed line."""
        return self._pos

    def at_end(self) -> bool:
        return self.peek() is None

    def peek(self, ahead: int = 0) -> str | None:
        """Return the line ``ahead`` lines past the cursor without consuming it."""
        while len(self._lookahead) <= ahead:
            start = self._lookahead[-1][1] if self._lookahead else self._pos
            scanned = self._scan(start)
            if scanned is None:
                return None
            self._lookahead.append(scanned)
        return self._lookahead[ahead][0]

    def advance(self, count: int = 1) -> None:
        """Commit ``count`` lines."""
        for _ in range(count):
            if self.peek() is None:
                raise UnexpectedEndOfInputError("advanced past the end of the message")
            _, self._pos = self._lookahead.popleft()

    def readline(self) -> str | None:
        line = self.peek()
        if line is not None:
            self.advance()
        return line

    def _scan(self, start: int) -> tuple[str, int] | None:
        if start >= len(self._data):
            return None
        end = self._data.find(b"\n", start)
        end = len(self._data) if end == -1 else end + 1
        try:
            line = self._data[start:end].decode("utf-8")
        except UnicodeDecodeError as exc:
            raise Utf8DecodeError(f"Invalid UTF-8 at byte {start + exc.start}") from exc
        return line, end


def strip_line_break(line: str) -> str:
    """Remove a trailing ``\\n`` or ``\\r\\n``."""
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def is_blank(line: str) -> bool:
    return strip_line_break(line) == ""
