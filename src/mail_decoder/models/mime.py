"""MIME header models.

A header value is a tagged union: the two headers that steer body decoding
(``Content-Type`` and ``Content-Transfer-Encoding``) get typed values, every
other header keeps its raw text.
"""

from __future__ import annotations

from datetime import datetime
from email.utils import getaddresses, parsedate_to_datetime
from enum import Enum
from typing import Annotated, Literal, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field

from mail_decoder.decoding import decode_encoded_words
from mail_decoder.exceptions import MailDecoderError

logger = structlog.get_logger()


class Encoding(str, Enum):
    """Content transfer encodings the decoder understands."""

    QUOTED_PRINTABLE = "quoted-printable"
    BASE64 = "base64"
    IDENTITY = "identity"


class ContentKind(str, Enum):
    """Content type families the decoder understands."""

    TEXT_PLAIN = "text/plain"
    TEXT_HTML = "text/html"
    MULTIPART = "multipart"


class ContentType(BaseModel):
    """A recognized Content-Type.

    For multipart types ``boundary`` is the full delimiter line, i.e. the
    ``boundary=`` parameter prefixed with two hyphens.
    """

    model_config = ConfigDict(frozen=True)

    kind: ContentKind
    subtype: str | None = Field(default=None, description="Multipart subtype")
    boundary: str | None = Field(default=None, description="Delimiter line")

    @classmethod
    def text_plain(cls) -> ContentType:
        return cls(kind=ContentKind.TEXT_PLAIN)

    @classmethod
    def text_html(cls) -> ContentType:
        return cls(kind=ContentKind.TEXT_HTML)

    @classmethod
    def multipart(cls, boundary: str, subtype: str = "alternative") -> ContentType:
        """Build a multipart type from the bare ``boundary=`` parameter value."""
        return cls(kind=ContentKind.MULTIPART, subtype=subtype, boundary=f"--{boundary}")

    @property
    def is_multipart(self) -> bool:
        return self.kind is ContentKind.MULTIPART

    @property
    def mime_type(self) -> str:
        if self.is_multipart:
            return f"multipart/{self.subtype}"
        return self.kind.value


class ContentTypeValue(BaseModel):
    """Typed value of a Content-Type header."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["content_type"] = "content_type"
    content_type: ContentType


class TransferEncodingValue(BaseModel):
    """Typed value of a Content-Transfer-Encoding header."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["content_transfer_encoding"] = "content_transfer_encoding"
    encoding: Encoding


class UnknownValue(BaseModel):
    """Any other header, kept verbatim."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unknown"] = "unknown"
    text: str


HeaderValue = Annotated[
    Union[ContentTypeValue, TransferEncodingValue, UnknownValue],
    Field(discriminator="kind"),
]


class Header(BaseModel):
    """A single header: its key as written and its interpreted value."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: HeaderValue


class Headers(BaseModel):
    """The headers of a message or body part, in document order.

    Keys are matched case-insensitively. Duplicate keys are kept; single-value
    lookups return the last occurrence.
    """

    model_config = ConfigDict(frozen=True)

    entries: tuple[Header, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def get(self, key: str) -> HeaderValue | None:
        values = self.get_all(key)
        return values[-1] if values else None

    def get_all(self, key: str) -> list[HeaderValue]:
        wanted = key.lower()
        return [h.value for h in self.entries if h.key.lower() == wanted]

    def keys(self) -> list[str]:
        return list(self.as_dict())

    def as_dict(self) -> dict[str, HeaderValue]:
        """Fold the headers into a mapping where the last write wins.

        The key spelling of the last occurrence is kept.
        """
        folded: dict[str, Header] = {}
        for header in self.entries:
            folded.pop(header.key.lower(), None)
            folded[header.key.lower()] = header
        return {h.key: h.value for h in folded.values()}

    def text(self, key: str) -> str | None:
        """Raw text of an uninterpreted header, without decoding."""
        value = self.get(key)
        if isinstance(value, UnknownValue):
            return value.text
        return None

    def decoded(self, key: str) -> str | None:
        """Text of a header with RFC 2047 encoded words decoded.

        Falls back to the raw text when the encoded words are malformed.
        """
        raw = self.text(key)
        if raw is None:
            return None
        try:
            return decode_encoded_words(raw)
        except MailDecoderError as exc:
            logger.warning("encoded_word_decode_failed", header=key, error=str(exc))
            return raw

    def subject(self) -> str | None:
        return self.decoded("Subject")

    def from_(self) -> str | None:
        return self.decoded("From")

    def from_address(self) -> str | None:
        """The bare address of the first sender, e.g. ``alice@example.com``."""
        value = self.from_()
        if not value:
            return None
        addrs = [addr for _, addr in getaddresses([value]) if addr]
        return addrs[0] if addrs else None

    def date(self) -> datetime | None:
        value = self.decoded("Date")
        if not value:
            return None
        try:
            return parsedate_to_datetime(value)
        except (TypeError, ValueError, OverflowError):
            return None

    def content_type(self) -> ContentType | None:
        value = self.get("Content-Type")
        if isinstance(value, ContentTypeValue):
            return value.content_type
        return None

    def transfer_encoding(self) -> Encoding | None:
        value = self.get("Content-Transfer-Encoding")
        if isinstance(value, TransferEncodingValue):
            return value.encoding
        return None
