"""Decoded mail model.

A ``Mail`` is the result of one :func:`mail_decoder.parse` call. It is
immutable and holds no reference to the raw message bytes.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from mail_decoder.models.mime import ContentType, Headers


class BodyPart(BaseModel):
    """A decoded leaf part of a message."""

    model_config = ConfigDict(frozen=True)

    content_type: ContentType = Field(description="Content type of the leaf")
    content: str = Field(description="Decoded content")
    path: tuple[int, ...] = Field(
        default=(),
        description="Index of the leaf at each multipart level; empty for a single-part message",
    )


class Mail(BaseModel):
    """A parsed message: headers plus its canonical plain and HTML bodies."""

    model_config = ConfigDict(frozen=True)

    headers: Headers = Field(default_factory=Headers, description="Top-level headers")
    plain: str | None = Field(default=None, description="First text/plain body")
    html: str | None = Field(default=None, description="First text/html body")
    parts: tuple[BodyPart, ...] = Field(
        default=(), description="Every decoded leaf part in document order"
    )

    def subject(self) -> str | None:
        return self.headers.subject()

    def from_(self) -> str | None:
        return self.headers.from_()

    def date(self) -> datetime | None:
        return self.headers.date()

    def content_type(self) -> ContentType | None:
        return self.headers.content_type()

    def plain_body(self) -> str | None:
        return self.plain

    def html_body(self) -> str | None:
        return self.html
