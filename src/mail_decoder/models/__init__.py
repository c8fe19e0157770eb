"""Data models for Mail Decoder.

This module contains Pydantic models for parsed headers and messages.
"""

from mail_decoder.models.mail import BodyPart, Mail
from mail_decoder.models.mime import (
    ContentKind,
    ContentType,
    ContentTypeValue,
    Encoding,
    Header,
    Headers,
    HeaderValue,
    TransferEncodingValue,
    UnknownValue,
)

__all__ = [
    "BodyPart",
    "ContentKind",
    "ContentType",
    "ContentTypeValue",
    "Encoding",
    "Header",
    "HeaderValue",
    "Headers",
    "Mail",
    "TransferEncodingValue",
    "UnknownValue",
]
