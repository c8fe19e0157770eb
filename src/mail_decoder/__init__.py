"""Mail Decoder - structured decoding of raw RFC 822 / MIME messages.

This package turns the raw bytes of a mail message into headers, subject,
sender and decoded plain-text and HTML bodies.
"""

__version__ = "0.1.0"
__author__ = "Trickl"

from mail_decoder.config import DecoderLimits, Settings, get_settings
from mail_decoder.exceptions import MailDecoderError
from mail_decoder.mime import decode_encoded_words, parse, parse_headers
from mail_decoder.models import BodyPart, ContentType, Encoding, Headers, Mail

__all__ = [
    "BodyPart",
    "ContentType",
    "DecoderLimits",
    "Encoding",
    "Headers",
    "Mail",
    "MailDecoderError",
    "Settings",
    "decode_encoded_words",
    "get_settings",
    "parse",
    "parse_headers",
    "__version__",
    "__author__",
]
