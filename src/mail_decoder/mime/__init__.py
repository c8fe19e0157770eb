"""MIME decoding.

This package turns raw RFC 822 / MIME bytes into the models of
:mod:`mail_decoder.models`.
"""

from mail_decoder.decoding import decode_encoded_words, decode_subject

from .assembler import parse, parse_headers
from .content import decode_content

__all__ = [
    "decode_content",
    "decode_encoded_words",
    "decode_subject",
    "parse",
    "parse_headers",
]
