"""Byte-level decoders shared by header and body decoding.

Covers Base64, quoted-printable and UTF-8, plus RFC 2047 encoded words in
header values. Nothing here depends on the models, so header accessors can
decode on demand.
"""

from __future__ import annotations

import base64
import binascii
import re

import structlog

from mail_decoder.exceptions import Base64DecodeError, Utf8DecodeError

logger = structlog.get_logger()

_ENCODED_WORD = re.compile(
    r"=\?(?P<charset>[^?\s]+)\?(?P<encoding>[^?\s]+)\?(?P<text>[^?\s]*)\?="
)


def decode_base64(payload: str) -> bytes:
    """Decode a Base64 payload, ignoring embedded whitespace.

    Missing trailing padding is tolerated; characters outside the Base64
    alphabet are not.

    Raises:
        Base64DecodeError: If the payload is not valid Base64.
    """
    compact = "".join(payload.split())
    compact += "=" * (-len(compact) % 4)
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise Base64DecodeError(str(exc)) from exc


def decode_quoted_printable_bytes(payload: str, header: bool = False) -> bytes:
    """Decode ``=XX`` escapes and soft line breaks.

    With ``header=True`` the RFC 2047 "Q" variant is decoded, where ``_``
    stands for a space.
    """
    return binascii.a2b_qp(payload.encode("utf-8"), header=header)


def decode_utf8(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise Utf8DecodeError(str(exc)) from exc


def decode_encoded_words(value: str) -> str:
    """Decode every ``=?charset?encoding?text?=`` word in a header value.

    Text outside encoded words is kept as is, except whitespace that only
    separates two encoded words. ``B`` and ``Q`` words are decoded and read as
    UTF-8; words in any other encoding are dropped.

    Raises:
        Base64DecodeError: If a ``B`` word has an invalid payload.
        Utf8DecodeError: If a decoded word is not valid UTF-8.
    """
    if "=?" not in value:
        return value

    out: list[str] = []
    pos = 0
    previous_was_word = False
    for match in _ENCODED_WORD.finditer(value):
        between = value[pos : match.start()]
        if not (previous_was_word and between.strip() == ""):
            out.append(between)
        out.append(_decode_word(match))
        pos = match.end()
        previous_was_word = True
    out.append(value[pos:])
    return "".join(out)


def decode_subject(subject: str) -> str:
    """Decode a Subject value; see :func:`decode_encoded_words`."""
    return decode_encoded_words(subject)


def _decode_word(match: re.Match[str]) -> str:
    encoding = match.group("encoding").upper()
    text = match.group("text")
    if encoding == "B":
        return decode_utf8(decode_base64(text))
    if encoding == "Q":
        return decode_utf8(decode_quoted_printable_bytes(text, header=True))
    logger.debug(
        "encoded_word_dropped",
        charset=match.group("charset"),
        encoding=match.group("encoding"),
    )
    return ""
