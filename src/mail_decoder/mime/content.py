"""Content transfer decoding of body parts."""

from __future__ import annotations

from mail_decoder.decoding import decode_base64, decode_quoted_printable_bytes, decode_utf8
from mail_decoder.models import Encoding


def decode_content(encoding: Encoding, content: str) -> str:
    """Decode a body part according to its transfer encoding.

    Args:
        encoding: The part's Content-Transfer-Encoding.
        content: The buffered body text.

    Returns:
        The decoded text.

    Raises:
        Base64DecodeError: If a Base64 body is malformed.
        Utf8DecodeError: If the decoded bytes are not UTF-8.
    """
    if encoding is Encoding.BASE64:
        return decode_utf8(decode_base64(content))
    if encoding is Encoding.QUOTED_PRINTABLE:
        return decode_utf8(decode_quoted_printable_bytes(content))
    return content
