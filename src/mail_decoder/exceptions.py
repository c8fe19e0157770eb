"""Custom exceptions for Mail Decoder."""


class MailDecoderError(Exception):
    """Base exception for all Mail Decoder errors."""


class UnexpectedEndOfInputError(MailDecoderError):
    """Exception raised when the input ends in the middle of a header."""


class NotAHeaderError(MailDecoderError):
    """Raised internally when the next line does not start a header.

    This ends a header block and never escapes :func:`mail_decoder.parse`.
    """


class UnknownContentTypeError(MailDecoderError):
    """Exception raised for a Content-Type this decoder does not handle."""

    def __init__(self, content_type: str) -> None:
        super().__init__(f"Unknown content type: {content_type!r}")
        self.content_type = content_type


class ExpectingBoundaryError(MailDecoderError):
    """Exception raised when a multipart Content-Type has no boundary."""


class Base64DecodeError(MailDecoderError):
    """Exception raised when a Base64 payload cannot be decoded."""


class Utf8DecodeError(MailDecoderError):
    """Exception raised when bytes are not valid UTF-8."""


class LimitExceededError(MailDecoderError):
    """Exception raised when a message exceeds one of the decoder limits."""

    def __init__(self, limit: str, maximum: int, actual: int) -> None:
        super().__init__(f"{limit} exceeded: {actual} > {maximum}")
        self.limit = limit
        self.maximum = maximum
        self.actual = actual
