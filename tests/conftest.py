"""Pytest configuration and shared fixtures."""

import pytest


@pytest.fixture
def simple_message() -> bytes:
    """Provide a single-part plain-text message."""
    return b"Subject: Hello\r\nContent-Type: text/plain\r\n\r\nHi there\r\n"


@pytest.fixture
def alternative_message() -> bytes:
    """Provide a multipart/alternative message with plain and HTML parts."""
    return (
        b"Subject: Alternatives\r\n"
        b'Content-Type: multipart/alternative; boundary="X"\r\n'
        b"\r\n"
        b"--X\r\n"
        b"Content-Type: text/plain\r\n"
        b"\r\n"
        b"A\r\n"
        b"--X\r\n"
        b"Content-Type: text/html\r\n"
        b"\r\n"
        b"<b>A</b>\r\n"
        b"--X--\r\n"
    )


@pytest.fixture
def nested_message() -> bytes:
    """Provide a multipart/mixed message with a nested alternative and an attachment.

    Uses bare LF line endings.
    """
    return (
        "From: =?UTF-8?B?Sm9zw6k=?= <jose@example.com>\n"
        "Subject: =?utf-8?Q?Monthly_report?=\n"
        "Date: Mon, 14 Oct 2024 09:30:00 +0000\n"
        'Content-Type: multipart/mixed; boundary="outer"\n'
        "\n"
        "This is a preamble.\n"
        "--outer\n"
        "Content-Type: multipart/alternative;\n"
        ' boundary="inner"\n'
        "\n"
        "--inner\n"
        "Content-Type: text/plain; charset=utf-8\n"
        "Content-Transfer-Encoding: quoted-printable\n"
        "\n"
        "caf=C3=A9 =3D ok\n"
        "--inner\n"
        "Content-Type: text/html\n"
        "Content-Transfer-Encoding: base64\n"
        "\n"
        "PHA+SGk8\n"
        "L3A+\n"
        "--inner--\n"
        "--outer\n"
        "Content-Type: application/pdf\n"
        "Content-Transfer-Encoding: base64\n"
        "\n"
        "JVBERi0xLjQK\n"
        "--outer\n"
        "Content-Type: text/plain\n"
        "\n"
        "Second plain\n"
        "--outer--\n"
        "epilogue\n"
    ).encode("utf-8")


@pytest.fixture
def deep_message() -> bytes:
    """Provide a message whose only leaf sits three multipart levels deep."""
    return (
        b'Content-Type: multipart/mixed; boundary="a"\r\n'
        b"\r\n"
        b"--a\r\n"
        b'Content-Type: multipart/mixed; boundary="b"\r\n'
        b"\r\n"
        b"--b\r\n"
        b'Content-Type: multipart/alternative; boundary="c"\r\n'
        b"\r\n"
        b"--c\r\n"
        b"Content-Type: text/plain\r\n"
        b"\r\n"
        b"deep\r\n"
        b"--c--\r\n"
        b"--b--\r\n"
        b"--a--\r\n"
    )
