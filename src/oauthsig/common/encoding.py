"""Percent, form and Base64 encoding primitives for OAuth 1.0."""

from __future__ import annotations

import base64
import binascii
from collections.abc import Iterable
from typing import Any
from urllib.parse import quote, unquote


def to_text(value: Any) -> str:
    """Render a parameter name or value as text; ``None`` becomes ``""``."""
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def percent_encode(value: Any) -> str:
    """
    Percent-encode a value using the OAuth unreserved character set.

    Letters, digits and ``-._~`` pass through. Everything else is encoded
    as UTF-8 bytes with uppercase hex digits.

    Args:
        value: Text to encode (``None`` encodes as the empty string)

    Returns:
        Encoded text
    """
    return quote(to_text(value), safe="~")


def percent_decode(value: str) -> str:
    """Decode a percent-encoded value."""
    return unquote(value, encoding="utf-8", errors="strict")


def form_encode(parameters: Iterable[tuple[Any, Any]] | None) -> str:
    """Encode name/value pairs as ``name=value`` joined by ``&``, in order."""
    if parameters is None:
        return ""
    return "&".join(
        f"{percent_encode(name)}={percent_encode(value)}" for name, value in parameters
    )


def decode_form(form: str | None) -> list[tuple[str, str]]:
    """
    Parse ``name=value&...`` into decoded pairs.

    Empty segments are skipped. A segment without ``=`` yields an empty
    value. ``+`` is decoded as a space, as form bodies use it.
    """
    pairs: list[tuple[str, str]] = []
    if not form:
        return pairs
    for segment in form.split("&"):
        if not segment:
            continue
        name, _, value = segment.partition("=")
        pairs.append(
            (percent_decode(name.replace("+", " ")), percent_decode(value.replace("+", " ")))
        )
    return pairs


def base64_encode(data: bytes) -> str:
    """Encode bytes as standard Base64 text."""
    return base64.b64encode(data).decode("ascii")


def base64_decode(text: str) -> bytes:
    """
    Decode standard Base64 text.

    Raises:
        ValueError: If the text is not valid Base64
    """
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise ValueError(f"Invalid Base64 value: {e}") from e
