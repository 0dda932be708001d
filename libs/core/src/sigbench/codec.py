from __future__ import annotations
import base64
import binascii

from .errors import DecodeError


def decode(text: str | bytes) -> bytes:
    """Decode standard (padded) base64 text into raw bytes.

    Only the encoding is validated; empty input decodes to ``b""`` and what the
    bytes mean is left to the adapter that consumes them.
    """
    if isinstance(text, str):
        try:
            text = text.encode("ascii")
        except UnicodeEncodeError as exc:
            raise DecodeError(f"non-ascii character in base64 input: {exc}") from exc
    try:
        return base64.b64decode(text, validate=True)
    except binascii.Error as exc:
        raise DecodeError(f"invalid base64 input: {exc}") from exc


def encode(data: bytes | bytearray) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")
