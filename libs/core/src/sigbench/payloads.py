from __future__ import annotations
from enum import Enum

from .codec import decode

# "hello"
SMALL_PAYLOAD = "aGVsbG8="
# "hi\n" repeated, about 1.5 MiB once decoded
MEDIUM_PATTERN = "aGkK"
MEDIUM_REPEAT = 1024 * 512


class PayloadSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"


PAYLOAD_SIZES = (PayloadSize.SMALL, PayloadSize.MEDIUM)

_MEDIUM_CACHE: str | None = None


def payload_text(size: PayloadSize | str) -> str:
    """Base64 text of the static payload for a size class."""
    global _MEDIUM_CACHE
    size = PayloadSize(size)
    if size is PayloadSize.SMALL:
        return SMALL_PAYLOAD
    if _MEDIUM_CACHE is None:
        _MEDIUM_CACHE = MEDIUM_PATTERN * MEDIUM_REPEAT
    return _MEDIUM_CACHE


def payload_bytes(size: PayloadSize | str) -> bytes:
    return decode(payload_text(size))
