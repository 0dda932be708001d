from __future__ import annotations
from typing import Any, Tuple, Type

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from sigbench.errors import KeyParseError


def load_public_key(pem: bytes, expected: Type[Any] | Tuple[Type[Any], ...], label: str) -> Any:
    """Parse a PEM SubjectPublicKeyInfo and check it has the expected key type."""
    try:
        key = serialization.load_pem_public_key(pem)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyParseError(f"{label}: cannot parse PEM public key: {exc}") from exc
    if not isinstance(key, expected):
        raise KeyParseError(f"{label}: expected {label} public key, got {type(key).__name__}")
    return key


def dump_public_key(key: Any) -> bytes:
    return key.public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )
