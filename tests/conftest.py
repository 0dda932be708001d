from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]

for candidate in (
    ROOT / "libs" / "core" / "src",
    ROOT / "libs" / "adapters" / "classical" / "src",
    ROOT / "libs" / "adapters" / "liboqs" / "src",
    ROOT / "apps" / "cli" / "src",
):
    candidate_str = str(candidate)
    if candidate_str not in sys.path:
        sys.path.insert(0, candidate_str)

from sigbench import registry, load_adapters  # noqa: E402
from sigbench.codec import decode, encode  # noqa: E402
from sigbench.interfaces import AlgorithmIdentity  # noqa: E402

# Register the real adapters once, before any test swaps the registry contents.
load_adapters()

GOOD_SIGNATURE = encode(b"good-signature")
DUMMY_KEY = encode(b"dummy-key")


class DummyVerifier:
    """Accepts exactly GOOD_SIGNATURE; counts calls across instances."""
    calls = 0

    def verify(self, signature_text: str, public_key_text: str, message_text: str) -> bool:
        DummyVerifier.calls += 1
        return signature_text == GOOD_SIGNATURE

    def create_fixture(self, message: bytes) -> tuple[bytes, bytes]:
        return decode(GOOD_SIGNATURE), decode(DUMMY_KEY)


def flip_bit(text: str, index: int | None = None) -> str:
    """Flip the lowest bit of one byte of a base64-encoded value."""
    raw = bytearray(decode(text))
    i = len(raw) // 2 if index is None else index
    raw[i] ^= 0x01
    return encode(bytes(raw))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "SIGBENCH_ITERATIONS",
        "SIGBENCH_FIXTURES",
        "SIGBENCH_POLICY",
        "SIGBENCH_BUCKET",
        "SIGBENCH_LOG_LEVEL",
        "SERVICE_ACCOUNT_JSON",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def dummy_registry():
    original_items = dict(registry._items)  # type: ignore[attr-defined]
    registry._items.clear()  # type: ignore[attr-defined]
    registry._items.update(  # type: ignore[attr-defined]
        {identity.value: DummyVerifier for identity in AlgorithmIdentity}
    )
    DummyVerifier.calls = 0
    try:
        yield
    finally:
        registry._items.clear()  # type: ignore[attr-defined]
        registry._items.update(original_items)  # type: ignore[attr-defined]
