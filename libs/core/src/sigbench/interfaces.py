from __future__ import annotations
"""Algorithm identities and the verification contract used by adapters.

Adapters implement `SignatureVerifier` and register themselves into the global
registry under their identity value. The harness and CLI interact only with
these interfaces, never with vendor libraries directly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Tuple

from .codec import decode
from .errors import ParseError, DecodeError, VerificationError


class AlgorithmIdentity(str, Enum):
    """One variant per (scheme, message pre-processing policy).

    The PQ schemes exist twice because a signature made over the SHA-256 digest
    of a message never validates over the raw message and vice versa.
    """

    ML_DSA_65 = "ml-dsa-65"
    ML_DSA_65_RAW = "ml-dsa-65-raw"
    FALCON_512 = "falcon-512"
    FALCON_512_RAW = "falcon-512-raw"
    RSA_4096_PSS = "rsa-4096-pss"
    ECDSA_P384 = "ecdsa-p384"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def prehashed(self) -> bool:
        return self in (AlgorithmIdentity.ML_DSA_65, AlgorithmIdentity.FALCON_512)


_DISPLAY_NAMES = {
    AlgorithmIdentity.ML_DSA_65: "ML-DSA-65",
    AlgorithmIdentity.ML_DSA_65_RAW: "ML-DSA-65 (raw)",
    AlgorithmIdentity.FALCON_512: "Falcon-512",
    AlgorithmIdentity.FALCON_512_RAW: "Falcon-512 (raw)",
    AlgorithmIdentity.RSA_4096_PSS: "RSA-4096",
    AlgorithmIdentity.ECDSA_P384: "ECDSA-384",
}

POLICIES = {
    "prehash": (
        AlgorithmIdentity.ML_DSA_65,
        AlgorithmIdentity.FALCON_512,
        AlgorithmIdentity.RSA_4096_PSS,
        AlgorithmIdentity.ECDSA_P384,
    ),
    "raw": (
        AlgorithmIdentity.ML_DSA_65_RAW,
        AlgorithmIdentity.FALCON_512_RAW,
        AlgorithmIdentity.RSA_4096_PSS,
        AlgorithmIdentity.ECDSA_P384,
    ),
}
DEFAULT_POLICY = "prehash"


def identities_for_policy(policy: str) -> Tuple[AlgorithmIdentity, ...]:
    try:
        return POLICIES[policy]
    except KeyError:
        raise ValueError(f"unknown policy {policy!r}; expected one of {sorted(POLICIES)}") from None


@dataclass(frozen=True)
class VerificationInput:
    signature: bytes
    public_key: bytes
    message: bytes

    @classmethod
    def from_text(cls, signature_text: str, public_key_text: str, message_text: str) -> "VerificationInput":
        return cls(decode(signature_text), decode(public_key_text), decode(message_text))


@dataclass(frozen=True)
class VerificationOutcome:
    valid: bool
    cause: Optional[VerificationError] = None


class SignatureVerifier(Protocol):
    """Uniform verification contract.

    `verify` returns the primitive's verdict for well-formed input and raises a
    `VerificationError` subclass when decoding or parsing fails first.
    """
    name: str
    identity: AlgorithmIdentity
    def verify(self, signature_text: str, public_key_text: str, message_text: str) -> bool: ...


class FixtureSigner(Protocol):
    """Produces (signature, public key) bytes in the adapter's own key form."""
    def create_fixture(self, message: bytes) -> Tuple[bytes, bytes]: ...


def check(
    verifier: SignatureVerifier,
    signature_text: str,
    public_key_text: str,
    message_text: str,
) -> VerificationOutcome:
    """Run one verification, folding decode/parse failures into the outcome."""
    try:
        valid = verifier.verify(signature_text, public_key_text, message_text)
    except (DecodeError, ParseError) as exc:
        return VerificationOutcome(valid=False, cause=exc)
    return VerificationOutcome(valid=bool(valid))
