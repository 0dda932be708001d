from __future__ import annotations
import hashlib
from typing import Sequence, Tuple

from sigbench import registry
from sigbench.errors import ConfigError, KeyParseError, SignatureParseError, VerificationError
from sigbench.interfaces import AlgorithmIdentity, VerificationInput
from ._util import try_import_oqs, pick_sig_algorithm

_oqs = try_import_oqs()


def sha256_prehash(message: bytes) -> bytes:
    return hashlib.sha256(message).digest()


class _OqsVerifier:
    """Verifier over one liboqs signature mechanism.

    Keys and signatures are raw liboqs encodings. When the identity is
    prehashed, the primitive signs and verifies the 32-byte SHA-256 digest
    of the message instead of the message itself.
    """
    name: str
    identity: AlgorithmIdentity
    env_var: str
    candidates: Sequence[str]

    def __init__(self) -> None:
        self.alg = pick_sig_algorithm(_oqs, self.env_var, self.candidates)
        if not self.alg:
            raise ConfigError(f"No supported {self.identity.display_name} mechanism enabled in liboqs")
        with _oqs.Signature(self.alg) as s:
            self.public_key_length = int(s.details["length_public_key"])
            self.max_signature_length = int(s.details["length_signature"])

    def _parse_public_key(self, public_key: bytes) -> bytes:
        if len(public_key) != self.public_key_length:
            raise KeyParseError(
                f"{self.alg} public key must be {self.public_key_length} bytes, got {len(public_key)}"
            )
        return public_key

    def _parse_signature(self, signature: bytes) -> bytes:
        if not 0 < len(signature) <= self.max_signature_length:
            raise SignatureParseError(
                f"{self.alg} signature must be 1..{self.max_signature_length} bytes, got {len(signature)}"
            )
        return signature

    def _prepare(self, message: bytes) -> bytes:
        return sha256_prehash(message) if self.identity.prehashed else message

    def verify(self, signature_text: str, public_key_text: str, message_text: str) -> bool:
        data = VerificationInput.from_text(signature_text, public_key_text, message_text)
        public_key = self._parse_public_key(data.public_key)
        signature = self._parse_signature(data.signature)
        message = self._prepare(data.message)
        with _oqs.Signature(self.alg) as v:
            try:
                return bool(v.verify(message, signature, public_key))
            except (RuntimeError, ValueError) as exc:
                raise VerificationError(f"{self.alg} verification error: {exc}") from exc

    def create_fixture(self, message: bytes) -> Tuple[bytes, bytes]:
        with _oqs.Signature(self.alg) as s:
            pk = s.generate_keypair()
            return s.sign(self._prepare(message)), pk


if _oqs is not None:
    @registry.register(AlgorithmIdentity.ML_DSA_65.value)
    class MlDsa65(_OqsVerifier):
        name = AlgorithmIdentity.ML_DSA_65.value
        identity = AlgorithmIdentity.ML_DSA_65
        env_var = "SIGBENCH_MLDSA_ALG"
        candidates = ("ML-DSA-65", "Dilithium3")

    @registry.register(AlgorithmIdentity.ML_DSA_65_RAW.value)
    class MlDsa65Raw(MlDsa65):
        name = AlgorithmIdentity.ML_DSA_65_RAW.value
        identity = AlgorithmIdentity.ML_DSA_65_RAW

    @registry.register(AlgorithmIdentity.FALCON_512.value)
    class Falcon512(_OqsVerifier):
        name = AlgorithmIdentity.FALCON_512.value
        identity = AlgorithmIdentity.FALCON_512
        env_var = "SIGBENCH_FALCON_ALG"
        candidates = ("Falcon-512",)

    @registry.register(AlgorithmIdentity.FALCON_512_RAW.value)
    class Falcon512Raw(Falcon512):
        name = AlgorithmIdentity.FALCON_512_RAW.value
        identity = AlgorithmIdentity.FALCON_512_RAW
