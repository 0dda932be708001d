from __future__ import annotations
from typing import Tuple

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from sigbench import registry
from sigbench.errors import KeyParseError, SignatureParseError, VerificationError
from sigbench.interfaces import AlgorithmIdentity, VerificationInput
from ._pem import load_public_key, dump_public_key


@registry.register(AlgorithmIdentity.ECDSA_P384.value)
class EcdsaP384:
    """ECDSA over secp384r1; the verifier hashes the message with SHA-384."""
    name = AlgorithmIdentity.ECDSA_P384.value
    identity = AlgorithmIdentity.ECDSA_P384
    curve = ec.SECP384R1
    hash_algorithm = hashes.SHA384

    def _parse_public_key(self, pem: bytes) -> ec.EllipticCurvePublicKey:
        key = load_public_key(pem, ec.EllipticCurvePublicKey, "ECDSA")
        if not isinstance(key.curve, self.curve):
            raise KeyParseError(f"ECDSA: expected curve {self.curve.name}, got {key.curve.name}")
        return key

    def verify(self, signature_text: str, public_key_text: str, message_text: str) -> bool:
        data = VerificationInput.from_text(signature_text, public_key_text, message_text)
        pk = self._parse_public_key(data.public_key)
        if not data.signature:
            raise SignatureParseError("ECDSA: empty signature")
        try:
            pk.verify(data.signature, data.message, ec.ECDSA(self.hash_algorithm()))
            return True
        except InvalidSignature:
            return False
        except ValueError as exc:
            raise VerificationError(f"ECDSA verification error: {exc}") from exc

    def create_fixture(self, message: bytes) -> Tuple[bytes, bytes]:
        sk = ec.generate_private_key(self.curve())
        signature = sk.sign(message, ec.ECDSA(self.hash_algorithm()))
        return signature, dump_public_key(sk.public_key())
