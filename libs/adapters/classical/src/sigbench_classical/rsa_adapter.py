from __future__ import annotations
from typing import Tuple

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import rsa, padding

from sigbench import registry
from sigbench.errors import KeyParseError, SignatureParseError, VerificationError
from sigbench.interfaces import AlgorithmIdentity, VerificationInput
from ._pem import load_public_key, dump_public_key

RSA_KEY_BITS = 4096


@registry.register(AlgorithmIdentity.RSA_4096_PSS.value)
class RsaPss:
    """RSA-PSS verifier: SHA-256 digest, MGF1-SHA-256, salt length recovered from the signature."""
    name = AlgorithmIdentity.RSA_4096_PSS.value
    identity = AlgorithmIdentity.RSA_4096_PSS
    key_bits = RSA_KEY_BITS
    hash_algorithm = hashes.SHA256
    mgf_hash_algorithm = hashes.SHA256

    def _parse_public_key(self, pem: bytes) -> rsa.RSAPublicKey:
        key = load_public_key(pem, rsa.RSAPublicKey, "RSA")
        # Reports label this adapter RSA-4096, so other moduli are rejected
        if key.key_size != self.key_bits:
            raise KeyParseError(f"RSA: expected a {self.key_bits}-bit modulus, got {key.key_size} bits")
        return key

    def _verify_padding(self) -> padding.PSS:
        return padding.PSS(mgf=padding.MGF1(self.mgf_hash_algorithm()), salt_length=padding.PSS.AUTO)

    def verify(self, signature_text: str, public_key_text: str, message_text: str) -> bool:
        data = VerificationInput.from_text(signature_text, public_key_text, message_text)
        pk = self._parse_public_key(data.public_key)
        if not data.signature:
            raise SignatureParseError("RSA: empty signature")
        try:
            pk.verify(data.signature, data.message, self._verify_padding(), self.hash_algorithm())
            return True
        except InvalidSignature:
            return False
        except ValueError as exc:
            raise VerificationError(f"RSA verification error: {exc}") from exc

    def create_fixture(self, message: bytes) -> Tuple[bytes, bytes]:
        sk = rsa.generate_private_key(public_exponent=65537, key_size=self.key_bits)
        signature = sk.sign(
            message,
            padding.PSS(mgf=padding.MGF1(self.mgf_hash_algorithm()), salt_length=padding.PSS.MAX_LENGTH),
            self.hash_algorithm(),
        )
        return signature, dump_public_key(sk.public_key())
