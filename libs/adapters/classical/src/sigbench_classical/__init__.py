"""Adapter package for classical (ECDSA, RSA-PSS) verifiers backed by cryptography.

Importing submodules triggers registration.
"""

from . import ecdsa_adapter as _ecdsa_adapter  # noqa: F401
from . import rsa_adapter as _rsa_adapter  # noqa: F401

__all__: list[str] = []
