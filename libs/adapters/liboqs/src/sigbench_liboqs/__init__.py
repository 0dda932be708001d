"""Adapter package for liboqs-backed signature verifiers.

Importing submodules triggers registration of the ML-DSA and Falcon adapters
when python-oqs/liboqs is available.
"""

# Trigger registration side-effects
from . import sig_adapters as _sig_adapters  # noqa: F401

__all__: list[str] = []
