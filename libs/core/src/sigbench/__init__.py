from .interfaces import (
    AlgorithmIdentity,
    SignatureVerifier,
    FixtureSigner,
    VerificationInput,
    VerificationOutcome,
    check,
    identities_for_policy,
)
from .registry import registry, load_adapters
from .metrics import BenchmarkRun, PerformanceReport, SystemInfo
from .payloads import PayloadSize

__all__ = [
    "AlgorithmIdentity",
    "SignatureVerifier",
    "FixtureSigner",
    "VerificationInput",
    "VerificationOutcome",
    "check",
    "identities_for_policy",
    "registry",
    "load_adapters",
    "BenchmarkRun",
    "PerformanceReport",
    "SystemInfo",
    "PayloadSize",
]
