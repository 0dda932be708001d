from __future__ import annotations
"""Batch-timed verification harness.

Each (algorithm, payload size) pair is measured as one batch: the timer wraps
all iterations, so timer overhead is paid once per batch instead of per call.
Pairs run strictly one after another on the calling thread.
"""

import logging
import time
from typing import Callable, Iterable, List, Optional, Sequence

from .errors import VerificationMismatch
from .fixtures import FixtureSet
from .interfaces import AlgorithmIdentity, SignatureVerifier
from .metrics import BenchmarkRun
from .payloads import PayloadSize, PAYLOAD_SIZES, payload_text
from .registry import registry

log = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 1000

ProgressCallback = Callable[[int, int, BenchmarkRun], None]


def get_verifier(algorithm: AlgorithmIdentity | str) -> SignatureVerifier:
    return registry.get(AlgorithmIdentity(algorithm).value)()


def run(
    algorithm: AlgorithmIdentity | str,
    fixture_signature: str,
    fixture_key: str,
    payload: PayloadSize | str,
    iteration_count: int,
    *,
    verifier: Optional[SignatureVerifier] = None,
) -> BenchmarkRun:
    """Verify the same fixture `iteration_count` times and time the batch.

    Every call must return True; the first False raises `VerificationMismatch`.
    Errors raised by the adapter propagate unchanged.
    """
    if iteration_count < 1:
        raise ValueError("iteration_count must be >= 1")
    identity = AlgorithmIdentity(algorithm)
    size = PayloadSize(payload)
    if verifier is None:
        verifier = get_verifier(identity)
    message = payload_text(size)

    t0 = time.perf_counter()
    for i in range(iteration_count):
        if not verifier.verify(fixture_signature, fixture_key, message):
            raise VerificationMismatch(identity.display_name, size.value, i)
    elapsed = time.perf_counter() - t0

    return BenchmarkRun(
        algorithm=identity.display_name,
        payload_size=size.value,
        iterations=iteration_count,
        time_ms=elapsed * 1000.0,
    )


def run_suite(
    fixtures: FixtureSet,
    identities: Sequence[AlgorithmIdentity],
    iterations: int = DEFAULT_ITERATIONS,
    *,
    sizes: Iterable[PayloadSize] = PAYLOAD_SIZES,
    progress_cb: Optional[ProgressCallback] = None,
) -> List[BenchmarkRun]:
    """Run every identity for each size class in turn (all small, then all medium)."""
    sizes = tuple(PayloadSize(s) for s in sizes)
    # Resolve adapters and fixtures up front so a missing one fails before any timing.
    verifiers = {identity: get_verifier(identity) for identity in identities}
    plan = [(size, identity, fixtures.get(identity, size)) for size in sizes for identity in identities]

    results: List[BenchmarkRun] = []
    for index, (size, identity, fx) in enumerate(plan, start=1):
        log.info("Testing %s Payload %s:", size.value.capitalize(), identity.display_name)
        result = run(identity, fx.signature, fx.public_key, size, iterations, verifier=verifiers[identity])
        log.info("Completed in %.3f ms (%.4f ms per verification)", result.time_ms, result.mean_ms)
        results.append(result)
        if progress_cb is not None:
            try:
                progress_cb(index, len(plan), result)
            except Exception:
                # Never let progress reporting break measurements
                log.exception("progress callback failed")
    return results
