from __future__ import annotations
import logging
import os
from typing import Optional, Sequence

log = logging.getLogger(__name__)


def try_import_oqs():
    try:
        import oqs  # type: ignore
        return oqs
    except (Exception, SystemExit) as exc:
        # liboqs-python exits instead of raising when the shared library is missing
        log.warning("liboqs-python unavailable, post-quantum adapters disabled: %s", exc)
        return None


def pick_sig_algorithm(oqs_mod, env_var: str, candidates: Sequence[str]) -> Optional[str]:
    """
    Choose a SIG mechanism by attempting instantiation, since enabled
    mechanism lists differ between liboqs builds. Honors env override first.
    """
    order: list[str] = []
    env_val = os.getenv(env_var)
    if env_val:
        order.append(env_val)
    order += [c for c in candidates if c != env_val]
    for name in order:
        try:
            with oqs_mod.Signature(name):
                return name
        except Exception:
            continue
    return None
