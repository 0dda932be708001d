from __future__ import annotations
import json
import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigError
from .fixtures import SHIPPED_FIXTURES
from .harness import DEFAULT_ITERATIONS
from .interfaces import DEFAULT_POLICY, POLICIES

GENERATED_FIXTURES = "fixtures.json"
DEFAULT_BUCKET = "pq-experiment-results"
CREDENTIALS_ENV = "SERVICE_ACCOUNT_JSON"


@dataclass(frozen=True)
class BenchConfig:
    iterations: int = DEFAULT_ITERATIONS
    fixtures_path: Optional[str] = None
    policy: str = DEFAULT_POLICY
    bucket: str = DEFAULT_BUCKET
    credentials: Optional[Dict[str, Any]] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BenchConfig":
        env = os.environ if environ is None else environ
        return cls(
            iterations=_int_env(env, "SIGBENCH_ITERATIONS", DEFAULT_ITERATIONS),
            fixtures_path=env.get("SIGBENCH_FIXTURES") or None,
            policy=_policy(env.get("SIGBENCH_POLICY") or DEFAULT_POLICY),
            bucket=env.get("SIGBENCH_BUCKET") or DEFAULT_BUCKET,
            credentials=_credentials(env.get(CREDENTIALS_ENV)),
            log_level=(env.get("SIGBENCH_LOG_LEVEL") or "INFO").upper(),
        )

    def override(self, **changes: Any) -> "BenchConfig":
        """Apply CLI overrides, ignoring options the user left unset."""
        changes = {k: v for k, v in changes.items() if v is not None}
        if "iterations" in changes and int(changes["iterations"]) < 1:
            raise ConfigError("iterations must be >= 1")
        if "policy" in changes:
            changes["policy"] = _policy(changes["policy"])
        return replace(self, **changes)

    @property
    def fixtures_source(self) -> str:
        """Fixture file a run reads; the packaged file unless one was configured."""
        return self.fixtures_path or str(SHIPPED_FIXTURES)

    @property
    def fixtures_target(self) -> str:
        """Where `make-fixtures` writes; never inside the installed package."""
        return self.fixtures_path or GENERATED_FIXTURES

    @property
    def upload_enabled(self) -> bool:
        return self.credentials is not None


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer") from exc
    if value < 1:
        raise ConfigError(f"{name} must be >= 1")
    return value


def _policy(value: str) -> str:
    if value not in POLICIES:
        raise ConfigError(f"unknown policy {value!r}; expected one of {sorted(POLICIES)}")
    return value


def _credentials(blob: str | None) -> Optional[Dict[str, Any]]:
    if not blob:
        return None
    try:
        info = json.loads(blob)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{CREDENTIALS_ENV} is not valid JSON: {exc}") from exc
    if not isinstance(info, dict):
        raise ConfigError(f"{CREDENTIALS_ENV} must be a JSON object")
    return info
