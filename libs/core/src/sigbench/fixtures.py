from __future__ import annotations
"""Static (signature, public key) fixtures keyed by algorithm and payload size.

Fixtures are generated once with `generate_fixtures` (or `sigbench
make-fixtures`) and stored as JSON; benchmark runs only ever read them, so
every run of a payload class verifies identical inputs. The package ships
RSA-4096 and ECDSA P-384 fixtures in `data/fixtures.json`; post-quantum
entries missing from a file are signed once before timing starts.
"""

import json
import logging
import pathlib
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Tuple

from .codec import encode
from .errors import FixtureError, FixtureNotFoundError
from .interfaces import AlgorithmIdentity, FixtureSigner
from .payloads import PayloadSize, PAYLOAD_SIZES, payload_bytes
from .registry import registry

log = logging.getLogger(__name__)

FIXTURE_FORMAT_VERSION = 1
SHIPPED_FIXTURES = pathlib.Path(__file__).resolve().parent / "data" / "fixtures.json"


@dataclass(frozen=True)
class Fixture:
    algorithm: AlgorithmIdentity
    payload_size: PayloadSize
    signature: str  # base64
    public_key: str  # base64

    def to_dict(self) -> Dict[str, str]:
        return {
            "algorithm": self.algorithm.value,
            "payload_size": self.payload_size.value,
            "signature": self.signature,
            "public_key": self.public_key,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "Fixture":
        try:
            return cls(
                algorithm=AlgorithmIdentity(data["algorithm"]),
                payload_size=PayloadSize(data["payload_size"]),
                signature=str(data["signature"]),
                public_key=str(data["public_key"]),
            )
        except KeyError as exc:
            raise FixtureError(f"fixture entry missing field {exc}") from exc
        except TypeError as exc:
            raise FixtureError(f"fixture entry must be an object, got {type(data).__name__}") from exc
        except ValueError as exc:
            raise FixtureError(f"invalid fixture entry: {exc}") from exc


class FixtureSet:
    def __init__(self, fixtures: Iterable[Fixture] = ()) -> None:
        self._items: Dict[Tuple[AlgorithmIdentity, PayloadSize], Fixture] = {}
        for fx in fixtures:
            self.add(fx)

    def add(self, fixture: Fixture) -> None:
        self._items[(fixture.algorithm, fixture.payload_size)] = fixture

    def get(self, algorithm: AlgorithmIdentity | str, payload_size: PayloadSize | str) -> Fixture:
        key = (AlgorithmIdentity(algorithm), PayloadSize(payload_size))
        try:
            return self._items[key]
        except KeyError:
            raise FixtureNotFoundError(
                f"no fixture for {key[0].value} / {key[1].value} payload"
            ) from None

    def has(self, algorithm: AlgorithmIdentity | str, payload_size: PayloadSize | str) -> bool:
        return (AlgorithmIdentity(algorithm), PayloadSize(payload_size)) in self._items

    def __iter__(self) -> Iterator[Fixture]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def to_dict(self) -> Dict[str, object]:
        return {
            "version": FIXTURE_FORMAT_VERSION,
            "fixtures": [fx.to_dict() for fx in self],
        }


def load_fixtures(path: str | pathlib.Path) -> FixtureSet:
    path = pathlib.Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise FixtureError(
            f"fixture file {path} not found; create it with `sigbench make-fixtures`"
        ) from None
    except (OSError, json.JSONDecodeError) as exc:
        raise FixtureError(f"cannot read fixture file {path}: {exc}") from exc
    if not isinstance(data, dict) or not isinstance(data.get("fixtures"), list):
        raise FixtureError(f"{path}: expected an object with a 'fixtures' list")
    version = data.get("version", FIXTURE_FORMAT_VERSION)
    if version != FIXTURE_FORMAT_VERSION:
        raise FixtureError(f"{path}: unsupported fixture format version {version!r}")
    for entry in data["fixtures"]:
        if not isinstance(entry, dict):
            raise FixtureError(f"{path}: fixture entries must be objects, got {entry!r}")
    return FixtureSet(Fixture.from_dict(entry) for entry in data["fixtures"])


def save_fixtures(fixture_set: FixtureSet, path: str | pathlib.Path) -> pathlib.Path:
    path = pathlib.Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(fixture_set.to_dict(), f, indent=2)
    return path


def generate_fixtures(
    identities: Iterable[AlgorithmIdentity],
    sizes: Iterable[PayloadSize] = PAYLOAD_SIZES,
) -> FixtureSet:
    """Sign every payload class with a fresh key pair per (algorithm, size)."""
    out = FixtureSet()
    sizes = tuple(PayloadSize(s) for s in sizes)
    for identity in identities:
        adapter: FixtureSigner = registry.get(identity.value)()
        for size in sizes:
            log.info("Generating %s fixture for %s payload", identity.display_name, size.value)
            signature, public_key = adapter.create_fixture(payload_bytes(size))
            out.add(Fixture(identity, size, encode(signature), encode(public_key)))
    return out


def complete_fixtures(
    fixture_set: FixtureSet,
    identities: Iterable[AlgorithmIdentity],
    sizes: Iterable[PayloadSize] = PAYLOAD_SIZES,
) -> FixtureSet:
    """Sign any (algorithm, size) pair the set lacks; existing entries are kept as-is."""
    sizes = tuple(PayloadSize(s) for s in sizes)
    for identity in identities:
        absent = [size for size in sizes if not fixture_set.has(identity, size)]
        if not absent:
            continue
        log.warning(
            "No stored %s fixture for %s payload; signing one for this run",
            identity.display_name,
            "/".join(size.value for size in absent),
        )
        for fx in generate_fixtures([identity], absent):
            fixture_set.add(fx)
    return fixture_set
