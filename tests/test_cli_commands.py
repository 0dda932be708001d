from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from sigbench import AlgorithmIdentity, PayloadSize, SystemInfo, registry
from sigbench.codec import encode
from sigbench.errors import UploadError
from sigbench.fixtures import Fixture, FixtureSet, load_fixtures, save_fixtures
from sigbench.interfaces import identities_for_policy
from sigbench_cli import main as cli_main

from conftest import DUMMY_KEY, GOOD_SIGNATURE, DummyVerifier

SYSTEM = SystemInfo(os="TestOS 1.0", total_memory=32, cpu_brand="Test CPU", cpu_cores=4)


class RecordingSink:
    def __init__(self, error: Exception | None = None) -> None:
        self.uploads: list[tuple[str, bytes]] = []
        self._error = error

    def upload(self, filename: str, body: bytes) -> str:
        if self._error is not None:
            raise self._error
        self.uploads.append((filename, body))
        return f"gs://test/{filename}"


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def fixed_system_info(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_main, "collect_system_info", lambda: SYSTEM)


@pytest.fixture
def fixture_file(tmp_path):
    identities = identities_for_policy("prehash")
    fixtures = FixtureSet(
        Fixture(identity, size, GOOD_SIGNATURE, DUMMY_KEY)
        for identity in identities
        for size in PayloadSize
    )
    return save_fixtures(fixtures, tmp_path / "fixtures.json")


def test_list_algos(dummy_registry, cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_main.app, ["list-algos"])
    assert result.exit_code == 0
    for identity in AlgorithmIdentity:
        assert f"- {identity.value}" in result.output


def test_run_exports_ordered_report(dummy_registry, cli_runner: CliRunner, fixture_file, tmp_path) -> None:
    export = tmp_path / "out" / "report.json"
    result = cli_runner.invoke(
        cli_main.app,
        ["run", "--iterations", "3", "--fixtures", str(fixture_file), "--export", str(export), "--no-print-json"],
    )
    assert result.exit_code == 0, result.output
    assert "Skipping upload (no credentials available)" in result.output
    data = json.loads(export.read_text(encoding="utf-8"))
    assert data["system_info"] == {"os": "TestOS 1.0", "total_memory": 32, "cpu_brand": "Test CPU", "cpu_cores": 4}
    assert [(r["algorithm"], r["payload_size"]) for r in data["test_results"]] == [
        (name, size)
        for size in ("small", "medium")
        for name in ("ML-DSA-65", "Falcon-512", "RSA-4096", "ECDSA-384")
    ]
    assert all(r["iterations"] == 3 for r in data["test_results"])


def test_run_prints_report(dummy_registry, cli_runner: CliRunner, fixture_file) -> None:
    result = cli_runner.invoke(cli_main.app, ["run", "--iterations", "1", "--fixtures", str(fixture_file)])
    assert result.exit_code == 0, result.output
    assert "--PERFORMANCE RESULTS--" in result.output
    assert '"test_results"' in result.output


def test_run_reads_iterations_from_environment(
    dummy_registry, cli_runner: CliRunner, fixture_file, tmp_path, monkeypatch
) -> None:
    monkeypatch.setenv("SIGBENCH_ITERATIONS", "2")
    monkeypatch.setenv("SIGBENCH_FIXTURES", str(fixture_file))
    export = tmp_path / "report.json"
    result = cli_runner.invoke(cli_main.app, ["run", "--export", str(export), "--no-print-json"])
    assert result.exit_code == 0, result.output
    data = json.loads(export.read_text(encoding="utf-8"))
    assert {r["iterations"] for r in data["test_results"]} == {2}


def test_run_with_broken_fixture_fails_without_report(dummy_registry, cli_runner: CliRunner, tmp_path) -> None:
    fixtures = _write_fixtures_with_stale_entry(tmp_path)
    result = cli_runner.invoke(cli_main.app, ["run", "--iterations", "2", "--fixtures", str(fixtures)])
    assert result.exit_code == 1
    assert "--PERFORMANCE RESULTS--" not in result.output
    assert "RSA-4096 verification failed" in result.output


def _write_fixtures_with_stale_entry(tmp_path):
    identities = identities_for_policy("prehash")
    fixtures = FixtureSet(
        Fixture(identity, size, GOOD_SIGNATURE, DUMMY_KEY)
        for identity in identities
        for size in PayloadSize
    )
    fixtures.add(Fixture(AlgorithmIdentity.RSA_4096_PSS, PayloadSize.SMALL, encode(b"stale"), DUMMY_KEY))
    return save_fixtures(fixtures, tmp_path / "fixtures.json")


def test_run_without_fixture_file_fails(dummy_registry, cli_runner: CliRunner, tmp_path) -> None:
    result = cli_runner.invoke(cli_main.app, ["run", "--fixtures", str(tmp_path / "missing.json")])
    assert result.exit_code == 1
    assert "make-fixtures" in result.output


def test_run_uploads_when_sink_configured(dummy_registry, cli_runner: CliRunner, fixture_file, monkeypatch) -> None:
    sink = RecordingSink()
    monkeypatch.setattr(cli_main, "build_sink", lambda config: sink)
    result = cli_runner.invoke(cli_main.app, ["run", "--iterations", "1", "--fixtures", str(fixture_file)])
    assert result.exit_code == 0, result.output
    assert len(sink.uploads) == 1
    filename, body = sink.uploads[0]
    assert filename.startswith("results_") and filename.endswith(".json")
    assert len(json.loads(body.decode("utf-8"))["test_results"]) == 8
    assert f"Results uploaded: gs://test/{filename}" in result.output


def test_upload_failure_keeps_exit_code_zero(dummy_registry, cli_runner: CliRunner, fixture_file, monkeypatch) -> None:
    monkeypatch.setattr(cli_main, "build_sink", lambda config: RecordingSink(UploadError("bucket gone")))
    result = cli_runner.invoke(cli_main.app, ["run", "--iterations", "1", "--fixtures", str(fixture_file)])
    assert result.exit_code == 0
    assert "--PERFORMANCE RESULTS--" in result.output
    assert "Upload failed: bucket gone" in result.output


def test_no_upload_flag_skips_sink(dummy_registry, cli_runner: CliRunner, fixture_file, monkeypatch) -> None:
    sink = RecordingSink()
    monkeypatch.setattr(cli_main, "build_sink", lambda config: sink)
    result = cli_runner.invoke(
        cli_main.app, ["run", "--iterations", "1", "--fixtures", str(fixture_file), "--no-upload"]
    )
    assert result.exit_code == 0
    assert sink.uploads == []


def test_verify_command(dummy_registry, cli_runner: CliRunner) -> None:
    ok = cli_runner.invoke(cli_main.app, ["verify", "falcon-512", GOOD_SIGNATURE, DUMMY_KEY, "aGVsbG8="])
    assert ok.exit_code == 0
    assert "valid=True" in ok.output

    bad = cli_runner.invoke(cli_main.app, ["verify", "falcon-512", encode(b"nope"), DUMMY_KEY, "aGVsbG8="])
    assert bad.exit_code == 1
    assert "valid=False" in bad.output


def test_verify_reports_parse_cause(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_main.app, ["verify", "ecdsa-p384", "c2ln", encode(b"not a pem key"), "aGVsbG8="])
    assert result.exit_code == 1
    assert "valid=False (KeyParseError" in result.output


def test_verify_unknown_algorithm(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_main.app, ["verify", "dsa-1024", "c2ln", "cGs=", "aGVsbG8="])
    assert result.exit_code == 1


def test_make_fixtures(dummy_registry, cli_runner: CliRunner, tmp_path) -> None:
    out = tmp_path / "generated.json"
    result = cli_runner.invoke(cli_main.app, ["make-fixtures", "--out", str(out), "--policy", "raw"])
    assert result.exit_code == 0, result.output
    fixtures = load_fixtures(out)
    assert len(fixtures) == 8
    assert fixtures.get("falcon-512-raw", "medium").signature == GOOD_SIGNATURE


def test_invalid_environment_is_a_configuration_error(cli_runner: CliRunner, monkeypatch) -> None:
    monkeypatch.setenv("SIGBENCH_ITERATIONS", "lots")
    result = cli_runner.invoke(cli_main.app, ["run"])
    assert result.exit_code == 2
    assert "Configuration error" in result.output


@pytest.fixture
def dummy_post_quantum(monkeypatch: pytest.MonkeyPatch):
    """Real classical adapters, dummy stand-ins for the liboqs ones."""
    for identity in (
        AlgorithmIdentity.ML_DSA_65,
        AlgorithmIdentity.ML_DSA_65_RAW,
        AlgorithmIdentity.FALCON_512,
        AlgorithmIdentity.FALCON_512_RAW,
    ):
        monkeypatch.setitem(registry._items, identity.value, DummyVerifier)  # type: ignore[attr-defined]


def test_run_uses_packaged_fixtures_by_default(dummy_post_quantum, cli_runner: CliRunner, tmp_path) -> None:
    export = tmp_path / "report.json"
    result = cli_runner.invoke(cli_main.app, ["run", "--iterations", "1", "--export", str(export), "--no-print-json"])
    assert result.exit_code == 0, result.output
    data = json.loads(export.read_text(encoding="utf-8"))
    assert [(r["algorithm"], r["payload_size"]) for r in data["test_results"]] == [
        (name, size)
        for size in ("small", "medium")
        for name in ("ML-DSA-65", "Falcon-512", "RSA-4096", "ECDSA-384")
    ]
