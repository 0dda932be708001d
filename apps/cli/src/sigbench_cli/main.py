from __future__ import annotations
import logging
from typing import NoReturn, Optional

import typer

from sigbench import registry, load_adapters, check
from sigbench.config import BenchConfig
from sigbench.errors import SigbenchError, UploadError
from sigbench.fixtures import complete_fixtures, generate_fixtures, load_fixtures, save_fixtures
from sigbench.harness import get_verifier, run_suite
from sigbench.interfaces import identities_for_policy
from sigbench.report import assemble, export_report, report_filename, to_json
from sigbench.sink import build_sink
from sigbench.sysinfo import collect_system_info

app = typer.Typer(add_completion=False, help="Signature verification latency benchmark")


def _load_config() -> BenchConfig:
    try:
        config = BenchConfig.from_env()
    except SigbenchError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(code=2)
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    load_adapters()
    return config


def _fail(exc: Exception) -> NoReturn:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command("list-algos")
def list_algos():
    """List registered verification adapters."""
    _load_config()
    for name, cls in registry.list().items():
        identity = getattr(cls, "identity", None)
        label = f" ({identity.display_name})" if identity is not None else ""
        typer.echo(f"- {name}{label}")


@app.command()
def run(
    iterations: Optional[int] = typer.Option(None, help="Verifications per (algorithm, payload) pair [env: SIGBENCH_ITERATIONS]"),
    fixtures: Optional[str] = typer.Option(None, help="Fixture file, defaults to the packaged fixtures [env: SIGBENCH_FIXTURES]"),
    policy: Optional[str] = typer.Option(None, help="Message pre-processing policy for PQ schemes: prehash|raw"),
    export: str = typer.Option("", help="Also write the report JSON to this path"),
    print_json: bool = True,
    upload: bool = typer.Option(True, help="Upload the report when credentials are configured"),
):
    """
    Run the verification benchmark: small payloads for every algorithm, then medium payloads.
    """
    config = _load_config()
    try:
        config = config.override(iterations=iterations, fixtures_path=fixtures, policy=policy)
        identities = identities_for_policy(config.policy)
        fixture_set = complete_fixtures(load_fixtures(config.fixtures_source), identities)
        typer.echo(f"Running signature verification with {config.iterations} iterations:\n")
        runs = run_suite(fixture_set, identities, config.iterations)
    except (SigbenchError, KeyError) as exc:
        _fail(exc)

    report = assemble(collect_system_info(), runs)
    payload = to_json(report)
    if print_json:
        typer.echo("--PERFORMANCE RESULTS--\n")
        typer.echo(payload)
    if export:
        path = export_report(report, export)
        typer.echo(f"Report written to {path}")

    sink = build_sink(config) if upload else None
    if sink is None:
        typer.echo("\nSkipping upload (no credentials available)")
        return
    filename = report_filename()
    try:
        location = sink.upload(filename, payload.encode("utf-8"))
    except UploadError as exc:
        # The printed report stays the record of the run
        typer.echo(f"\nUpload failed: {exc}", err=True)
        return
    typer.echo(f"\nResults uploaded: {location}")


@app.command()
def verify(
    algorithm: str = typer.Argument(..., help="Registered adapter name, e.g. falcon-512"),
    signature: str = typer.Argument(..., help="Base64 signature"),
    public_key: str = typer.Argument(..., help="Base64 public key (raw bytes or PEM)"),
    message: str = typer.Argument(..., help="Base64 message"),
):
    """Verify one base64 (signature, key, message) triple."""
    _load_config()
    try:
        verifier = get_verifier(algorithm)
        outcome = check(verifier, signature, public_key, message)
    except (SigbenchError, KeyError, ValueError) as exc:
        _fail(exc)
    if outcome.cause is not None:
        typer.echo(f"valid={outcome.valid} ({type(outcome.cause).__name__}: {outcome.cause})")
    else:
        typer.echo(f"valid={outcome.valid}")
    if not outcome.valid:
        raise typer.Exit(code=1)


@app.command("make-fixtures")
def make_fixtures(
    out: Optional[str] = typer.Option(None, help="Output fixture file, defaults to ./fixtures.json [env: SIGBENCH_FIXTURES]"),
    policy: Optional[str] = typer.Option(None, help="prehash|raw"),
):
    """Generate key pairs and sign the static payloads for every algorithm of a policy."""
    config = _load_config()
    try:
        config = config.override(fixtures_path=out, policy=policy)
        fixture_set = generate_fixtures(identities_for_policy(config.policy))
        path = save_fixtures(fixture_set, config.fixtures_target)
    except (SigbenchError, KeyError) as exc:
        _fail(exc)
    typer.echo(f"Wrote {len(fixture_set)} fixtures to {path}")


def app_main():
    app()


if __name__ == "__main__":
    app_main()
