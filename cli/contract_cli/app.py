"""llmc CLI application -- Typer-based contract verification gate.

Verifies a generated JSON document against a contract file.  The verdict
document always goes to *stdout* as JSON, even on error paths, so that
pipelines can consume it; the human-readable summary goes to *stderr* via
Rich.  Exit codes:

* ``0`` -- the output satisfies the contract;
* ``1`` -- the output violates one or more rules;
* ``2`` -- the contract is invalid (malformed JSON, schema or regex);
* ``3`` -- any other failure (unreadable files, malformed output, ...).
"""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console

from contract_cli.display import display_verdict
from contract_cli.logging_setup import configure_logging
from contract_engine.config import Settings, load_settings
from contract_engine.errors import ContractError, RunInputError
from contract_engine.loader import run
from contract_engine.models.verdict import Verdict, failure_verdict

logger = logging.getLogger(__name__)

EXIT_PASS = 0
EXIT_CONTRACT_FAILED = 1
EXIT_INVALID_CONTRACT = 2
EXIT_RUNTIME_IO = 3

# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="llmc",
    help="Verify LLM outputs against a JSON contract.",
    add_completion=False,
)
console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _emit_metrics(metrics_file: Path | None, event: str, data: dict[str, Any]) -> None:
    """Append a timestamped metrics event to the metrics file, if configured.

    Failures are logged but never propagate; metrics emission must never
    change the verdict or the exit code.
    """
    if metrics_file is None:
        return
    record = {
        "event": event,
        "timestamp": datetime.now(UTC).isoformat(),
        "data": data,
    }
    try:
        with metrics_file.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(record, sort_keys=True, default=str) + "\n")
    except OSError as exc:
        logger.warning("Could not write metrics to %s: %s", metrics_file, exc)


def _evaluate(contract_path: Path, output_path: Path) -> tuple[Verdict, int]:
    """Run verification and map every outcome to a verdict and exit code."""
    try:
        verdict = run(contract_path, output_path)
    except ContractError as exc:
        logger.warning("Contract rejected: %s", exc)
        return failure_verdict("InvalidContract", str(exc)), EXIT_INVALID_CONTRACT
    except RunInputError as exc:
        logger.warning("Verification input rejected: %s", exc)
        return failure_verdict("Runtime", str(exc)), EXIT_RUNTIME_IO
    except Exception as exc:
        logger.exception("Unexpected error during verification")
        return failure_verdict("Runtime", f"Unexpected error: {exc}"), EXIT_RUNTIME_IO

    exit_code = EXIT_PASS if verdict.passed else EXIT_CONTRACT_FAILED
    return verdict, exit_code


def render_verdict(verdict: Verdict, exit_code: int, *, indent: int = 2) -> tuple[str, int]:
    """Serialize the public verdict document.

    When the verdict cannot be serialized or encoded as UTF-8, a minimal
    hand-built failure document is returned instead and the exit code is
    forced to 3.
    """
    try:
        serialized = json.dumps(
            verdict.to_public(),
            indent=indent,
            sort_keys=True,
            ensure_ascii=False,
            allow_nan=False,
        )
        serialized.encode("utf-8")
    except (TypeError, ValueError) as exc:
        logger.error("Failed to serialize verdict: %s", exc)
        fallback = {
            "status": "fail",
            "violations": [
                {
                    "rule": "runtime",
                    "field": "",
                    "message": f"Failed to serialize verdict: {exc}",
                }
            ],
        }
        return json.dumps(fallback, indent=indent, sort_keys=True), EXIT_RUNTIME_IO
    return serialized, exit_code


def _load_settings() -> Settings | None:
    try:
        return load_settings()
    except ValidationError as exc:
        console.print(f"[red]Invalid LLMC_* environment settings: {exc}[/red]")
        return None


# ---------------------------------------------------------------------------
# Verify command
# ---------------------------------------------------------------------------


@app.command(name="verify")
def verify_command(
    contract: Path = typer.Option(
        ...,
        "--contract",
        "-c",
        help="Path to the contract JSON file.",
    ),
    output: Path = typer.Option(
        ...,
        "--output",
        "-o",
        help="Path to the generated output JSON file to verify.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Do not print the human-readable summary on stderr.",
    ),
    metrics_file: Path | None = typer.Option(
        None,
        "--metrics-file",
        help="Append a metrics event to this file (JSONL).",
    ),
    indent: int | None = typer.Option(
        None,
        "--indent",
        min=0,
        help="Indentation of the verdict JSON (default from LLMC_VERDICT_INDENT, else 2).",
    ),
) -> None:
    """Verify an output document against a contract and print the verdict.

    Examples::

        llmc --contract contract.json --output output.json
        llmc -c contract.json -o output.json --quiet --indent 0
    """
    settings = _load_settings()
    if settings is None:
        verdict = failure_verdict("Runtime", "Invalid LLMC_* environment settings.")
        serialized, exit_code = render_verdict(verdict, EXIT_RUNTIME_IO)
        sys.stdout.write(serialized + "\n")
        raise typer.Exit(code=exit_code)

    configure_logging(settings.effective_log_level, structured=settings.structured_logging)
    metrics_path = metrics_file if metrics_file is not None else settings.metrics_file
    indent_width = indent if indent is not None else settings.verdict_indent

    start_time = time.monotonic()
    verdict, exit_code = _evaluate(contract, output)
    elapsed_ms = int((time.monotonic() - start_time) * 1000)

    serialized, exit_code = render_verdict(verdict, exit_code, indent=indent_width)

    _emit_metrics(
        metrics_path,
        "verify_complete" if exit_code in (EXIT_PASS, EXIT_CONTRACT_FAILED) else "verify_error",
        {
            "contract": str(contract),
            "output": str(output),
            "status": verdict.status.value,
            "violations": len(verdict.violations),
            "exit_code": exit_code,
            "elapsed_ms": elapsed_ms,
        },
    )

    if not quiet:
        display_verdict(
            console,
            verdict,
            contract_path=contract,
            output_path=output,
            elapsed_ms=elapsed_ms,
        )

    sys.stdout.write(serialized + "\n")
    raise typer.Exit(code=exit_code)
