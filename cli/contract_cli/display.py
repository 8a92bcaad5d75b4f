"""Rich output formatting for the llmc command line.

All functions write to a :class:`rich.console.Console` instance (typically
bound to *stderr*) so that the verdict document on *stdout* is never
polluted with human-readable decoration.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from contract_engine.models.verdict import Verdict, VerdictStatus

# ---------------------------------------------------------------------------
# Status colour mapping
# ---------------------------------------------------------------------------

_STATUS_COLOURS: dict[VerdictStatus, str] = {
    VerdictStatus.PASS: "green",
    VerdictStatus.FAIL: "red",
}


def _coloured_status(status: VerdictStatus) -> str:
    """Return a Rich markup string with the status colour-coded."""
    colour = _STATUS_COLOURS.get(status, "white")
    label = status.value.upper()
    return f"[{colour}]{label}[/{colour}]"


# ---------------------------------------------------------------------------
# Verdict
# ---------------------------------------------------------------------------


def display_verdict(
    console: Console,
    verdict: Verdict,
    *,
    contract_path: Path,
    output_path: Path,
    elapsed_ms: int,
) -> None:
    """Render a verdict summary and its violation table.

    Parameters
    ----------
    console:
        Rich console to write to (typically stderr).
    verdict:
        The verdict to display.
    contract_path, output_path:
        The inputs that produced the verdict, shown in the header.
    elapsed_ms:
        Wall-clock verification time.
    """
    header_lines = [
        f"[bold]Contract:[/bold]   {escape(str(contract_path))}",
        f"[bold]Output:[/bold]     {escape(str(output_path))}",
        f"[bold]Status:[/bold]     {_coloured_status(verdict.status)}",
        f"[bold]Violations:[/bold] {len(verdict.violations)}",
    ]
    console.print(
        Panel(
            "\n".join(header_lines),
            title=f"Contract Verdict ({elapsed_ms}ms)",
            border_style="green" if verdict.passed else "red",
        )
    )

    if not verdict.violations:
        console.print("  [green]✓ All rules satisfied.[/green]")
        return

    table = Table(
        title="Violations",
        show_lines=False,
        pad_edge=True,
        expand=False,
    )
    table.add_column("#", style="dim", width=4, justify="right")
    table.add_column("Rule", style="bold")
    table.add_column("Field")
    table.add_column("Row", justify="right")
    table.add_column("Message")

    for idx, violation in enumerate(verdict.violations, start=1):
        table.add_row(
            str(idx),
            escape(violation.rule or violation.rule_name),
            escape(violation.field or "-"),
            "-" if violation.row_index is None else str(violation.row_index),
            escape(violation.detail),
        )

    console.print(table)
