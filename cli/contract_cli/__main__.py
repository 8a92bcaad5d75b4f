"""Entry point for `python -m contract_cli` and the `llmc` console script."""

from __future__ import annotations

from contract_cli.app import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
