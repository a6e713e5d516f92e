"""Validate command - check rows against a mapping's field definitions."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from ..helpers import open_session
from ..presenters.validation import ValidationPresenter

console = Console()


@click.command()
@click.argument("mapping_file", type=click.Path(exists=True, path_type=Path))
@click.argument("rows_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a dataset_mapper.toml config file (default: ./dataset_mapper.toml)",
)
@click.option(
    "-v", "--verbose", count=True, help="Increase verbosity level (e.g., -v, -vv)"
)
def validate_command(
    mapping_file: Path,
    rows_file: Path,
    config_file: Path | None,
    verbose: int,
) -> None:
    """Validate ROWS_FILE against the fields of MAPPING_FILE.

    ROWS_FILE is either a CSV file whose headers are field names or labels,
    or a JSON file holding a list of row objects (or ``{"rows": [...]}``).
    The command exits with status 1 when any row is invalid.

    Examples:

    \b
        dataset-mapper validate mapping.json contacts.csv
        dataset-mapper validate mapping.json rows.json -v
    """
    session = open_session(
        mapping_file,
        rows_file,
        console=console,
        config_file=config_file,
        verbose=verbose,
    )
    assert session.dataset is not None
    store = session.container.create_dataset_store()
    report = store.validate_dataset(session.dataset.id)
    ValidationPresenter(console).present(session.dataset, report)
    session.container.create_logger().log_final_stats()
    if not report.is_valid:
        raise click.ClickException(
            f"{len(report.invalid_rows)} of {report.row_count} rows failed validation"
        )
