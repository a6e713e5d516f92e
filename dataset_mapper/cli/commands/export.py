"""Export command - render rows as CSV, JSON or a validated JSON bundle."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from ...application.models import ExportFormat
from ...domain.exceptions import MapperError
from ...infrastructure.io.exceptions import MapperInfrastructureError
from ..helpers import open_session

console = Console()


@click.command()
@click.argument("mapping_file", type=click.Path(exists=True, path_type=Path))
@click.argument("rows_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--format",
    "export_format",
    type=click.Choice([fmt.value for fmt in ExportFormat]),
    default=ExportFormat.CSV.value,
    show_default=True,
    help="Export format: csv, json (array of rows) or bundle (rows with validation results)",
)
@click.option(
    "--output",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory the export is written to (default: export_dir from config)",
)
@click.option(
    "--name",
    "dataset_name",
    help="Dataset name, used for the file name (default: ROWS_FILE stem)",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a dataset_mapper.toml config file (default: ./dataset_mapper.toml)",
)
@click.option(
    "-v", "--verbose", count=True, help="Increase verbosity level (e.g., -v, -vv)"
)
def export_command(
    mapping_file: Path,
    rows_file: Path,
    export_format: str,
    output_dir: Path | None,
    dataset_name: str | None,
    config_file: Path | None,
    verbose: int,
) -> None:
    """Export ROWS_FILE in the field order of MAPPING_FILE.

    The file is named after the dataset (``<name>.csv`` or ``<name>.json``).

    Examples:

    \b
        dataset-mapper export mapping.json contacts.csv --format json
        dataset-mapper export mapping.json rows.json --format bundle --output out/
    """
    session = open_session(
        mapping_file,
        rows_file,
        console=console,
        config_file=config_file,
        verbose=verbose,
        dataset_name=dataset_name,
        output_dir=output_dir,
        write_exports=True,
    )
    assert session.dataset is not None
    store = session.container.create_dataset_store()
    try:
        artifact = store.export_dataset(session.dataset.id, ExportFormat(export_format))
    except (MapperError, MapperInfrastructureError) as exc:
        raise click.ClickException(str(exc)) from exc
    logger = session.container.create_logger()
    logger.success(
        f"Wrote {artifact.export_format.value.upper()} export to {artifact.location}"
    )
    logger.log_final_stats()
