from pathlib import Path

import click
from rich.console import Console

from ..helpers import open_session
from ..presenters.fields import FieldsPresenter

console = Console()


@click.command()
@click.argument("mapping_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a dataset_mapper.toml config file (default: ./dataset_mapper.toml)",
)
@click.option(
    "-v", "--verbose", count=True, help="Increase verbosity level (e.g., -v, -vv)"
)
def fields_command(mapping_file: Path, config_file: Path | None, verbose: int) -> None:
    """Show the fields of a mapping in their display order."""
    session = open_session(
        mapping_file, console=console, config_file=config_file, verbose=verbose
    )
    FieldsPresenter(console).present(session.mapping)
