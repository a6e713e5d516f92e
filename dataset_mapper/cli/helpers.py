"""Shared plumbing for CLI commands.

Each command loads a mapping file, optionally a rows file, and works
through a container-built catalog and dataset store.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

import click

from ..config import ConfigLoader
from ..domain.exceptions import MapperError
from ..infrastructure.container import DependencyContainer
from ..infrastructure.io.exceptions import DataSourceError
from ..infrastructure.repositories.mapping_file_repository import (
    load_mapping_file,
    load_rows_file,
)

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from ..domain.entities.dataset import MappingDataset
    from ..domain.entities.mapping import Mapping


@dataclass(frozen=True, slots=True)
class MapperSession:
    container: DependencyContainer
    mapping: Mapping
    dataset: MappingDataset | None = None


def open_session(
    mapping_file: Path,
    rows_file: Path | None = None,
    *,
    console: Console,
    config_file: Path | None = None,
    verbose: int = 0,
    dataset_name: str | None = None,
    output_dir: Path | None = None,
    write_exports: bool = False,
) -> MapperSession:
    """Load the mapping (and rows) and register them with a fresh container.

    Raises:
        click.ClickException: when a file is missing or malformed.
    """
    config = ConfigLoader.load(config_file=config_file)
    if output_dir is not None:
        config = replace(config, export_dir=output_dir)
    container = DependencyContainer(
        config=config,
        verbose=verbose,
        console=console,
        write_exports=write_exports,
    )
    try:
        mapping = load_mapping_file(
            mapping_file, default_entity_type=config.default_entity_type
        )
        container.create_mapping_catalog().register_mapping(mapping)
        if rows_file is None:
            return MapperSession(container=container, mapping=mapping)
        rows = load_rows_file(
            rows_file,
            mapping,
            csv_options=container.csv_read_options(),
            csv_reader=container.create_csv_reader(),
        )
        dataset = container.create_dataset_store().create_dataset(
            mapping.id, dataset_name or rows_file.stem, rows
        )
    except (MapperError, DataSourceError) as exc:
        raise click.ClickException(str(exc)) from exc
    return MapperSession(container=container, mapping=mapping, dataset=dataset)
