"""Dataset mapper package.

Define reusable field mappings, collect rows of data against them and
export those rows.

Features:
- Mapping schema model with ordered, typed field definitions
- Row validation (required, email, number, URL and rule descriptors)
- Dataset store with change timestamps and cascading deletes
- CSV, JSON and JSON bundle export
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("dataset-mapper")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

# Core exports
from dataset_mapper.application.dataset_store import DatasetStore
from dataset_mapper.application.mapping_catalog import MappingCatalog
from dataset_mapper.domain.entities import (
    FieldDefinition,
    Mapping,
    MappingDataset,
    ValidationError,
)
from dataset_mapper.domain.services.validation import validate_row, validate_rows
from dataset_mapper.infrastructure.io.csv_writer import render_csv
from dataset_mapper.infrastructure.io.json_writer import render_json

__all__ = [
    "__version__",
    # Schema
    "FieldDefinition",
    "Mapping",
    # Datasets
    "DatasetStore",
    "MappingCatalog",
    "MappingDataset",
    # Validation
    "ValidationError",
    "validate_row",
    "validate_rows",
    # Export
    "render_csv",
    "render_json",
]
