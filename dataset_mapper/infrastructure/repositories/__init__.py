"""Repository adapters for mappings, datasets and mapping files."""

from .dataset_repository import InMemoryDatasetRepository, JsonFileDatasetRepository
from .json_document import JSONDocumentLoadError, JSONDocumentSaveError
from .mapping_file_repository import (
    MappingFileLoadError,
    RowsFileLoadError,
    load_mapping_file,
    load_rows_file,
)
from .mapping_source_repository import InMemoryMappingSource, JsonFileMappingSource

__all__ = [
    "InMemoryDatasetRepository",
    "InMemoryMappingSource",
    "JSONDocumentLoadError",
    "JSONDocumentSaveError",
    "JsonFileDatasetRepository",
    "JsonFileMappingSource",
    "MappingFileLoadError",
    "RowsFileLoadError",
    "load_mapping_file",
    "load_rows_file",
]
