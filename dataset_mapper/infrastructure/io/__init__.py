"""Infrastructure I/O layer.

Adapters for reading row files and for rendering and delivering dataset
exports (CSV, JSON, JSON bundle).
"""

from .artifact_sink import DirectoryArtifactSink, MemoryArtifactSink
from .csv_reader import CSVReader, CSVReadOptions
from .csv_writer import CSVWriter, render_csv
from .dataset_export import DatasetExportAdapter
from .exceptions import (
    ArtifactDeliveryError,
    DataParseError,
    DataSourceError,
    DataSourceNotFoundError,
    DataWriteError,
    ExportGenerationError,
)
from .json_writer import JSONBundleWriter, JSONWriter, render_json, render_json_bundle

__all__ = [
    "ArtifactDeliveryError",
    "CSVReader",
    "CSVReadOptions",
    "CSVWriter",
    "DataParseError",
    "DataSourceError",
    "DataSourceNotFoundError",
    "DataWriteError",
    "DatasetExportAdapter",
    "DirectoryArtifactSink",
    "ExportGenerationError",
    "JSONBundleWriter",
    "JSONWriter",
    "MemoryArtifactSink",
    "render_csv",
    "render_json",
    "render_json_bundle",
]
