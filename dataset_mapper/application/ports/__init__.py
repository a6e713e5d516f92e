"""Port interfaces for external dependencies.

Storage, mapping sources, writers, artifact delivery and logging are
protocols here so that adapters can be swapped in tests.
"""

from .repositories import (
    DatasetCascadePort,
    DatasetPersistencePort,
    MappingResolverPort,
    MappingSourcePort,
)
from .services import ArtifactSinkPort, DatasetExportPort, LoggerPort, RowsWriterPort

__all__ = [
    "ArtifactSinkPort",
    "DatasetCascadePort",
    "DatasetExportPort",
    "DatasetPersistencePort",
    "LoggerPort",
    "MappingResolverPort",
    "MappingSourcePort",
    "RowsWriterPort",
]
