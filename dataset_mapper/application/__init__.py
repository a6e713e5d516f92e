"""Application layer for the dataset mapper.

This layer owns dataset state and mapping resolution. It defines ports
(interfaces) for persistence, export and logging.
"""

from .models import ExportArtifact, ExportFormat, ExportRequest, export_filename

# DatasetStore and MappingCatalog are imported from their modules directly:
#   from dataset_mapper.application.dataset_store import DatasetStore

__all__ = [
    "ExportArtifact",
    "ExportFormat",
    "ExportRequest",
    "export_filename",
]
