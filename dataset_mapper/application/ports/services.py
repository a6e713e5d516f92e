from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ...domain.entities.dataset import DatasetValidationReport
    from ...domain.entities.mapping import Mapping
    from ...domain.entities.values import Row
    from ..models import ExportArtifact, ExportRequest


@runtime_checkable
class LoggerPort(Protocol):
    pass

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def log_mapping_loaded(self, mapping: Mapping) -> None: ...

    def log_dataset_changed(
        self, dataset_id: str, action: str, row_count: int
    ) -> None: ...

    def log_validation_summary(
        self, dataset_name: str, report: DatasetValidationReport
    ) -> None: ...

    def log_export(self, artifact: ExportArtifact) -> None: ...

    def log_final_stats(self) -> None: ...


@runtime_checkable
class RowsWriterPort(Protocol):
    pass

    def render(self, mapping: Mapping, rows: list[Row]) -> str: ...


@runtime_checkable
class DatasetExportPort(Protocol):
    pass

    def export(self, request: ExportRequest) -> ExportArtifact: ...


@runtime_checkable
class ArtifactSinkPort(Protocol):
    """Delivers a generated artifact (file write, upload, download)."""

    def deliver(self, artifact: ExportArtifact) -> str | None: ...
