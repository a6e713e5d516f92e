from __future__ import annotations

from typing import TYPE_CHECKING, override

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from ...application.models import ExportArtifact
    from ...domain.entities.dataset import DatasetValidationReport
    from ...domain.entities.mapping import Mapping


class NullLogger(LoggerPort):
    pass

    @override
    def info(self, message: str) -> None:
        return

    @override
    def success(self, message: str) -> None:
        return

    @override
    def warning(self, message: str) -> None:
        return

    @override
    def error(self, message: str) -> None:
        return

    @override
    def debug(self, message: str) -> None:
        return

    @override
    def verbose(self, message: str) -> None:
        return

    @override
    def log_mapping_loaded(self, mapping: Mapping) -> None:
        return None

    @override
    def log_dataset_changed(self, dataset_id: str, action: str, row_count: int) -> None:
        return None

    @override
    def log_validation_summary(
        self, dataset_name: str, report: DatasetValidationReport
    ) -> None:
        return None

    @override
    def log_export(self, artifact: ExportArtifact) -> None:
        return None

    @override
    def log_final_stats(self) -> None:
        return None
