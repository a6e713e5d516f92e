from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..constants import IdPrefixes
from ..domain.entities.dataset import MappingDataset
from ..domain.entities.mapping import advance_timestamp, utc_now
from ..domain.exceptions import DatasetNotFoundError
from ..domain.services.normalization import normalize_rows
from ..domain.services.validation import ValidationEngine
from .mapping_catalog import new_id
from .models import ExportFormat, ExportRequest

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..domain.entities.dataset import DatasetValidationReport
    from .models import ExportArtifact
    from .ports.repositories import DatasetPersistencePort, MappingResolverPort
    from .ports.services import ArtifactSinkPort, DatasetExportPort, LoggerPort

_UPDATABLE = frozenset({"name", "rows"})


class DatasetStore:
    """Single writer of dataset state.

    Every read returns a deep copy; changes go through ``update_dataset`` so
    that ``updated_at`` and the persistence backend stay consistent.
    """

    def __init__(
        self,
        persistence: DatasetPersistencePort,
        mappings: MappingResolverPort,
        exporter: DatasetExportPort,
        *,
        artifact_sink: ArtifactSinkPort | None = None,
        engine: ValidationEngine | None = None,
        logger: LoggerPort | None = None,
    ) -> None:
        super().__init__()
        self._persistence = persistence
        self._mappings = mappings
        self._exporter = exporter
        self._artifact_sink = artifact_sink
        self._engine = engine or ValidationEngine(logger=logger)
        self._logger = logger

    def create_dataset(
        self, mapping_id: str, name: str, rows: Iterable[Any] = ()
    ) -> MappingDataset:
        self._mappings.get_mapping(mapping_id)
        now = utc_now()
        dataset = MappingDataset(
            id=new_id(IdPrefixes.DATASET),
            mapping_id=mapping_id,
            name=name,
            rows=normalize_rows(rows),
            created_at=now,
            updated_at=now,
        )
        self._persistence.save(dataset)
        self._log_change(dataset, "created")
        return dataset.model_copy(deep=True)

    def get_dataset(self, dataset_id: str) -> MappingDataset:
        return self._require(dataset_id).model_copy(deep=True)

    def list_datasets(self, mapping_id: str | None = None) -> list[MappingDataset]:
        return [
            dataset.model_copy(deep=True)
            for dataset in self._persistence.list_all()
            if mapping_id is None or dataset.mapping_id == mapping_id
        ]

    def update_dataset(self, dataset_id: str, **changes: Any) -> MappingDataset:
        """Merge ``name`` and/or ``rows`` into a dataset and refresh ``updated_at``.

        Raises:
            DatasetNotFoundError: if no dataset has this id.
            ValueError: for attributes that cannot be updated.
        """
        unknown = set(changes) - _UPDATABLE
        if unknown:
            raise ValueError(f"Cannot update dataset attributes: {sorted(unknown)}")
        current = self._require(dataset_id)
        payload = current.model_dump()
        if "rows" in changes:
            payload["rows"] = normalize_rows(changes["rows"])
        if "name" in changes:
            payload["name"] = changes["name"]
        payload["updated_at"] = advance_timestamp(current.updated_at)
        updated = MappingDataset.model_validate(payload)
        self._persistence.save(updated)
        self._log_change(updated, "updated")
        return updated.model_copy(deep=True)

    def delete_dataset(self, dataset_id: str) -> None:
        current = self._require(dataset_id)
        self._persistence.delete(dataset_id)
        self._log_change(current, "deleted")

    def delete_datasets_for_mapping(self, mapping_id: str) -> int:
        doomed = [
            dataset
            for dataset in self._persistence.list_all()
            if dataset.mapping_id == mapping_id
        ]
        for dataset in doomed:
            self._persistence.delete(dataset.id)
            self._log_change(dataset, "deleted")
        return len(doomed)

    def validate_dataset(self, dataset_id: str) -> DatasetValidationReport:
        dataset = self._require(dataset_id)
        mapping = self._mappings.get_mapping(dataset.mapping_id)
        report = self._engine.validate_rows(mapping, dataset.rows)
        if self._logger is not None:
            self._logger.log_validation_summary(dataset.name, report)
        return report

    def export_dataset(
        self, dataset_id: str, export_format: ExportFormat
    ) -> ExportArtifact:
        dataset = self._require(dataset_id)
        mapping = self._mappings.get_mapping(dataset.mapping_id)
        report = None
        if export_format is ExportFormat.JSON_BUNDLE:
            report = self._engine.validate_rows(mapping, dataset.rows)
        artifact = self._exporter.export(
            ExportRequest(
                mapping=mapping,
                dataset=dataset,
                export_format=export_format,
                report=report,
            )
        )
        if self._artifact_sink is not None:
            artifact.location = self._artifact_sink.deliver(artifact)
        if self._logger is not None:
            self._logger.log_export(artifact)
        return artifact

    def export_dataset_to_csv(self, dataset_id: str) -> ExportArtifact:
        return self.export_dataset(dataset_id, ExportFormat.CSV)

    def export_dataset_to_json(self, dataset_id: str) -> ExportArtifact:
        return self.export_dataset(dataset_id, ExportFormat.JSON)

    def _require(self, dataset_id: str) -> MappingDataset:
        dataset = self._persistence.load(dataset_id)
        if dataset is None:
            raise DatasetNotFoundError(dataset_id)
        return dataset

    def _log_change(self, dataset: MappingDataset, action: str) -> None:
        if self._logger is not None:
            self._logger.log_dataset_changed(dataset.id, action, dataset.row_count)
