from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from ...constants import StorageKeys
from ...domain.exceptions import MalformedSourceRecordError
from ...domain.services.normalization import normalize_dataset
from .json_document import (
    JSONDocumentLoadError,
    read_json_document,
    write_json_document,
)

if TYPE_CHECKING:
    from ...domain.entities.dataset import MappingDataset


class InMemoryDatasetRepository:
    pass

    def __init__(self) -> None:
        super().__init__()
        self._datasets: dict[str, MappingDataset] = {}

    def load(self, dataset_id: str) -> MappingDataset | None:
        dataset = self._datasets.get(dataset_id)
        return None if dataset is None else dataset.model_copy(deep=True)

    def save(self, dataset: MappingDataset) -> None:
        self._datasets[dataset.id] = dataset.model_copy(deep=True)

    def delete(self, dataset_id: str) -> bool:
        return self._datasets.pop(dataset_id, None) is not None

    def list_all(self) -> list[MappingDataset]:
        return [dataset.model_copy(deep=True) for dataset in self._datasets.values()]


class JsonFileDatasetRepository:
    """Keeps every dataset in one JSON document, in insertion order."""

    def __init__(self, storage_dir: str | Path) -> None:
        super().__init__()
        self.path = Path(storage_dir) / f"{StorageKeys.DATASETS}.json"

    def load(self, dataset_id: str) -> MappingDataset | None:
        for dataset in self.list_all():
            if dataset.id == dataset_id:
                return dataset
        return None

    def save(self, dataset: MappingDataset) -> None:
        records = self._records()
        payload = dataset.model_dump(mode="json")
        for index, record in enumerate(records):
            if record.get("id") == dataset.id:
                records[index] = payload
                break
        else:
            records.append(payload)
        write_json_document(self.path, records)

    def delete(self, dataset_id: str) -> bool:
        records = self._records()
        remaining = [record for record in records if record.get("id") != dataset_id]
        if len(remaining) == len(records):
            return False
        write_json_document(self.path, remaining)
        return True

    def list_all(self) -> list[MappingDataset]:
        try:
            return [normalize_dataset(record) for record in self._records()]
        except MalformedSourceRecordError as exc:
            raise JSONDocumentLoadError(f"Corrupt dataset store {self.path}: {exc}") from exc

    def _records(self) -> list[dict[str, Any]]:
        data = read_json_document(self.path, default=[])
        if not isinstance(data, list):
            raise JSONDocumentLoadError(
                f"Expected a list of datasets in {self.path}, got {type(data).__name__}"
            )
        return data
