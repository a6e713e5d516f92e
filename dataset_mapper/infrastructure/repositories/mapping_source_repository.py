from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

from ...constants import StorageKeys
from .json_document import (
    JSONDocumentLoadError,
    read_json_document,
    write_json_document,
)


class InMemoryMappingSource:
    pass

    def __init__(
        self,
        records: list[dict[str, Any]] | None = None,
        field_records: dict[str, list[dict[str, Any]]] | None = None,
    ) -> None:
        super().__init__()
        self._records: dict[str, dict[str, Any]] = {
            str(record["id"]): copy.deepcopy(record) for record in records or []
        }
        self._fields: dict[str, list[dict[str, Any]]] = copy.deepcopy(
            field_records or {}
        )

    def get_mapping_record(self, mapping_id: str) -> dict[str, Any] | None:
        record = self._records.get(mapping_id)
        return None if record is None else copy.deepcopy(record)

    def get_field_records(self, mapping_id: str) -> list[dict[str, Any]]:
        return copy.deepcopy(self._fields.get(mapping_id, []))

    def list_mapping_records(self) -> list[dict[str, Any]]:
        return [copy.deepcopy(record) for record in self._records.values()]

    def save_mapping_record(
        self, record: dict[str, Any], field_records: list[dict[str, Any]]
    ) -> None:
        mapping_id = str(record["id"])
        self._records[mapping_id] = copy.deepcopy(record)
        self._fields[mapping_id] = copy.deepcopy(field_records)

    def delete_mapping_record(self, mapping_id: str) -> bool:
        self._fields.pop(mapping_id, None)
        return self._records.pop(mapping_id, None) is not None


class JsonFileMappingSource:
    """Mapping records and field records kept in two JSON documents."""

    def __init__(self, storage_dir: str | Path) -> None:
        super().__init__()
        storage = Path(storage_dir)
        self.mappings_path = storage / f"{StorageKeys.MAPPINGS}.json"
        self.fields_path = storage / f"{StorageKeys.FIELDS}.json"

    def get_mapping_record(self, mapping_id: str) -> dict[str, Any] | None:
        for record in self._mapping_records():
            if str(record.get("id")) == mapping_id:
                return record
        return None

    def get_field_records(self, mapping_id: str) -> list[dict[str, Any]]:
        return list(self._field_records().get(mapping_id, []))

    def list_mapping_records(self) -> list[dict[str, Any]]:
        return self._mapping_records()

    def save_mapping_record(
        self, record: dict[str, Any], field_records: list[dict[str, Any]]
    ) -> None:
        mapping_id = str(record["id"])
        records = [r for r in self._mapping_records() if str(r.get("id")) != mapping_id]
        records.append(record)
        fields = self._field_records()
        fields[mapping_id] = field_records
        write_json_document(self.mappings_path, records)
        write_json_document(self.fields_path, fields)

    def delete_mapping_record(self, mapping_id: str) -> bool:
        records = self._mapping_records()
        remaining = [r for r in records if str(r.get("id")) != mapping_id]
        if len(remaining) == len(records):
            return False
        fields = self._field_records()
        fields.pop(mapping_id, None)
        write_json_document(self.mappings_path, remaining)
        write_json_document(self.fields_path, fields)
        return True

    def _mapping_records(self) -> list[dict[str, Any]]:
        data = read_json_document(self.mappings_path, default=[])
        if not isinstance(data, list):
            raise JSONDocumentLoadError(
                f"Expected a list of mappings in {self.mappings_path}"
            )
        return data

    def _field_records(self) -> dict[str, list[dict[str, Any]]]:
        data = read_json_document(self.fields_path, default={})
        if not isinstance(data, dict):
            raise JSONDocumentLoadError(
                f"Expected an object keyed by mapping id in {self.fields_path}"
            )
        return data
