from __future__ import annotations

from collections.abc import Mapping as MappingABC
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from ..constants import Defaults, IdPrefixes
from ..domain.entities.mapping import FieldDefinition, advance_timestamp, utc_now
from ..domain.exceptions import MappingNotFoundError
from ..domain.services.normalization import normalize_mapping

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..domain.entities.mapping import Mapping
    from .ports.repositories import DatasetCascadePort, MappingSourcePort
    from .ports.services import LoggerPort

_UPDATABLE = frozenset(
    {
        "name",
        "description",
        "entity_type",
        "external_reference",
        "custom_api_name",
        "fields",
    }
)


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex[:12]}"


def _field_record(field: MappingABC[str, Any] | FieldDefinition) -> dict[str, Any]:
    if isinstance(field, FieldDefinition):
        return field.model_dump(mode="json")
    record = dict(field)
    if not record.get("id"):
        record["id"] = new_id(IdPrefixes.FIELD)
    return record


class MappingCatalog:
    """Resolves mappings from a mapping source and keeps them normalized.

    Fields are fetched separately from the mapping record, merged and
    sorted before a Mapping is returned.
    """

    def __init__(
        self,
        source: MappingSourcePort,
        logger: LoggerPort | None = None,
        *,
        default_entity_type: str = Defaults.ENTITY_TYPE,
    ) -> None:
        super().__init__()
        self._source = source
        self._logger = logger
        self._default_entity_type = default_entity_type
        self.dataset_store: DatasetCascadePort | None = None

    def get_mapping(self, mapping_id: str) -> Mapping:
        record = self._source.get_mapping_record(mapping_id)
        if record is None:
            raise MappingNotFoundError(mapping_id)
        mapping = self._resolve(record)
        if self._logger is not None:
            self._logger.log_mapping_loaded(mapping)
        return mapping

    def list_mappings(self) -> list[Mapping]:
        return [self._resolve(record) for record in self._source.list_mapping_records()]

    def create_mapping(
        self,
        name: str,
        fields: Iterable[MappingABC[str, Any] | FieldDefinition] = (),
        *,
        description: str = "",
        entity_type: str | None = None,
        external_reference: str | None = None,
        custom_api_name: str | None = None,
    ) -> Mapping:
        now = utc_now()
        record: dict[str, Any] = {
            "id": new_id(IdPrefixes.MAPPING),
            "name": name,
            "description": description,
            "entity_type": entity_type or self._default_entity_type,
            "external_reference": external_reference,
            "custom_api_name": custom_api_name,
            "created_at": now,
            "updated_at": now,
        }
        mapping = normalize_mapping(
            record,
            [_field_record(field) for field in fields],
            default_entity_type=self._default_entity_type,
        )
        self._store(mapping)
        if self._logger is not None:
            self._logger.verbose(
                f"Created mapping {mapping.name} ({mapping.id}) with {len(mapping.fields)} fields"
            )
        return mapping

    def update_mapping(self, mapping_id: str, **changes: Any) -> Mapping:
        unknown = set(changes) - _UPDATABLE
        if unknown:
            raise ValueError(f"Cannot update mapping attributes: {sorted(unknown)}")
        current = self.get_mapping(mapping_id)
        record = current.model_dump(exclude={"fields"})
        record.update({key: value for key, value in changes.items() if key != "fields"})
        record["updated_at"] = advance_timestamp(current.updated_at)
        field_records: list[dict[str, Any]] = (
            [_field_record(field) for field in changes["fields"]]
            if "fields" in changes
            else [field.model_dump() for field in current.fields]
        )
        mapping = normalize_mapping(
            record, field_records, default_entity_type=self._default_entity_type
        )
        self._store(mapping)
        if self._logger is not None:
            self._logger.verbose(f"Updated mapping {mapping.name} ({mapping.id})")
        return mapping

    def delete_mapping(self, mapping_id: str) -> int:
        """Delete a mapping and its datasets; returns the number of datasets removed."""
        if not self._source.delete_mapping_record(mapping_id):
            raise MappingNotFoundError(mapping_id)
        removed = 0
        if self.dataset_store is not None:
            removed = self.dataset_store.delete_datasets_for_mapping(mapping_id)
        if self._logger is not None:
            self._logger.verbose(
                f"Deleted mapping {mapping_id} and {removed} dataset(s)"
            )
        return removed

    def register_mapping(self, mapping: Mapping) -> Mapping:
        """Store an already built mapping (e.g. one read from a file) under its own id."""
        self._store(mapping)
        if self._logger is not None:
            self._logger.log_mapping_loaded(mapping)
        return mapping

    def _resolve(self, record: dict[str, Any]) -> Mapping:
        field_records = self._source.get_field_records(str(record.get("id", "")))
        return normalize_mapping(
            record,
            field_records or None,
            default_entity_type=self._default_entity_type,
        )

    def _store(self, mapping: Mapping) -> None:
        record = mapping.model_dump(mode="json", exclude={"fields"})
        field_records = [field.model_dump(mode="json") for field in mapping.fields]
        self._source.save_mapping_record(record, field_records)
