from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ...domain.entities.dataset import MappingDataset
    from ...domain.entities.mapping import Mapping


@runtime_checkable
class MappingSourcePort(Protocol):
    """Raw mapping records and their separately stored field records."""

    def get_mapping_record(self, mapping_id: str) -> dict[str, Any] | None: ...

    def get_field_records(self, mapping_id: str) -> list[dict[str, Any]]: ...

    def list_mapping_records(self) -> list[dict[str, Any]]: ...

    def save_mapping_record(
        self, record: dict[str, Any], field_records: list[dict[str, Any]]
    ) -> None: ...

    def delete_mapping_record(self, mapping_id: str) -> bool: ...


@runtime_checkable
class MappingResolverPort(Protocol):
    pass

    def get_mapping(self, mapping_id: str) -> Mapping: ...


@runtime_checkable
class DatasetPersistencePort(Protocol):
    pass

    def load(self, dataset_id: str) -> MappingDataset | None: ...

    def save(self, dataset: MappingDataset) -> None: ...

    def delete(self, dataset_id: str) -> bool: ...

    def list_all(self) -> list[MappingDataset]: ...


@runtime_checkable
class DatasetCascadePort(Protocol):
    pass

    def delete_datasets_for_mapping(self, mapping_id: str) -> int: ...
