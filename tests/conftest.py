from collections.abc import Callable
from dataclasses import dataclass
from io import StringIO
from typing import Any

import pytest
from rich.console import Console

from dataset_mapper.application.dataset_store import DatasetStore
from dataset_mapper.application.mapping_catalog import MappingCatalog
from dataset_mapper.domain.entities.mapping import Mapping
from dataset_mapper.domain.services.normalization import normalize_mapping
from dataset_mapper.infrastructure.io.artifact_sink import MemoryArtifactSink
from dataset_mapper.infrastructure.io.dataset_export import DatasetExportAdapter
from dataset_mapper.infrastructure.repositories.dataset_repository import (
    InMemoryDatasetRepository,
)
from dataset_mapper.infrastructure.repositories.mapping_source_repository import (
    InMemoryMappingSource,
)

CONTACT_FIELDS: list[dict[str, Any]] = [
    {
        "id": "field_email",
        "name": "email",
        "label": "Email",
        "type": "email",
        "required": True,
        "order": 1,
    },
    {
        "id": "field_name",
        "name": "full_name",
        "label": "Full Name",
        "type": "text",
        "required": True,
        "order": 0,
    },
    {"id": "field_qty", "name": "qty", "label": "Quantity", "type": "number", "order": 2},
    {"id": "field_site", "name": "website", "label": "Website", "type": "url", "order": 3},
]


def _build_mapping(fields: list[dict[str, Any]], **overrides: Any) -> Mapping:
    record: dict[str, Any] = {"id": "mapping_test", "name": "Contacts"}
    record.update(overrides)
    return normalize_mapping(record, fields)


@pytest.fixture
def make_mapping() -> Callable[..., Mapping]:
    """Build a normalized mapping from raw field records."""
    return _build_mapping


@pytest.fixture
def contact_mapping() -> Mapping:
    return _build_mapping([dict(field) for field in CONTACT_FIELDS])


@pytest.fixture
def buffer_console() -> tuple[Console, StringIO]:
    buffer = StringIO()
    return Console(file=buffer, width=200, color_system=None), buffer


@dataclass
class StoreEnv:
    source: InMemoryMappingSource
    catalog: MappingCatalog
    persistence: InMemoryDatasetRepository
    sink: MemoryArtifactSink
    store: DatasetStore
    mapping: Mapping


@pytest.fixture
def store_env() -> StoreEnv:
    """A catalog and dataset store wired together over in-memory adapters."""
    source = InMemoryMappingSource()
    catalog = MappingCatalog(source)
    persistence = InMemoryDatasetRepository()
    sink = MemoryArtifactSink()
    store = DatasetStore(persistence, catalog, DatasetExportAdapter(), artifact_sink=sink)
    catalog.dataset_store = store
    mapping = catalog.create_mapping(
        "Contacts", [dict(field) for field in CONTACT_FIELDS]
    )
    return StoreEnv(
        source=source,
        catalog=catalog,
        persistence=persistence,
        sink=sink,
        store=store,
        mapping=mapping,
    )
