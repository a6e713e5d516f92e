"""Tests for the dataset store."""

from io import StringIO
import json

import pytest
from rich.console import Console

from dataset_mapper.application.dataset_store import DatasetStore
from dataset_mapper.application.models import ExportFormat
from dataset_mapper.domain.exceptions import DatasetNotFoundError, MappingNotFoundError
from dataset_mapper.infrastructure.io.dataset_export import DatasetExportAdapter
from dataset_mapper.infrastructure.logging import ConsoleLogger, LogLevel
from dataset_mapper.infrastructure.repositories import InMemoryDatasetRepository

ADA = {"full_name": "Ada", "email": "ada@example.com"}
BOB = {"full_name": "Bob", "email": "bob@example.com", "qty": "3"}


class TestCreateAndGet:
    def test_create_dataset(self, store_env):
        dataset = store_env.store.create_dataset(store_env.mapping.id, "Leads", [ADA])
        assert dataset.id.startswith("dataset_")
        assert dataset.mapping_id == store_env.mapping.id
        assert dataset.rows == [ADA]
        assert dataset.created_at == dataset.updated_at

    def test_create_for_unknown_mapping_raises(self, store_env):
        with pytest.raises(MappingNotFoundError, match="Mapping not found: nope"):
            store_env.store.create_dataset("nope", "Leads")

    def test_get_returns_a_copy(self, store_env):
        created = store_env.store.create_dataset(store_env.mapping.id, "Leads", [ADA])
        fetched = store_env.store.get_dataset(created.id)
        fetched.rows[0]["full_name"] = "Mallory"
        fetched.rows.append({})
        assert store_env.store.get_dataset(created.id).rows == [ADA]

    def test_get_unknown_raises(self, store_env):
        with pytest.raises(DatasetNotFoundError, match="Dataset not found: missing"):
            store_env.store.get_dataset("missing")

    def test_list_datasets_filters_by_mapping(self, store_env):
        other = store_env.catalog.create_mapping("Other", [{"name": "x"}])
        store_env.store.create_dataset(store_env.mapping.id, "A")
        store_env.store.create_dataset(other.id, "B")
        assert len(store_env.store.list_datasets()) == 2
        assert [d.name for d in store_env.store.list_datasets(other.id)] == ["B"]


class TestUpdateDataset:
    def test_update_rows_refreshes_updated_at(self, store_env):
        created = store_env.store.create_dataset(store_env.mapping.id, "Leads", [ADA])
        updated = store_env.store.update_dataset(created.id, rows=[ADA, BOB])
        fetched = store_env.store.get_dataset(created.id)
        assert fetched.rows == [ADA, BOB]
        assert fetched.updated_at > created.updated_at
        assert fetched.updated_at == updated.updated_at
        assert fetched.created_at == created.created_at

    def test_updated_at_strictly_increases_on_rapid_updates(self, store_env):
        created = store_env.store.create_dataset(store_env.mapping.id, "Leads")
        stamps = [created.updated_at]
        for index in range(5):
            stamps.append(store_env.store.update_dataset(created.id, name=f"v{index}").updated_at)
        assert all(a < b for a, b in zip(stamps, stamps[1:]))

    def test_update_name_keeps_rows(self, store_env):
        created = store_env.store.create_dataset(store_env.mapping.id, "Leads", [ADA])
        updated = store_env.store.update_dataset(created.id, name="Prospects")
        assert updated.name == "Prospects"
        assert updated.rows == [ADA]

    def test_update_unknown_id_raises(self, store_env):
        with pytest.raises(DatasetNotFoundError):
            store_env.store.update_dataset("missing", rows=[])

    def test_update_unknown_attribute_raises(self, store_env):
        created = store_env.store.create_dataset(store_env.mapping.id, "Leads")
        with pytest.raises(ValueError, match="mapping_id"):
            store_env.store.update_dataset(created.id, mapping_id="other")


class TestDeleteDataset:
    def test_delete(self, store_env):
        created = store_env.store.create_dataset(store_env.mapping.id, "Leads")
        store_env.store.delete_dataset(created.id)
        with pytest.raises(DatasetNotFoundError):
            store_env.store.get_dataset(created.id)

    def test_delete_unknown_raises(self, store_env):
        with pytest.raises(DatasetNotFoundError):
            store_env.store.delete_dataset("missing")

    def test_delete_datasets_for_mapping(self, store_env):
        store_env.store.create_dataset(store_env.mapping.id, "A")
        store_env.store.create_dataset(store_env.mapping.id, "B")
        assert store_env.store.delete_datasets_for_mapping(store_env.mapping.id) == 2
        assert store_env.store.list_datasets() == []
        assert store_env.store.delete_datasets_for_mapping(store_env.mapping.id) == 0


class TestValidateDataset:
    def test_validate_dataset(self, store_env):
        created = store_env.store.create_dataset(
            store_env.mapping.id, "Leads", [ADA, {"full_name": "Eve"}]
        )
        report = store_env.store.validate_dataset(created.id)
        assert report.row_count == 2
        assert [r.row_index for r in report.invalid_rows] == [1]
        assert report.for_row(1).messages_by_field() == {"email": ["Email is required"]}


class TestExportDataset:
    def test_export_to_csv(self, store_env):
        created = store_env.store.create_dataset(store_env.mapping.id, "Leads", [ADA])
        artifact = store_env.store.export_dataset_to_csv(created.id)
        assert artifact.filename == "Leads.csv"
        assert artifact.media_type == "text/csv"
        assert artifact.content == (
            "Full Name,Email,Quantity,Website\nAda,ada@example.com,,\n"
        )
        assert artifact.location == "memory://Leads.csv"
        assert store_env.sink.artifacts == [artifact]

    def test_export_to_json(self, store_env):
        created = store_env.store.create_dataset(store_env.mapping.id, "Leads", [BOB])
        artifact = store_env.store.export_dataset_to_json(created.id)
        assert artifact.filename == "Leads.json"
        assert artifact.media_type == "application/json"
        assert json.loads(artifact.content) == [
            {"full_name": "Bob", "email": "bob@example.com", "qty": "3", "website": None}
        ]

    def test_export_empty_dataset(self, store_env):
        created = store_env.store.create_dataset(store_env.mapping.id, "Empty")
        csv_artifact = store_env.store.export_dataset_to_csv(created.id)
        json_artifact = store_env.store.export_dataset_to_json(created.id)
        assert csv_artifact.content == "Full Name,Email,Quantity,Website\n"
        assert json.loads(json_artifact.content) == []

    def test_export_bundle_embeds_validation(self, store_env):
        created = store_env.store.create_dataset(
            store_env.mapping.id, "Leads", [ADA, {"email": "bad"}]
        )
        artifact = store_env.store.export_dataset(created.id, ExportFormat.JSON_BUNDLE)
        document = json.loads(artifact.content)
        assert document["mapping"] == "Contacts"
        assert document["dataset"] == "Leads"
        assert [row["is_valid"] for row in document["rows"]] == [True, False]
        assert document["rows"][1]["errors"]["email"] == [
            "Email must be a valid email address"
        ]

    def test_export_unknown_raises(self, store_env):
        with pytest.raises(DatasetNotFoundError):
            store_env.store.export_dataset_to_csv("missing")

    def test_export_without_sink_has_no_location(self, store_env):
        store = DatasetStore(
            store_env.persistence, store_env.catalog, DatasetExportAdapter()
        )
        created = store.create_dataset(store_env.mapping.id, "Leads")
        assert store.export_dataset_to_csv(created.id).location is None


class TestStoreLogging:
    def test_mutations_and_exports_are_counted(self, store_env):
        console = Console(file=StringIO(), width=200)
        logger = ConsoleLogger(console=console, verbosity=LogLevel.VERBOSE)
        store = DatasetStore(
            InMemoryDatasetRepository(),
            store_env.catalog,
            DatasetExportAdapter(),
            logger=logger,
        )
        created = store.create_dataset(store_env.mapping.id, "Leads", [ADA])
        store.update_dataset(created.id, rows=[ADA, {}])
        store.validate_dataset(created.id)
        store.export_dataset_to_json(created.id)
        stats = logger.get_stats()
        assert stats["datasets_changed"] == 2
        assert stats["rows_validated"] == 2
        assert stats["invalid_rows"] == 1
        assert stats["exports"] == 1
        assert "updated" in console.file.getvalue()
