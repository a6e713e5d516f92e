"""Tests for dependency injection container.

These tests verify the container wires the mapping catalog and dataset store
over the configured adapters, caches singletons and honours test overrides.
"""

from pathlib import Path

from rich.console import Console

from dataset_mapper.config import MapperConfig
from dataset_mapper.infrastructure.container import (
    DependencyContainer,
    create_default_container,
)
from dataset_mapper.infrastructure.io.artifact_sink import (
    DirectoryArtifactSink,
    MemoryArtifactSink,
)
from dataset_mapper.infrastructure.logging import ConsoleLogger, NullLogger
from dataset_mapper.infrastructure.repositories import (
    InMemoryDatasetRepository,
    InMemoryMappingSource,
    JsonFileDatasetRepository,
    JsonFileMappingSource,
)


class MockLogger:
    """Mock logger for testing overrides."""

    def __init__(self):
        self.messages = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def debug(self, message: str) -> None:
        self.messages.append(("debug", message))

    def verbose(self, message: str) -> None:
        self.messages.append(("verbose", message))

    def log_mapping_loaded(self, mapping) -> None:
        self.messages.append(("mapping", mapping.id))

    def log_dataset_changed(self, dataset_id, action, row_count) -> None:
        self.messages.append(("dataset", action))

    def log_validation_summary(self, dataset_name, report) -> None:
        self.messages.append(("validation", dataset_name))

    def log_export(self, artifact) -> None:
        self.messages.append(("export", artifact.filename))

    def log_final_stats(self) -> None:
        self.messages.append(("stats", ""))


class TestDependencyContainer:
    """Tests for DependencyContainer class."""

    def test_create_container_with_defaults(self):
        container = DependencyContainer()

        assert container.verbose == 0
        assert container.console is not None
        assert container.use_null_logger is False
        assert container.config == MapperConfig()

    def test_create_container_with_null_logger(self):
        container = DependencyContainer(use_null_logger=True)
        assert isinstance(container.create_logger(), NullLogger)

    def test_console_logger_uses_container_console(self):
        console = Console()
        container = DependencyContainer(verbose=2, console=console)
        logger = container.create_logger()
        assert isinstance(logger, ConsoleLogger)
        assert logger.console is console
        assert logger.verbosity == 2

    def test_in_memory_adapters_by_default(self):
        container = DependencyContainer(use_null_logger=True)
        assert isinstance(container.create_mapping_source(), InMemoryMappingSource)
        assert isinstance(container.create_dataset_persistence(), InMemoryDatasetRepository)
        assert isinstance(container.create_artifact_sink(), MemoryArtifactSink)

    def test_file_adapters(self, tmp_path: Path):
        config = MapperConfig(storage_dir=tmp_path / "store", export_dir=tmp_path / "out")
        container = DependencyContainer(
            config, use_null_logger=True, use_file_storage=True, write_exports=True
        )
        source = container.create_mapping_source()
        persistence = container.create_dataset_persistence()
        sink = container.create_artifact_sink()
        assert isinstance(source, JsonFileMappingSource)
        assert isinstance(persistence, JsonFileDatasetRepository)
        assert persistence.path.parent == tmp_path / "store"
        assert isinstance(sink, DirectoryArtifactSink)
        assert sink.directory == tmp_path / "out"

    def test_csv_options_follow_config(self):
        container = DependencyContainer(MapperConfig(csv_delimiter=";"))
        assert container.csv_read_options().delimiter == ";"

    def test_singletons_are_cached(self):
        container = DependencyContainer(use_null_logger=True)
        assert container.create_logger() is container.create_logger()
        assert container.create_csv_reader() is container.create_csv_reader()
        assert container.create_exporter() is container.create_exporter()
        assert container.create_dataset_store() is container.create_dataset_store()

    def test_catalog_and_store_are_wired_together(self):
        container = DependencyContainer(use_null_logger=True)
        catalog = container.create_mapping_catalog()
        store = container.create_dataset_store()
        assert catalog.dataset_store is store
        assert container.create_mapping_catalog() is catalog

    def test_catalog_deletes_cascade_to_datasets(self):
        container = DependencyContainer(use_null_logger=True)
        catalog = container.create_mapping_catalog()
        store = container.create_dataset_store()
        mapping = catalog.create_mapping("Contacts", [{"name": "email", "type": "email"}])
        store.create_dataset(mapping.id, "Leads", [{"email": "a@b.com"}])

        catalog.delete_mapping(mapping.id)

        assert store.list_datasets() == []

    def test_reset_singletons(self):
        container = DependencyContainer(use_null_logger=True)
        store = container.create_dataset_store()
        container.reset_singletons()
        assert container.create_dataset_store() is not store

    def test_overrides(self):
        container = DependencyContainer()
        logger = MockLogger()
        source = InMemoryMappingSource()
        sink = MemoryArtifactSink()
        container.override_logger(logger)
        container.override_mapping_source(source)
        container.override_artifact_sink(sink)

        catalog = container.create_mapping_catalog()
        mapping = catalog.create_mapping("Contacts", [{"name": "email"}])

        assert container.create_logger() is logger
        assert source.get_mapping_record(mapping.id) is not None
        assert container.create_artifact_sink() is sink

    def test_create_default_container(self):
        container = create_default_container(verbose=1)
        assert container.verbose == 1
        assert container.use_file_storage is False
