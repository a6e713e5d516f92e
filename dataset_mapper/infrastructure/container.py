from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

from ..application.dataset_store import DatasetStore
from ..application.mapping_catalog import MappingCatalog
from ..config import MapperConfig
from ..domain.services.validation import ValidationEngine
from .io.artifact_sink import DirectoryArtifactSink, MemoryArtifactSink
from .io.csv_reader import CSVReader, CSVReadOptions
from .io.csv_writer import CSVWriter
from .io.dataset_export import DatasetExportAdapter
from .io.json_writer import JSONBundleWriter, JSONWriter
from .logging.console_logger import ConsoleLogger
from .logging.null_logger import NullLogger
from .repositories.dataset_repository import (
    InMemoryDatasetRepository,
    JsonFileDatasetRepository,
)
from .repositories.mapping_source_repository import (
    InMemoryMappingSource,
    JsonFileMappingSource,
)

if TYPE_CHECKING:
    from ..application.ports.repositories import (
        DatasetPersistencePort,
        MappingSourcePort,
    )
    from ..application.ports.services import (
        ArtifactSinkPort,
        DatasetExportPort,
        LoggerPort,
    )


class DependencyContainer:
    """Builds and caches the collaborators of the mapping catalog and dataset store.

    With ``use_file_storage`` the mapping source and dataset persistence are
    JSON documents under ``config.storage_dir``; otherwise they live in memory
    for the lifetime of the container. Exports are written to
    ``config.export_dir`` only when ``write_exports`` is set.
    """

    def __init__(
        self,
        config: MapperConfig | None = None,
        verbose: int = 0,
        console: Console | None = None,
        use_null_logger: bool = False,
        *,
        use_file_storage: bool = False,
        write_exports: bool = False,
    ) -> None:
        super().__init__()
        self.config = config or MapperConfig()
        self.verbose = verbose
        self.console = console or Console()
        self.use_null_logger = use_null_logger
        self.use_file_storage = use_file_storage
        self.write_exports = write_exports
        self._logger_instance: LoggerPort | None = None
        self._csv_reader_instance: CSVReader | None = None
        self._mapping_source_instance: MappingSourcePort | None = None
        self._dataset_persistence_instance: DatasetPersistencePort | None = None
        self._exporter_instance: DatasetExportPort | None = None
        self._artifact_sink_instance: ArtifactSinkPort | None = None
        self._validation_engine_instance: ValidationEngine | None = None
        self._mapping_catalog_instance: MappingCatalog | None = None
        self._dataset_store_instance: DatasetStore | None = None

    def create_logger(self) -> LoggerPort:
        if self._logger_instance is None:
            if self.use_null_logger:
                self._logger_instance = NullLogger()
            else:
                self._logger_instance = ConsoleLogger(
                    console=self.console, verbosity=self.verbose
                )
        return self._logger_instance

    def create_csv_reader(self) -> CSVReader:
        if self._csv_reader_instance is None:
            self._csv_reader_instance = CSVReader()
        return self._csv_reader_instance

    def csv_read_options(self) -> CSVReadOptions:
        return CSVReadOptions(delimiter=self.config.csv_delimiter)

    def create_mapping_source(self) -> MappingSourcePort:
        if self._mapping_source_instance is None:
            if self.use_file_storage:
                self._mapping_source_instance = JsonFileMappingSource(
                    self.config.storage_dir
                )
            else:
                self._mapping_source_instance = InMemoryMappingSource()
        return self._mapping_source_instance

    def create_dataset_persistence(self) -> DatasetPersistencePort:
        if self._dataset_persistence_instance is None:
            if self.use_file_storage:
                self._dataset_persistence_instance = JsonFileDatasetRepository(
                    self.config.storage_dir
                )
            else:
                self._dataset_persistence_instance = InMemoryDatasetRepository()
        return self._dataset_persistence_instance

    def create_exporter(self) -> DatasetExportPort:
        if self._exporter_instance is None:
            indent = self.config.json_indent
            self._exporter_instance = DatasetExportAdapter(
                csv_writer=CSVWriter(delimiter=self.config.csv_delimiter),
                json_writer=JSONWriter(indent=indent),
                bundle_writer=JSONBundleWriter(indent=indent),
            )
        return self._exporter_instance

    def create_artifact_sink(self) -> ArtifactSinkPort:
        if self._artifact_sink_instance is None:
            if self.write_exports:
                self._artifact_sink_instance = DirectoryArtifactSink(
                    self.config.export_dir
                )
            else:
                self._artifact_sink_instance = MemoryArtifactSink()
        return self._artifact_sink_instance

    def create_validation_engine(self) -> ValidationEngine:
        if self._validation_engine_instance is None:
            self._validation_engine_instance = ValidationEngine(
                logger=self.create_logger()
            )
        return self._validation_engine_instance

    def create_mapping_catalog(self) -> MappingCatalog:
        # built together with the store so deletes cascade to datasets
        self.create_dataset_store()
        assert self._mapping_catalog_instance is not None
        return self._mapping_catalog_instance

    def create_dataset_store(self) -> DatasetStore:
        if self._dataset_store_instance is None:
            catalog = MappingCatalog(
                self.create_mapping_source(),
                logger=self.create_logger(),
                default_entity_type=self.config.default_entity_type,
            )
            store = DatasetStore(
                self.create_dataset_persistence(),
                catalog,
                self.create_exporter(),
                artifact_sink=self.create_artifact_sink(),
                engine=self.create_validation_engine(),
                logger=self.create_logger(),
            )
            catalog.dataset_store = store
            self._mapping_catalog_instance = catalog
            self._dataset_store_instance = store
        return self._dataset_store_instance

    def reset_singletons(self) -> None:
        self._logger_instance = None
        self._csv_reader_instance = None
        self._mapping_source_instance = None
        self._dataset_persistence_instance = None
        self._exporter_instance = None
        self._artifact_sink_instance = None
        self._validation_engine_instance = None
        self._mapping_catalog_instance = None
        self._dataset_store_instance = None

    def override_logger(self, logger: LoggerPort) -> None:
        self._logger_instance = logger

    def override_mapping_source(self, source: MappingSourcePort) -> None:
        self._mapping_source_instance = source

    def override_dataset_persistence(self, persistence: DatasetPersistencePort) -> None:
        self._dataset_persistence_instance = persistence

    def override_artifact_sink(self, sink: ArtifactSinkPort) -> None:
        self._artifact_sink_instance = sink


def create_default_container(verbose: int = 0) -> DependencyContainer:
    return DependencyContainer(verbose=verbose)
