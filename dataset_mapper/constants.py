from typing import ClassVar


class Defaults:
    ENTITY_TYPE = "custom"
    FIELD_TYPE = "text"
    CSV_DELIMITER = ","
    CSV_LINE_TERMINATOR = "\n"
    JSON_INDENT = 2
    STORAGE_DIR = ".dataset_mapper"
    EXPORT_DIR = "exports"
    CONFIG_FILE = "dataset_mapper.toml"


class StorageKeys:
    MAPPINGS = "epcc_mappings"
    FIELDS = "epcc_mapping_fields"
    DATASETS = "epcc_datasets"


class IdPrefixes:
    MAPPING = "mapping"
    FIELD = "field"
    DATASET = "dataset"


class Patterns:
    EMAIL = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
    DECIMAL_NUMBER = r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$"
    URL_SCHEME = r"^[A-Za-z][A-Za-z0-9+.-]*$"


class MediaTypes:
    CSV = "text/csv"
    JSON = "application/json"


class BackendFieldTypes:
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"
    NUMERIC: ClassVar[frozenset[str]] = frozenset({"integer", "float"})
