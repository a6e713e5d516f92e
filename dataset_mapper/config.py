from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .constants import Defaults


@dataclass(frozen=True, slots=True)
class MapperConfig:
    storage_dir: Path = field(default_factory=lambda: Path(Defaults.STORAGE_DIR))
    export_dir: Path = field(default_factory=lambda: Path(Defaults.EXPORT_DIR))
    csv_delimiter: str = Defaults.CSV_DELIMITER
    json_indent: int = Defaults.JSON_INDENT
    default_entity_type: str = Defaults.ENTITY_TYPE

    def __post_init__(self) -> None:
        if len(self.csv_delimiter) != 1:
            raise ValueError(
                f"csv_delimiter must be a single character, got {self.csv_delimiter!r}"
            )
        if self.csv_delimiter in {'"', "\r", "\n"}:
            raise ValueError(
                f"csv_delimiter cannot be a quote or newline, got {self.csv_delimiter!r}"
            )
        if self.json_indent < 0:
            raise ValueError(f"json_indent must be non-negative, got {self.json_indent}")
        if not self.default_entity_type.strip():
            raise ValueError("default_entity_type must not be blank")

    @classmethod
    def from_env(cls) -> MapperConfig:
        return cls(
            storage_dir=Path(
                os.getenv("DATASET_MAPPER_STORAGE_DIR", Defaults.STORAGE_DIR)
            ),
            export_dir=Path(os.getenv("DATASET_MAPPER_EXPORT_DIR", Defaults.EXPORT_DIR)),
            csv_delimiter=os.getenv(
                "DATASET_MAPPER_CSV_DELIMITER", Defaults.CSV_DELIMITER
            ),
            json_indent=int(
                os.getenv("DATASET_MAPPER_JSON_INDENT", str(Defaults.JSON_INDENT))
            ),
            default_entity_type=os.getenv(
                "DATASET_MAPPER_DEFAULT_ENTITY_TYPE", Defaults.ENTITY_TYPE
            ),
        )


class ConfigLoader:
    pass

    @staticmethod
    def load(config_file: Path | None = None) -> MapperConfig:
        config = MapperConfig.from_env()
        if config_file is None:
            config_file = Path(Defaults.CONFIG_FILE)
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except Exception as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(config_file: Path, base_config: MapperConfig) -> MapperConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        paths = _get_table(data, "paths")
        export_section = _get_table(data, "export")
        default_section = _get_table(data, "default")
        storage_dir = base_config.storage_dir
        if value := paths.get("storage_dir"):
            storage_dir = Path(str(value))
        export_dir = base_config.export_dir
        if value := paths.get("export_dir"):
            export_dir = Path(str(value))
        csv_delimiter = base_config.csv_delimiter
        if (value := export_section.get("csv_delimiter")) is not None:
            csv_delimiter = str(value)
        json_indent = base_config.json_indent
        if (value := export_section.get("json_indent")) is not None:
            json_indent = _coerce_int(value, key="export.json_indent")
        default_entity_type = base_config.default_entity_type
        if (value := default_section.get("entity_type")) is not None:
            default_entity_type = str(value).strip()
        return MapperConfig(
            storage_dir=storage_dir,
            export_dir=export_dir,
            csv_delimiter=csv_delimiter,
            json_indent=json_indent,
            default_entity_type=default_entity_type,
        )


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _coerce_int(value: object, *, key: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an int, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        return int(value)
    raise ValueError(f"{key} must be int-like or string, got {type(value).__name__}")
