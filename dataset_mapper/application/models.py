from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re
from typing import TYPE_CHECKING

from ..constants import MediaTypes

if TYPE_CHECKING:
    from ..domain.entities.dataset import DatasetValidationReport, MappingDataset
    from ..domain.entities.mapping import Mapping

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"
    JSON_BUNDLE = "bundle"

    @property
    def extension(self) -> str:
        return "csv" if self is ExportFormat.CSV else "json"

    @property
    def media_type(self) -> str:
        return MediaTypes.CSV if self is ExportFormat.CSV else MediaTypes.JSON


def export_filename(dataset_name: str, export_format: ExportFormat) -> str:
    stem = _UNSAFE_FILENAME_CHARS.sub("_", dataset_name).strip().strip(".") or "dataset"
    return f"{stem}.{export_format.extension}"


@dataclass(slots=True)
class ExportRequest:
    mapping: Mapping
    dataset: MappingDataset
    export_format: ExportFormat
    report: DatasetValidationReport | None = None


@dataclass(slots=True)
class ExportArtifact:
    filename: str
    content: str
    media_type: str
    export_format: ExportFormat
    location: str | None = None

    @property
    def size(self) -> int:
        return len(self.content.encode("utf-8"))
