from __future__ import annotations

from collections.abc import Mapping as MappingABC
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ...constants import Defaults
from ...domain.exceptions import MalformedSourceRecordError
from ...domain.services.normalization import normalize_mapping, normalize_rows
from ..io.csv_reader import CSVReader, CSVReadOptions
from ..io.exceptions import DataSourceNotFoundError
from .json_document import JSONDocumentLoadError, read_json_document

if TYPE_CHECKING:
    from ...domain.entities.mapping import Mapping
    from ...domain.entities.values import Row


class MappingFileLoadError(JSONDocumentLoadError):
    pass


class RowsFileLoadError(JSONDocumentLoadError):
    pass


def _require_file(path: Path, kind: str) -> None:
    if not path.exists():
        raise DataSourceNotFoundError(f"{kind} not found: {path}")
    if not path.is_file():
        raise DataSourceNotFoundError(f"Not a file: {path}")


def load_mapping_file(
    path: str | Path, *, default_entity_type: str = Defaults.ENTITY_TYPE
) -> Mapping:
    """Load a mapping from JSON.

    Accepts either a mapping record with embedded ``fields`` or a
    ``{"mapping": {...}, "fields": [...]}`` pair.
    """
    file_path = Path(path)
    _require_file(file_path, "Mapping file")
    data = read_json_document(file_path, default=None)
    if not isinstance(data, MappingABC):
        raise MappingFileLoadError(f"Expected a JSON object in {file_path}")
    record: Any = data
    field_records: Any = None
    if isinstance(data.get("mapping"), MappingABC):
        record = data["mapping"]
        field_records = data.get("fields")
        if field_records is None:
            field_records = record.get("fields") or []
    if field_records is not None and not isinstance(field_records, list):
        raise MappingFileLoadError(f"'fields' must be a list in {file_path}")
    try:
        return normalize_mapping(
            record, field_records, default_entity_type=default_entity_type
        )
    except MalformedSourceRecordError as exc:
        raise MappingFileLoadError(f"Failed to load mapping {file_path}: {exc}") from exc


def load_rows_file(
    path: str | Path,
    mapping: Mapping,
    *,
    csv_options: CSVReadOptions | None = None,
    csv_reader: CSVReader | None = None,
) -> list[Row]:
    """Load rows from a ``.csv`` file or from a JSON list / ``{"rows": [...]}``."""
    file_path = Path(path)
    _require_file(file_path, "Rows file")
    if file_path.suffix.lower() == ".csv":
        reader = csv_reader or CSVReader()
        return reader.read_rows(file_path, mapping, csv_options)
    data = read_json_document(file_path, default=None)
    if isinstance(data, MappingABC):
        data = data.get("rows")
    if not isinstance(data, list):
        raise RowsFileLoadError(
            f"Expected a list of rows or an object with 'rows' in {file_path}"
        )
    try:
        return normalize_rows(data)
    except MalformedSourceRecordError as exc:
        raise RowsFileLoadError(f"Failed to load rows {file_path}: {exc}") from exc
