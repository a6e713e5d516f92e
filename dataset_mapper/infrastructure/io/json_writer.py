"""JSON renderers for datasets.

``JSONWriter`` emits the interchange array: one object per row, keys in
field order, values verbatim, absent values as ``null`` and keys outside
the mapping dropped. ``JSONBundleWriter`` emits the self-describing
document with field metadata and per-row validation results.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from ...constants import Defaults
from ...domain.entities.values import normalize_cell

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping as MappingABC

    from ...domain.entities.dataset import DatasetValidationReport, MappingDataset
    from ...domain.entities.mapping import Mapping
    from ...domain.entities.values import CellValue


def ordered_record(
    mapping: Mapping, row: MappingABC[str, CellValue]
) -> dict[str, CellValue]:
    return {name: normalize_cell(row.get(name)) for name in mapping.field_names}


def _dumps(payload: Any, indent: int) -> str:
    return (
        json.dumps(payload, indent=indent or None, ensure_ascii=False, allow_nan=False)
        + "\n"
    )


class JSONWriter:
    pass

    def __init__(self, indent: int = Defaults.JSON_INDENT) -> None:
        super().__init__()
        self.indent = indent

    def render(
        self, mapping: Mapping, rows: Iterable[MappingABC[str, CellValue]]
    ) -> str:
        return _dumps([ordered_record(mapping, row) for row in rows], self.indent)


class JSONBundleWriter:
    pass

    def __init__(self, indent: int = Defaults.JSON_INDENT) -> None:
        super().__init__()
        self.indent = indent

    def render(
        self,
        mapping: Mapping,
        dataset: MappingDataset,
        report: DatasetValidationReport,
    ) -> str:
        rows: list[dict[str, Any]] = []
        for index, row in enumerate(dataset.rows):
            result = report.for_row(index)
            rows.append(
                {
                    "data": ordered_record(mapping, row),
                    "errors": result.messages_by_field(),
                    "is_valid": result.is_valid,
                }
            )
        payload = {
            "mapping": mapping.name,
            "dataset": dataset.name,
            "fields": [
                {"name": field.name, "label": field.label, "type": field.type}
                for field in mapping.fields
            ],
            "rows": rows,
        }
        return _dumps(payload, self.indent)


def render_json(
    mapping: Mapping,
    rows: Iterable[MappingABC[str, CellValue]],
    *,
    indent: int = Defaults.JSON_INDENT,
) -> str:
    return JSONWriter(indent=indent).render(mapping, rows)


def render_json_bundle(
    mapping: Mapping,
    dataset: MappingDataset,
    report: DatasetValidationReport,
    *,
    indent: int = Defaults.JSON_INDENT,
) -> str:
    return JSONBundleWriter(indent=indent).render(mapping, dataset, report)
