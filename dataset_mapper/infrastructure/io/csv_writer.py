from __future__ import annotations

import csv
import io
from itertools import chain
from typing import TYPE_CHECKING

from ...constants import Defaults
from ...domain.entities.values import normalize_cell, to_text

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping as MappingABC

    from ...domain.entities.mapping import Mapping
    from ...domain.entities.values import CellValue

_QUOTING_TERMINATOR = "\r\n"


class CSVWriter:
    """Renders rows as CSV: field labels as header, cells in field order.

    Cells holding the delimiter, a quote or a line break are quoted and
    embedded quotes doubled, so any standard CSV reader gets the text back.
    """

    def __init__(
        self,
        delimiter: str = Defaults.CSV_DELIMITER,
        line_terminator: str = Defaults.CSV_LINE_TERMINATOR,
    ) -> None:
        super().__init__()
        self.delimiter = delimiter
        self.line_terminator = line_terminator

    def render(
        self, mapping: Mapping, rows: Iterable[MappingABC[str, CellValue]]
    ) -> str:
        buffer = io.StringIO()
        # "\r\n" as the writer's terminator makes both characters force quoting
        writer = csv.writer(
            buffer,
            delimiter=self.delimiter,
            quotechar='"',
            doublequote=True,
            quoting=csv.QUOTE_MINIMAL,
            lineterminator=_QUOTING_TERMINATOR,
        )
        names = mapping.field_names
        lines: list[str] = []
        records = chain(
            [mapping.labels],
            ([to_text(normalize_cell(row.get(name))) for name in names] for row in rows),
        )
        for cells in records:
            writer.writerow(cells)
            lines.append(buffer.getvalue()[: -len(_QUOTING_TERMINATOR)])
            buffer.seek(0)
            buffer.truncate()
        return "".join(line + self.line_terminator for line in lines)


def render_csv(
    mapping: Mapping,
    rows: Iterable[MappingABC[str, CellValue]],
    *,
    delimiter: str = Defaults.CSV_DELIMITER,
) -> str:
    return CSVWriter(delimiter=delimiter).render(mapping, rows)
