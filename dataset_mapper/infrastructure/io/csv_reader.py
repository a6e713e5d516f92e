from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import pandas as pd

from ...domain.services.normalization import normalize_rows
from .exceptions import DataParseError, DataSourceNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

    from ...domain.entities.mapping import Mapping
    from ...domain.entities.values import Row


@dataclass(slots=True)
class CSVReadOptions:
    delimiter: str = ","
    encoding: str = "utf-8"
    strip_headers: bool = True


class CSVReader:
    """Reads row files as all-text frames.

    Only empty cells become missing values; strings such as ``NA`` or
    ``null`` stay as typed.
    """

    def read(self, path: Path, options: CSVReadOptions | None = None) -> pd.DataFrame:
        options = options or CSVReadOptions()
        if not path.exists():
            raise DataSourceNotFoundError(f"File not found: {path}")
        if not path.is_file():
            raise DataSourceNotFoundError(f"Not a file: {path}")
        try:
            frame = pd.read_csv(
                path,
                sep=options.delimiter,
                encoding=options.encoding,
                dtype=str,
                keep_default_na=False,
                na_values=[""],
            )
        except pd.errors.EmptyDataError as e:
            raise DataParseError(f"CSV file is empty: {path}") from e
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise DataParseError(f"Cannot read rows from {path}: {e}") from e
        if options.strip_headers:
            frame = frame.rename(columns=lambda col: str(col).strip())
        return frame

    def read_rows(
        self, path: Path, mapping: Mapping, options: CSVReadOptions | None = None
    ) -> list[Row]:
        """Read a CSV whose headers are field names or labels into mapping rows."""
        return rows_from_frame(self.read(path, options), mapping)


def header_lookup(mapping: Mapping) -> dict[str, str]:
    lookup: dict[str, str] = {}
    for field in mapping.fields:
        lookup.setdefault(field.label, field.name)
    # names win over labels that happen to collide with another field's name
    for field in mapping.fields:
        lookup[field.name] = field.name
    return lookup


def rows_from_frame(df: pd.DataFrame, mapping: Mapping) -> list[Row]:
    lookup = header_lookup(mapping)
    renamed = df.rename(columns=lambda col: lookup.get(str(col), str(col)))
    if renamed.columns.duplicated().any():
        duplicates = sorted(set(renamed.columns[renamed.columns.duplicated()]))
        raise DataParseError(f"Columns map to the same field more than once: {duplicates}")
    records = renamed.astype(object).where(renamed.notna(), None).to_dict("records")
    return normalize_rows(records)
