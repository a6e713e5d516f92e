from __future__ import annotations

import csv
from typing import TYPE_CHECKING

from ...application.models import ExportArtifact, ExportFormat, export_filename
from ...domain.services.validation import validate_rows
from .csv_writer import CSVWriter
from .exceptions import ExportGenerationError
from .json_writer import JSONBundleWriter, JSONWriter

if TYPE_CHECKING:
    from ...application.models import ExportRequest
    from ...application.ports.services import RowsWriterPort


class DatasetExportAdapter:
    pass

    def __init__(
        self,
        csv_writer: RowsWriterPort | None = None,
        json_writer: RowsWriterPort | None = None,
        bundle_writer: JSONBundleWriter | None = None,
    ) -> None:
        super().__init__()
        self._csv_writer = csv_writer or CSVWriter()
        self._json_writer = json_writer or JSONWriter()
        self._bundle_writer = bundle_writer or JSONBundleWriter()

    def export(self, request: ExportRequest) -> ExportArtifact:
        export_format = request.export_format
        try:
            content = self._render(request)
        except (csv.Error, TypeError, ValueError) as exc:
            raise ExportGenerationError(
                f"{export_format.value.upper()} export of {request.dataset.name} failed: {exc}"
            ) from exc
        return ExportArtifact(
            filename=export_filename(request.dataset.name, export_format),
            content=content,
            media_type=export_format.media_type,
            export_format=export_format,
        )

    def _render(self, request: ExportRequest) -> str:
        mapping = request.mapping
        rows = request.dataset.rows
        match request.export_format:
            case ExportFormat.CSV:
                return self._csv_writer.render(mapping, rows)
            case ExportFormat.JSON:
                return self._json_writer.render(mapping, rows)
            case ExportFormat.JSON_BUNDLE:
                report = request.report or validate_rows(mapping, rows)
                return self._bundle_writer.render(mapping, request.dataset, report)
        raise ExportGenerationError(f"Unsupported export format: {request.export_format}")
