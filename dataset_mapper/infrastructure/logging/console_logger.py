from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, override

from rich.console import Console
from rich.markup import escape

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from ...application.models import ExportArtifact
    from ...domain.entities.dataset import DatasetValidationReport
    from ...domain.entities.mapping import Mapping


class LogLevel(IntEnum):
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


@dataclass(slots=True)
class LogContext:
    mapping_id: str = ""
    dataset_id: str = ""


def _empty_stats() -> dict[str, int]:
    return {
        "mappings_loaded": 0,
        "datasets_changed": 0,
        "rows_validated": 0,
        "invalid_rows": 0,
        "exports": 0,
        "warnings": 0,
        "errors": 0,
    }


class ConsoleLogger(LoggerPort):
    pass

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console()
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats: dict[str, int] = _empty_stats()

    def set_context(self, **kwargs: str) -> None:
        if self._context is None:
            self._context = LogContext()
        for key, value in kwargs.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

    def clear_context(self) -> None:
        self._context = None

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        if self.verbosity >= level:
            prefix = self._get_prefix()
            self.console.print(f"{prefix}{message}")

    @override
    def verbose(self, message: str) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            prefix = self._get_prefix()
            self.console.print(f"[dim]{prefix}{message}[/dim]")

    @override
    def debug(self, message: str) -> None:
        if self.verbosity >= LogLevel.DEBUG:
            prefix = self._get_prefix()
            self.console.print(f"[dim cyan]{prefix}{message}[/dim cyan]")

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    @override
    def warning(self, message: str) -> None:
        self._stats["warnings"] += 1
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    @override
    def error(self, message: str) -> None:
        self._stats["errors"] += 1
        self.console.print(f"[red]✗[/red] {message}")

    @override
    def log_mapping_loaded(self, mapping: Mapping) -> None:
        self.set_context(mapping_id=mapping.id)
        self._stats["mappings_loaded"] += 1
        self.verbose(
            f"Loaded mapping {mapping.name!r} ({len(mapping.fields)} fields, "
            f"{len(mapping.required_fields)} required, "
            f"entity type {mapping.entity_type})"
        )
        for field_def in mapping.fields:
            self.debug(
                f"  {field_def.order:>3} {field_def.name} ({field_def.type})"
                + (" required" if field_def.required else "")
            )

    @override
    def log_dataset_changed(self, dataset_id: str, action: str, row_count: int) -> None:
        self.set_context(dataset_id=dataset_id)
        self._stats["datasets_changed"] += 1
        self.verbose(f"Dataset {dataset_id} {action} ({row_count:,} rows)")

    @override
    def log_validation_summary(
        self, dataset_name: str, report: DatasetValidationReport
    ) -> None:
        invalid = len(report.invalid_rows)
        self._stats["rows_validated"] += report.row_count
        self._stats["invalid_rows"] += invalid
        if invalid:
            self.verbose(
                f"Validated {dataset_name}: {invalid} of {report.row_count:,} rows invalid"
            )
        else:
            self.verbose(f"Validated {dataset_name}: {report.row_count:,} rows valid")

    @override
    def log_export(self, artifact: ExportArtifact) -> None:
        self._stats["exports"] += 1
        target = artifact.location or artifact.filename
        self.verbose(
            f"Exported {artifact.export_format.value.upper()} to {target} "
            f"({artifact.size:,} bytes)"
        )

    @override
    def log_final_stats(self) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            self.console.print()
            self.console.print("[dim]Session Statistics:[/dim]")
            self.console.print(
                f"[dim]  Mappings loaded: {self._stats['mappings_loaded']}[/dim]"
            )
            self.console.print(
                f"[dim]  Dataset changes: {self._stats['datasets_changed']}[/dim]"
            )
            self.console.print(
                f"[dim]  Rows validated: {self._stats['rows_validated']:,}[/dim]"
            )
            self.console.print(f"[dim]  Exports: {self._stats['exports']}[/dim]")
            if self._stats["warnings"] > 0:
                self.console.print(
                    f"[dim yellow]  Warnings: {self._stats['warnings']}[/dim yellow]"
                )
            if self._stats["errors"] > 0:
                self.console.print(
                    f"[dim red]  Errors: {self._stats['errors']}[/dim red]"
                )

    def get_stats(self) -> dict[str, int]:
        return self._stats.copy()

    def reset_stats(self) -> None:
        self._stats = _empty_stats()

    def _get_prefix(self) -> str:
        if self._context is None or self.verbosity < LogLevel.DEBUG:
            return ""
        parts = [p for p in (self._context.mapping_id, self._context.dataset_id) if p]
        return escape(f"[{':'.join(parts)}] ") if parts else ""
