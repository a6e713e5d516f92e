from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from ...domain.entities.dataset import DatasetValidationReport, MappingDataset


class ValidationPresenter:
    pass

    def __init__(self, console: Console) -> None:
        super().__init__()
        self.console = console

    def present(self, dataset: MappingDataset, report: DatasetValidationReport) -> None:
        self.console.print()
        if report.is_valid:
            self.console.print(
                f"[green]✓[/green] {escape(dataset.name)}: all {report.row_count} rows valid"
            )
            return
        self.console.print(self.build_table(report))
        self.console.print()
        self.console.print(
            f"[red]✗[/red] {escape(dataset.name)}: {len(report.invalid_rows)} of "
            f"{report.row_count} rows invalid"
        )

    def build_table(self, report: DatasetValidationReport) -> Table:
        table = Table(title="Validation Errors")
        # rows are shown 1-based, matching line numbers people see in editors
        table.add_column("Row", justify="right", style="cyan")
        table.add_column("Field")
        table.add_column("Errors", style="red")
        for result in report.invalid_rows:
            for error in result.errors:
                table.add_row(
                    str(result.row_index + 1),
                    escape(error.field_name),
                    escape("\n".join(error.errors)),
                )
        return table
