from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from ...domain.entities.mapping import FieldDefinition, Mapping


def _describe_rules(field_def: FieldDefinition) -> str:
    parts: list[str] = []
    for rule in field_def.validation_rules:
        parts.append(rule.type if rule.value is None else f"{rule.type}={rule.value}")
    if field_def.select_options:
        parts.append("options: " + ", ".join(field_def.option_values))
    return escape("; ".join(parts))


class FieldsPresenter:
    pass

    def __init__(self, console: Console) -> None:
        super().__init__()
        self.console = console

    def present(self, mapping: Mapping) -> None:
        self.console.print(f"[bold]{escape(mapping.name)}[/bold] [dim]({mapping.id})[/dim]")
        if mapping.description:
            self.console.print(escape(mapping.description))
        self.console.print(self.build_table(mapping))

    def build_table(self, mapping: Mapping) -> Table:
        table = Table(title=f"Fields ({len(mapping.fields)})")
        table.add_column("Order", justify="right", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Label")
        table.add_column("Type")
        table.add_column("Required", justify="center")
        table.add_column("Rules")
        for field_def in mapping.fields:
            table.add_row(
                str(field_def.order),
                escape(field_def.name),
                escape(field_def.label),
                field_def.type,
                "✓" if field_def.required else "",
                _describe_rules(field_def),
            )
        return table
