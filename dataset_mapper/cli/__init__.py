import click

from .commands.export import export_command
from .commands.fields import fields_command
from .commands.validate import validate_command


@click.group()
def app() -> None:
    pass


app.add_command(fields_command, name="fields")
app.add_command(validate_command, name="validate")
app.add_command(export_command, name="export")
__all__ = ["app"]
