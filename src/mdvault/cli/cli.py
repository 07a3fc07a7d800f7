"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdvault.cli.commands import archive_cmd, format_cmd, notify_cmd


app = typer.Typer(name="mdvault", no_args_is_help=True, help="Format and archive markdown notes in a vault")

app.command(name="format")(format_cmd)
app.command(name="archive")(archive_cmd)
app.command(name="notify-conflicts")(notify_cmd)
