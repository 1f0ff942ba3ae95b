"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mycoconv.cli.commands import convert_cmd, detect_cmd


app = typer.Typer(name="mycoconv", no_args_is_help=True, help="Convert hypha text between Mycomarkup and Markdown")

app.command(name="convert")(convert_cmd)
app.command(name="detect")(detect_cmd)
