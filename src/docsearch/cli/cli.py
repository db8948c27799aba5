"""CLI entrypoint: Typer app definition and command registration"""

import typer

from docsearch.cli.commands import index_cmd, init_cmd, list_cmd, show_cmd


app = typer.Typer(name="docsearch", no_args_is_help=True, help="Versioned documentation search indexer")

app.command(name="init")(init_cmd)
app.command(name="index")(index_cmd)
app.command(name="list")(list_cmd)
app.command(name="show")(show_cmd)
