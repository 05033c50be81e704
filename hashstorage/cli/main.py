#!/usr/bin/env python3
"""
Hashstorage CLI - signed versioned blocks

Main entrypoint for the hashstorage command-line tool.
"""

import typer
from rich.table import Table

from .. import __version__
from ..config import Settings
from ..core.errors import HashstorageError
from ..logging_config import setup_logging
from ..remote.http_store import HttpRemoteStore
from . import block, profile
from ._common import console, fail, run

app = typer.Typer(
    name="hashstorage",
    help="Hashstorage client: deterministic identities and signed blocks",
    add_completion=False,
)

app.add_typer(profile.app, name="profile", help="Local identity management")
app.add_typer(block.app, name="block", help="Signed block operations")


@app.callback()
def _setup():
    setup_logging()


@app.command()
def version(api: bool = typer.Option(False, "--api", help="Also query the backend version")):
    """Show version information."""
    settings = Settings.from_env()

    table = Table(show_header=False, box=None)
    table.add_row("[bold]Hashstorage CLI[/bold]", f"v{__version__}")
    table.add_row("API root", settings.api_root)

    if api:
        async def _version():
            async with HttpRemoteStore(settings.api_root, settings.timeout) as remote:
                return await remote.get_version()

        try:
            backend = run(_version())
        except HashstorageError as e:
            fail(e)
        table.add_row("Backend", str(backend))

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
