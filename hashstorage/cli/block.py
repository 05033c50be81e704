"""
Block commands: groups, keys, get, put
"""

import json
import warnings
from typing import Optional

import typer
from rich.table import Table

from ..client import HashstorageClient
from ..config import Settings
from ..core.errors import HashstorageError, NetworkError, StaleLocalVersion
from ..remote.http_store import HttpRemoteStore
from ._common import console, err_console, fail, local_store, require_identity, run

app = typer.Typer()


def _client(settings: Settings, remote: HttpRemoteStore) -> HashstorageClient:
    identity = require_identity(settings)
    return HashstorageClient(remote, identity, local_store(settings), settings.version_prefix)


@app.command()
def groups():
    """List your groups."""
    settings = Settings.from_env()

    async def _groups():
        async with HttpRemoteStore(settings.api_root, settings.timeout) as remote:
            return await _client(settings, remote).list_groups()

    try:
        names = run(_groups())
    except HashstorageError as e:
        fail(e)
    for name in names or []:
        console.print(name)


@app.command()
def keys(group: str = typer.Argument(..., help="Group name")):
    """List keys in one of your groups."""
    settings = Settings.from_env()

    async def _keys():
        async with HttpRemoteStore(settings.api_root, settings.timeout) as remote:
            return await _client(settings, remote).list_keys(group)

    try:
        names = run(_keys())
    except HashstorageError as e:
        fail(e)
    for name in names or []:
        console.print(name)


@app.command()
def get(
    group: str = typer.Argument(..., help="Group name"),
    key: str = typer.Argument(..., help="Key name"),
    owner: Optional[str] = typer.Option(None, "--owner", "-o", help="Owner public key (default: you)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Fetch and verify a block.

    Examples:
        hashstorage block get notes todo
        hashstorage block get notes todo --owner F97CF0EA...
    """
    settings = Settings.from_env()

    async def _get():
        async with HttpRemoteStore(settings.api_root, settings.timeout) as remote:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore", StaleLocalVersion)
                return await _client(settings, remote).load_block(group, key, owner)

    try:
        result = run(_get())
    except HashstorageError as e:
        fail(e)

    block = result.block
    if json_output:
        print(json.dumps({"block": block.to_dict(), "up_to_date": result.up_to_date}))
        raise typer.Exit(0)

    table = Table(title=f"{block.group}/{block.key}")
    table.add_column("Version", style="cyan")
    table.add_column("Signature", style="green")
    table.add_column("Data")
    table.add_row(str(block.version), "verified", block.data)
    console.print(table)
    if not result.up_to_date:
        err_console.print("[yellow]Warning: this block is older than a version seen locally[/yellow]")


@app.command()
def put(
    group: str = typer.Argument(..., help="Group name"),
    key: str = typer.Argument(..., help="Key name"),
    data: str = typer.Argument(..., help="New block data"),
    force: bool = typer.Option(False, "--force", help="Save even if the remote copy looks stale"),
):
    """
    Replace a block's data, bump its version, sign and save it.

    Examples:
        hashstorage block put notes todo "buy milk"
    """
    settings = Settings.from_env()

    async def _put():
        async with HttpRemoteStore(settings.api_root, settings.timeout) as remote:
            client = _client(settings, remote)
            try:
                with warnings.catch_warnings():
                    warnings.simplefilter("ignore", StaleLocalVersion)
                    result = await client.load_block(group, key)
            except NetworkError as e:
                if e.status != 404:
                    raise
                block = client.new_block(group, key)
            else:
                if not result.up_to_date and not force:
                    return None
                block = result.block
            block.set_data(data)
            await client.save_block(block)
            return block

    try:
        block = run(_put())
    except HashstorageError as e:
        fail(e)

    if block is None:
        err_console.print("[yellow]Remote block is older than a version seen locally; use --force to overwrite[/yellow]")
        raise typer.Exit(1)
    console.print(f"[green]Saved[/green] {block.group}/{block.key} v{block.version}")
