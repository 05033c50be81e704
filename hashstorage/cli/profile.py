"""
Profile commands: login, show, logout
"""

import json

import typer
from rich.table import Table

from ..config import Settings
from ..core.errors import HashstorageError
from ..identity.keys import Identity, check, derive
from ..identity.store import PRIVATE_KEY_SLOT, PUBLIC_KEY_SLOT
from ._common import console, fail, identity_store

app = typer.Typer()


@app.command()
def login(
    app_id: str = typer.Option(..., "--app-id", "-a", help="Application identifier"),
    username: str = typer.Option(..., "--username", "-u", help="User name"),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True, help="Password"),
):
    """
    Derive the identity for the given credentials and store it locally.

    Examples:
        hashstorage profile login -a myapp -u alex
    """
    settings = Settings.from_env()
    identity = derive(app_id, username, password)
    try:
        identity_store(settings).save(identity)
    except HashstorageError as e:
        fail(e)
    console.print(f"[green]Logged in.[/green] Public key: {identity.public_key}")


@app.command()
def show(json_output: bool = typer.Option(False, "--json", help="Output as JSON")):
    """Show the stored public key and whether the key pair checks out."""
    settings = Settings.from_env()
    store = identity_store(settings)
    if not store.exists():
        if json_output:
            print(json.dumps({"public_key": None}))
        else:
            console.print("[yellow]No identity stored[/yellow]")
        raise typer.Exit(1)

    public_key = store.local_store.get(PUBLIC_KEY_SLOT)
    private_key = store.local_store.get(PRIVATE_KEY_SLOT)
    try:
        valid = check(Identity(public_key=public_key, private_key=private_key))
    except HashstorageError:
        valid = False

    if json_output:
        print(json.dumps({"public_key": public_key, "valid": valid}))
    else:
        table = Table(show_header=False, box=None)
        table.add_row("[bold]Public key[/bold]", public_key)
        table.add_row("[bold]Key pair[/bold]", "[green]valid[/green]" if valid else "[red]INVALID[/red]")
        table.add_row("[bold]Store[/bold]", settings.local_store_path)
        console.print(table)
    raise typer.Exit(0 if valid else 2)


@app.command()
def logout():
    """Remove the stored identity."""
    settings = Settings.from_env()
    try:
        identity_store(settings).clear()
    except HashstorageError as e:
        fail(e)
    console.print("Identity cleared")
