"""
Shared helpers for CLI commands.
"""

import asyncio
from typing import Awaitable, Optional, TypeVar

import typer
from rich.console import Console

from ..config import Settings
from ..core.errors import HashstorageError
from ..identity.keys import Identity
from ..identity.store import IdentityStore
from ..storage.file_store import FileLocalStore

T = TypeVar("T")

console = Console()
err_console = Console(stderr=True)


def local_store(settings: Settings) -> FileLocalStore:
    return FileLocalStore(settings.local_store_path)


def identity_store(settings: Settings) -> IdentityStore:
    return IdentityStore(local_store(settings))


def require_identity(settings: Settings) -> Identity:
    """Load the persisted identity or exit 1 when there is none."""
    try:
        identity: Optional[Identity] = identity_store(settings).load()
    except HashstorageError as e:
        fail(e)
    if identity is None:
        err_console.print("[yellow]No identity stored. Run 'hashstorage profile login'.[/yellow]")
        raise typer.Exit(1)
    return identity


def run(coro: Awaitable[T]) -> T:
    return asyncio.run(coro)


def fail(error: Exception, code: int = 2):
    err_console.print(f"[red]Error:[/red] {error}")
    raise typer.Exit(code)
