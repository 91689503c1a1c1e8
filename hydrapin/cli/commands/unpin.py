"""``hydrapin ... unpin``: drop a package from the overlay."""

from __future__ import annotations

import typer
from rich.console import Console

from hydrapin.core.commands import unpin
from hydrapin.errors import HydraPinError

console = Console()
err_console = Console(stderr=True)


def unpin_cmd(ctx: typer.Context) -> None:
    """Remove every pinned entry for the package. Not pinned is not an error."""
    invocation = ctx.obj
    try:
        removed = unpin(invocation.package, invocation.output)
    except HydraPinError as exc:
        err_console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1)

    if removed:
        console.print(
            f"[bold green]Unpinned[/bold green] [cyan]{invocation.package}[/cyan] "
            f"({removed} entr{'y' if removed == 1 else 'ies'} removed)"
        )
    else:
        console.print(f"[yellow]{invocation.package} was not pinned.[/yellow]")
    console.print(f"[dim]Overlay written to {invocation.output}[/dim]")
