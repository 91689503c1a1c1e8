"""``hydrapin ... pin``: resolve a package on Hydra and record it in the overlay."""

from __future__ import annotations

import typer
from rich.console import Console

from hydrapin.core.commands import pin
from hydrapin.errors import HydraPinError

console = Console()
err_console = Console(stderr=True)


def pin_cmd(ctx: typer.Context) -> None:
    """Resolve the latest successful Hydra build and append it to the overlay.

    The nixpkgs revision of that build is prefetched with nix-prefetch-url,
    so this needs network access and a working Nix installation.
    """
    invocation = ctx.obj
    try:
        package = pin(
            invocation.package,
            invocation.output,
            hydra_check=invocation.hydra_check,
        )
    except HydraPinError as exc:
        err_console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1)

    console.print(
        f"[bold green]Pinned[/bold green] [cyan]{package.name}[/cyan] "
        f"to {package.url} [dim]({package.sha256})[/dim]"
    )
    console.print(f"[dim]Overlay written to {invocation.output}[/dim]")
