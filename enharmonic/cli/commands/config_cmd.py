"""Config command for viewing and managing enharmonic configuration."""

import typer

from ..app import app, console
from ...config import (
    get_config,
    reset_config,
    CONFIG_FILE,
)


VALID_KEYS = {
    "program.program_id",
    "mint.decimals",
    "mint.supply_cap",
    "defaults.db_path",
}

INT_FIELDS = {
    "decimals",
    "supply_cap",
}


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. defaults.db_path, mint.decimals)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify enharmonic configuration.

    Examples:
        enharmonic config show
        enharmonic config set defaults.db_path ./storage/enharmonic.db
        enharmonic config set mint.supply_cap 1000000
        enharmonic config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] enharmonic config set <key> <value>")
            console.print()
            console.print("Available keys:")
            for k in sorted(VALID_KEYS):
                console.print(f"  {k}")
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _show_config():
    """Display current resolved configuration."""
    config = get_config()

    console.print()
    console.print("[bold]Enharmonic Configuration[/bold]")
    console.print("─" * 40)

    console.print()
    console.print("[bold cyan]Program[/bold cyan]")
    console.print(f"  program_id = {config.program.program_id}")

    console.print()
    console.print("[bold cyan]Mint[/bold cyan] (defaults for `mint create`)")
    console.print(f"  decimals   = {config.mint.decimals}")
    cap = config.mint.supply_cap
    console.print(f"  supply_cap = {cap if cap is not None else '[dim](none)[/dim]'}")

    console.print()
    console.print("[bold cyan]Defaults[/bold cyan]")
    console.print(f"  db_path    = {config.defaults.db_path}")

    console.print()
    if CONFIG_FILE.exists():
        console.print(f"Config file: {CONFIG_FILE}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({CONFIG_FILE})")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key:[/red] {key}")
        console.print()
        console.print("Available keys:")
        for k in sorted(VALID_KEYS):
            console.print(f"  {k}")
        raise typer.Exit(1)

    config = get_config()
    zone, field_name = key.split(".", 1)
    target = getattr(config, zone)

    if field_name in INT_FIELDS:
        try:
            setattr(target, field_name, int(value))
        except ValueError:
            console.print(f"[red]Invalid integer value:[/red] {value}")
            raise typer.Exit(1)
    else:
        setattr(target, field_name, value)

    config.save()
    reset_config()  # Clear cached singleton so next get_config() reloads

    console.print(f"[green]✓[/green] Set {key} = {value}")
    console.print(f"  Saved to {CONFIG_FILE}")


def _reset_config():
    """Reset config to defaults."""
    if CONFIG_FILE.exists():
        CONFIG_FILE.unlink()
        reset_config()
        console.print("[green]✓[/green] Config reset to defaults")
        console.print(f"  Removed {CONFIG_FILE}")
    else:
        console.print("Config already at defaults (no config file exists)")
