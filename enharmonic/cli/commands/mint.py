"""Mint commands: create and inspect reward mints."""

from __future__ import annotations

import typer

from ..app import app, console, get_json_mode, open_program
from ..utils import Output, ExitCode
from ...config import get_config
from ...ledger.token import TokenProgram

mint_app = typer.Typer(help="Create and inspect reward mints")
app.add_typer(mint_app, name="mint")


@mint_app.command("create")
def mint_create(
    seed_id: int = typer.Option(65, "--seed-id", "-s", help="Seed whose state record is the mint authority"),
    decimals: int | None = typer.Option(None, "--decimals", help="Token decimals (default from config)"),
    supply_cap: int | None = typer.Option(None, "--supply-cap", help="Maximum total supply"),
):
    """Create a mint whose authority is the seed's derived state address.

    Only the program can sign for that address, so only successful bridges
    can mint from it.
    """
    out = Output(console=console, json_mode=get_json_mode())
    config = get_config()
    program = open_program()
    try:
        authority = program.state_address(seed_id)
        token = TokenProgram(program.db)
        mint = token.create_mint(
            authority,
            decimals=config.mint.decimals if decimals is None else decimals,
            supply_cap=config.mint.supply_cap if supply_cap is None else supply_cap,
        )
    except ValueError as exc:
        out.error(str(exc), exit_code=ExitCode.VALIDATION_ERROR)
        raise typer.Exit(out.finish())
    finally:
        program.db.close()

    out.success(f"Created mint {mint.address}", mint=mint.model_dump())
    out.text(f"  authority = {mint.authority} (seed {seed_id})")
    out.text(f"  decimals  = {mint.decimals}")
    if mint.supply_cap is not None:
        out.text(f"  supply_cap = {mint.supply_cap}")
    raise typer.Exit(out.finish())


@mint_app.command("show")
def mint_show(address: str = typer.Argument(..., help="Mint address")):
    """Show a mint's authority and supply."""
    out = Output(console=console, json_mode=get_json_mode())
    program = open_program()
    try:
        mint = TokenProgram(program.db).get_mint(address)
    finally:
        program.db.close()

    if mint is None:
        out.error(f"Unknown mint: {address}", exit_code=ExitCode.NOT_FOUND)
        raise typer.Exit(out.finish())

    out.set_data("mint", mint.model_dump())
    out.table(
        "Mint",
        ["Field", "Value"],
        [
            ["address", mint.address],
            ["authority", mint.authority],
            ["decimals", str(mint.decimals)],
            ["supply", str(mint.supply)],
            ["supply_cap", "-" if mint.supply_cap is None else str(mint.supply_cap)],
        ],
        data_key="mint_fields",
    )
    raise typer.Exit(out.finish())
