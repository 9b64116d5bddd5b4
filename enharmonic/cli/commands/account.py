"""Token account commands."""

from __future__ import annotations

import typer

from ..app import app, console, get_json_mode, open_program
from ..utils import Output, ExitCode
from ...ledger.token import TokenProgram

account_app = typer.Typer(help="Create token accounts and check balances")
app.add_typer(account_app, name="account")


@account_app.command("create")
def account_create(
    mint: str = typer.Option(..., "--mint", "-m", help="Mint address"),
    owner: str = typer.Option(..., "--owner", help="Owner identity"),
):
    """Open a zero-balance token account on a mint."""
    out = Output(console=console, json_mode=get_json_mode())
    program = open_program()
    try:
        account = TokenProgram(program.db).create_account(mint, owner)
    except LookupError as exc:
        out.error(str(exc.args[0]), exit_code=ExitCode.NOT_FOUND)
        raise typer.Exit(out.finish())
    except ValueError as exc:
        out.error(str(exc), exit_code=ExitCode.VALIDATION_ERROR)
        raise typer.Exit(out.finish())
    finally:
        program.db.close()

    out.success(f"Created token account {account.address}", account=account.model_dump())
    raise typer.Exit(out.finish())


@account_app.command("balance")
def account_balance(address: str = typer.Argument(..., help="Token account address")):
    """Show the balance of a token account."""
    out = Output(console=console, json_mode=get_json_mode())
    program = open_program()
    try:
        token = TokenProgram(program.db)
        account = token.get_account(address)
        mint = token.get_mint(account.mint) if account else None
    finally:
        program.db.close()

    if account is None:
        out.error(f"Unknown token account: {address}", exit_code=ExitCode.NOT_FOUND)
        raise typer.Exit(out.finish())

    decimals = mint.decimals if mint else 0
    out.success(
        f"Balance: {account.amount} (owner {account.owner})",
        account=account.model_dump(),
        decimals=decimals,
    )
    raise typer.Exit(out.finish())
