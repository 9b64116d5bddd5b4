"""Init command: create the puzzle-state record for a seed."""

import typer
from pydantic import ValidationError
from rich.markup import escape

from ..app import app, console, get_json_mode, open_program
from ..utils import Output, ExitCode
from ...core.errors import EnharmonicError


@app.command("init")
def init_command(
    seed_id: int = typer.Option(65, "--seed-id", "-s", help="Seed identifier (u64)"),
    difficulty: int = typer.Option(65, "--difficulty", "-d", help="Difficulty (u8)"),
):
    """Initialize the puzzle state for a seed.

    Example:
        enharmonic init --seed-id 65 --difficulty 65
    """
    out = Output(console=console, json_mode=get_json_mode())
    program = open_program()
    try:
        state = program.initialize(seed_id, difficulty)
    except EnharmonicError as exc:
        out.program_error(exc)
        raise typer.Exit(out.finish())
    except (ValidationError, ValueError) as exc:
        out.error(str(exc), exit_code=ExitCode.VALIDATION_ERROR)
        raise typer.Exit(out.finish())
    finally:
        program.db.close()

    out.success(
        f"Seed {state.seed_id} initialized: The Enharmonic Gap is open.",
        state=state.model_dump(),
    )
    out.text(f"  address  = {state.address}")
    out.text(f"  fragment = {escape(state.fragment_data)}")
    raise typer.Exit(out.finish())
