"""State commands: inspect puzzle-state counters."""

import typer
from rich.markup import escape

from ..app import app, console, get_json_mode, open_program
from ..utils import Output, ExitCode
from ...core.errors import EnharmonicError

state_app = typer.Typer(help="Inspect puzzle-state records")
app.add_typer(state_app, name="state")


@state_app.command("show")
def state_show(
    seed_id: int = typer.Option(65, "--seed-id", "-s", help="Seed identifier"),
):
    """Show counters for one seed."""
    out = Output(console=console, json_mode=get_json_mode())
    program = open_program()
    try:
        state = program.get_state(seed_id)
    except EnharmonicError as exc:
        out.program_error(exc)
        raise typer.Exit(out.finish())
    except ValueError as exc:
        out.error(str(exc), exit_code=ExitCode.VALIDATION_ERROR)
        raise typer.Exit(out.finish())
    finally:
        program.db.close()

    out.set_data("state", state.model_dump())
    out.table(
        f"Seed {state.seed_id}",
        ["Field", "Value"],
        [
            ["address", state.address],
            ["difficulty", str(state.difficulty)],
            ["active", "yes" if state.is_active else "no"],
            ["total_bridges", str(state.total_bridges)],
            ["pathway_a_count", str(state.pathway_a_count)],
            ["pathway_b_count", str(state.pathway_b_count)],
            ["pathway_c_count", str(state.pathway_c_count)],
            ["fragment", escape(state.fragment_data)],
        ],
        data_key="fields",
    )
    raise typer.Exit(out.finish())


@state_app.command("list")
def state_list():
    """List all initialized seeds."""
    out = Output(console=console, json_mode=get_json_mode())
    program = open_program()
    try:
        states = program.list_states()
    finally:
        program.db.close()

    if not states:
        out.text("[dim]No seeds initialized.[/dim]")
    out.table(
        "Seeds",
        ["Seed", "Active", "Total", "A", "B", "C"],
        [
            [
                str(s.seed_id),
                "yes" if s.is_active else "no",
                str(s.total_bridges),
                str(s.pathway_a_count),
                str(s.pathway_b_count),
                str(s.pathway_c_count),
            ]
            for s in states
        ],
        data_key="seeds",
    )
    raise typer.Exit(out.finish())
