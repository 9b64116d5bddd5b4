"""Bridge command: submit a claim and mint the pathway reward."""

from __future__ import annotations

from pathlib import Path

import typer
import yaml
from pydantic import ValidationError

from ..app import app, console, get_json_mode, open_program
from ..utils import Output, ExitCode
from ...core.errors import EnharmonicError
from ...core.models import SubmissionClaim


def load_claim_file(path: Path) -> SubmissionClaim:
    """Load a claim from a YAML file.

    Expected keys: context, interval_name, resolution, salt.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file isn't a YAML mapping
        pydantic.ValidationError: If fields are missing or out of range
    """
    if not path.exists():
        raise FileNotFoundError(f"Claim file not found: {path}")
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Claim file must contain a mapping: {path}")
    return SubmissionClaim.model_validate(data)


def build_claim(
    claim_file: Path | None,
    context: str | None,
    interval_name: str | None,
    resolution: str | None,
    salt: int | None,
) -> SubmissionClaim:
    """Build a claim from a file, with explicit options taking precedence."""
    data: dict = {}
    if claim_file is not None:
        data = load_claim_file(claim_file).model_dump()
    overrides = {
        "context": context,
        "interval_name": interval_name,
        "resolution": resolution,
        "salt": salt,
    }
    data.update({k: v for k, v in overrides.items() if v is not None})
    return SubmissionClaim.model_validate(data)


@app.command("bridge")
def bridge_command(
    seed_id: int = typer.Option(65, "--seed-id", "-s", help="Seed identifier"),
    mint: str = typer.Option(..., "--mint", "-m", help="Reward mint address"),
    account: str = typer.Option(..., "--account", "-a", help="Destination token account"),
    claim_file: Path | None = typer.Option(
        None, "--claim", "-c", help="YAML file with context/interval_name/resolution/salt"
    ),
    context: str | None = typer.Option(None, "--context", help="Harmonic context"),
    interval_name: str | None = typer.Option(None, "--interval", help="Interval name"),
    resolution: str | None = typer.Option(None, "--resolution", help="How the interval resolves"),
    salt: int | None = typer.Option(None, "--salt", help="Nonzero nonce"),
):
    """Bridge the Enharmonic Gap with an interpretation claim.

    Examples:
        enharmonic bridge -m MINT -a ACCOUNT --claim claim.yaml
        enharmonic bridge -m MINT -a ACCOUNT --context "B harmonic minor" \\
            --interval "Augmented Second" --resolution "Resolves upward to E" --salt 12345
    """
    out = Output(console=console, json_mode=get_json_mode())

    try:
        claim = build_claim(claim_file, context, interval_name, resolution, salt)
    except FileNotFoundError as exc:
        out.error(str(exc), exit_code=ExitCode.NOT_FOUND)
        raise typer.Exit(out.finish())
    except (ValidationError, ValueError, yaml.YAMLError) as exc:
        out.error(f"Invalid claim: {exc}", exit_code=ExitCode.VALIDATION_ERROR)
        raise typer.Exit(out.finish())

    program = open_program()
    try:
        receipt = program.bridge(seed_id, claim, mint=mint, destination=account)
    except EnharmonicError as exc:
        out.program_error(exc)
        raise typer.Exit(out.finish())
    except ValueError as exc:
        out.error(str(exc), exit_code=ExitCode.VALIDATION_ERROR)
        raise typer.Exit(out.finish())
    finally:
        program.db.close()

    out.success(
        f"Gap bridged via {receipt.pathway_label}",
        receipt=receipt.model_dump(mode="json"),
    )
    out.text(f"  reward          = {receipt.reward}")
    out.text(f"  coherence score = {receipt.coherence_score}")
    raise typer.Exit(out.finish())
