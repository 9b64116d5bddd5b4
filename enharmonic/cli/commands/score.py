"""Score command: dry-run a claim without touching the ledger."""

import typer
from pydantic import ValidationError
from rich.markup import escape

from ..app import app, console, get_json_mode
from ..utils import Output, ExitCode
from ...core.models import SubmissionClaim
from ...program import COHERENCE_THRESHOLD, evaluate_claim


@app.command("score")
def score_command(
    context: str = typer.Option(..., "--context", help="Harmonic context"),
    interval_name: str = typer.Option(..., "--interval", help="Interval name"),
    resolution: str = typer.Option(..., "--resolution", help="How the interval resolves"),
    salt: int = typer.Option(1, "--salt", help="Nonce (0 shows the InvalidProof rejection)"),
):
    """Score and classify a claim, showing which rubric rules fired."""
    out = Output(console=console, json_mode=get_json_mode())
    try:
        claim = SubmissionClaim(
            context=context,
            interval_name=interval_name,
            resolution=resolution,
            salt=salt,
        )
    except ValidationError as exc:
        out.error(f"Invalid claim: {exc}", exit_code=ExitCode.VALIDATION_ERROR)
        raise typer.Exit(out.finish())

    evaluation = evaluate_claim(claim)
    breakdown = evaluation.breakdown

    out.set_data("evaluation", evaluation.model_dump(mode="json"))
    out.table(
        "Coherence",
        ["Bucket", "Rule", "Points"],
        [
            ["alignment", breakdown.alignment_rule or "-", str(breakdown.alignment)],
            ["resolution", breakdown.resolution_rule or "-", str(breakdown.resolution)],
            ["effort", "-", str(breakdown.effort)],
            ["total", f"threshold {COHERENCE_THRESHOLD}", str(evaluation.coherence_score)],
        ],
        data_key="coherence",
    )

    if evaluation.accepted:
        classification = evaluation.classification
        out.success(
            f"{classification.label} (reward {classification.reward})"
        )
    else:
        out.text(f"[yellow]Would be rejected:[/yellow] {escape(evaluation.error['message'])}")
    raise typer.Exit(out.finish())
