"""CLI smoke tests using typer's CliRunner."""

import json

import pytest
import yaml
from typer.testing import CliRunner

from enharmonic.cli.app import app
from enharmonic.cli.utils import ExitCode
from enharmonic.config import DefaultsConfig, EnharmonicConfig, configure, reset_config

runner = CliRunner()


@pytest.fixture(autouse=True)
def ledger_config(tmp_path):
    """Run every command against a fresh ledger in tmp_path."""
    configure(EnharmonicConfig(defaults=DefaultsConfig(db_path=str(tmp_path / "ledger.db"))))
    yield
    reset_config()


def _json(args: list[str]) -> tuple[int, dict]:
    result = runner.invoke(app, ["--json", *args])
    return result.exit_code, json.loads(result.output)


@pytest.fixture
def funded():
    """Initialized seed 65 with a mint and one token account."""
    code, _ = _json(["init", "--seed-id", "65", "--difficulty", "65"])
    assert code == 0
    code, data = _json(["mint", "create", "--seed-id", "65"])
    assert code == 0
    mint = data["mint"]["address"]
    code, data = _json(["account", "create", "--mint", mint, "--owner", "alice"])
    assert code == 0
    return mint, data["account"]["address"]


class TestVersionFlag:
    def test_version_output(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "enharmonic" in result.output


class TestInitCommand:
    def test_init(self):
        result = runner.invoke(app, ["init", "--seed-id", "65", "--difficulty", "65"])
        assert result.exit_code == 0
        assert "Seed 65 initialized" in result.output

    def test_init_twice_is_system_fault(self):
        runner.invoke(app, ["init"])
        code, data = _json(["init"])
        assert code == ExitCode.SYSTEM_FAULT
        assert data["errors"][0]["code"] == "already_exists"

    def test_init_invalid_difficulty(self):
        result = runner.invoke(app, ["init", "--difficulty", "300"])
        assert result.exit_code == ExitCode.VALIDATION_ERROR


class TestBridgeCommand:
    def test_bridge_with_options(self, funded):
        mint, account = funded
        code, data = _json(
            [
                "bridge",
                "--mint", mint,
                "--account", account,
                "--context", "B Harmonic Minor",
                "--interval", "Augmented Second",
                "--resolution", "Resolves upward to E",
                "--salt", "12345",
            ]
        )
        assert code == 0
        assert data["receipt"]["pathway"] == "A"
        assert data["receipt"]["reward"] == 65
        assert data["receipt"]["coherence_score"] == 80

        code, data = _json(["account", "balance", account])
        assert code == 0
        assert data["account"]["amount"] == 65

    def test_bridge_with_claim_file(self, funded, tmp_path):
        mint, account = funded
        claim_path = tmp_path / "claim.yaml"
        claim_path.write_text(
            yaml.safe_dump(
                {
                    "context": "schrodinger superposition state",
                    "interval_name": "Janus both",
                    "resolution": "context shift occurs",
                    "salt": 7,
                }
            )
        )
        code, data = _json(
            ["bridge", "--mint", mint, "--account", account, "--claim", str(claim_path)]
        )
        assert code == 0
        assert data["receipt"]["pathway_label"] == "Pathway C: Janus Mode"

        code, data = _json(["state", "show", "--seed-id", "65"])
        assert data["state"]["pathway_c_count"] == 1
        assert data["state"]["total_bridges"] == 1

    def test_incoherent_claim_is_claim_rejected(self, funded):
        mint, account = funded
        code, data = _json(
            [
                "bridge",
                "--mint", mint,
                "--account", account,
                "--context", "xyz",
                "--interval", "perfect fifth",
                "--resolution", "none",
                "--salt", "1",
            ]
        )
        assert code == ExitCode.CLAIM_REJECTED
        assert data["errors"][0]["code"] == "contextual_incoherence"

    def test_zero_salt_is_claim_rejected(self, funded):
        mint, account = funded
        code, data = _json(
            [
                "bridge",
                "--mint", mint,
                "--account", account,
                "--context", "major key here",
                "--interval", "Minor Third",
                "--resolution", "stable triad",
                "--salt", "0",
            ]
        )
        assert code == ExitCode.CLAIM_REJECTED
        assert data["errors"][0]["code"] == "invalid_proof"

    def test_unknown_account_is_mint_rejected(self, funded):
        mint, _ = funded
        code, data = _json(
            [
                "bridge",
                "--mint", mint,
                "--account", "missing",
                "--context", "major key here",
                "--interval", "Minor Third",
                "--resolution", "stable triad",
                "--salt", "3",
            ]
        )
        assert code == ExitCode.SYSTEM_FAULT
        assert data["errors"][0]["code"] == "mint_rejected"

    def test_missing_claim_fields(self, funded):
        mint, account = funded
        result = runner.invoke(
            app, ["bridge", "--mint", mint, "--account", account, "--context", "x"]
        )
        assert result.exit_code == ExitCode.VALIDATION_ERROR

    def test_missing_claim_file(self, funded):
        mint, account = funded
        result = runner.invoke(
            app,
            ["bridge", "--mint", mint, "--account", account, "--claim", "/nonexistent.yaml"],
        )
        assert result.exit_code == ExitCode.NOT_FOUND

    def test_uninitialized_seed(self, funded):
        mint, account = funded
        code, data = _json(
            [
                "bridge",
                "--seed-id", "7",
                "--mint", mint,
                "--account", account,
                "--context", "major key here",
                "--interval", "Minor Third",
                "--resolution", "stable triad",
                "--salt", "3",
            ]
        )
        assert code == ExitCode.NOT_FOUND
        assert data["errors"][0]["code"] == "seed_not_found"


class TestScoreCommand:
    def test_accepted(self):
        code, data = _json(
            [
                "score",
                "--context", "major key here",
                "--interval", "Minor Third",
                "--resolution", "stable triad",
            ]
        )
        assert code == 0
        evaluation = data["evaluation"]
        assert evaluation["coherence_score"] == 80
        assert evaluation["classification"]["pathway"] == "B"
        assert evaluation["breakdown"]["alignment_rule"] == "diatonic_minor"

    def test_rejected_still_exits_zero(self):
        result = runner.invoke(
            app,
            ["score", "--context", "xyz", "--interval", "perfect fifth", "--resolution", "none"],
        )
        assert result.exit_code == 0
        assert "Would be rejected" in result.output


class TestStateCommand:
    def test_show_missing_seed(self):
        result = runner.invoke(app, ["state", "show", "--seed-id", "1"])
        assert result.exit_code == ExitCode.NOT_FOUND

    def test_list(self):
        runner.invoke(app, ["init", "--seed-id", "2"])
        runner.invoke(app, ["init", "--seed-id", "10"])
        code, data = _json(["state", "list"])
        assert code == 0
        assert [row["Seed"] for row in data["seeds"]] == ["2", "10"]


class TestConfigCommand:
    def test_config_show(self):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "Program" in result.output
        assert "Mint" in result.output

    def test_config_set_invalid_key(self):
        result = runner.invoke(app, ["config", "set", "invalid.key", "value"])
        assert result.exit_code == 1
        assert "Unknown key" in result.output

    def test_config_unknown_action(self):
        result = runner.invoke(app, ["config", "unknown_action"])
        assert result.exit_code == 1
        assert "Unknown action" in result.output


class TestInputErrors:
    def test_state_show_negative_seed(self):
        result = runner.invoke(app, ["state", "show", "--seed-id", "-1"])
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert result.exit_code == ExitCode.VALIDATION_ERROR

    def test_account_create_empty_owner(self, funded):
        mint, _ = funded
        code, data = _json(["account", "create", "--mint", mint, "--owner", ""])
        assert code == ExitCode.VALIDATION_ERROR
        assert data["status"] == "error"

    def test_markup_in_claim_is_printed_literally(self, funded, tmp_path):
        mint, account = funded
        claim_path = tmp_path / "claim.yaml"
        claim_path.write_text(yaml.safe_dump({"context": "[/x] bold [red]", "salt": 3}))
        result = runner.invoke(
            app, ["bridge", "--mint", mint, "--account", account, "--claim", str(claim_path)]
        )
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert result.exit_code == ExitCode.VALIDATION_ERROR
        assert "Invalid claim" in result.output
        assert "[/x]" in result.output
