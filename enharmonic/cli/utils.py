"""CLI utilities for dual-mode output (human-friendly + machine-readable).

This module provides utilities for CLI commands to support both:
- Human mode (default): Rich formatting with colors and tables
- Machine mode (--json): Structured JSON output for scripts and clients

Example:
    from ..utils import Output, ExitCode

    @app.command()
    def my_command():
        out = Output(console=console, json_mode=get_json_mode())
        out.success("Initialized seed", seed_id=65)
        raise typer.Exit(out.finish())
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, PrivateAttr, ConfigDict
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.errors import EnharmonicError, SeedInactive, SeedNotFound


class ExitCode:
    """Standardized exit codes for CLI commands.

    Clients can check $? and know what failed:
        0 = Success
        1 = Validation error (bad arguments or claim file)
        2 = Claim rejected (try better wording: salt, coherence, interpretation)
        3 = Not found (seed, mint or token account)
        4 = System/config fault (already initialized, mint rejected)
        5 = Seed inactive
    """

    SUCCESS = 0
    VALIDATION_ERROR = 1
    CLAIM_REJECTED = 2
    NOT_FOUND = 3
    SYSTEM_FAULT = 4
    SEED_INACTIVE = 5


def exit_code_for(error: EnharmonicError) -> int:
    """Map a program error to its CLI exit code."""
    if error.user_fixable:
        return ExitCode.CLAIM_REJECTED
    if isinstance(error, SeedNotFound):
        return ExitCode.NOT_FOUND
    if isinstance(error, SeedInactive):
        return ExitCode.SEED_INACTIVE
    # AlreadyExists, MintRejected
    return ExitCode.SYSTEM_FAULT


class Output(BaseModel):
    """Dual-mode output handler for CLI commands.

    In human mode: Uses Rich for pretty terminal output with colors and formatting.
    In JSON mode: Collects structured data and outputs JSON at the end.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    console: Console
    json_mode: bool = False

    _data: dict[str, Any] = PrivateAttr()
    _exit_code: int = PrivateAttr(default=ExitCode.SUCCESS)

    def model_post_init(self, __context: Any) -> None:
        self._data = {
            "status": "success",
            "errors": [],
        }

    def success(self, message: str, **data: Any) -> None:
        """Output a success message with optional data."""
        if self.json_mode:
            self._data.update(data)
        else:
            self.console.print(f"[green]✓[/green] {message}")

    def error(
        self,
        message: str,
        *,
        code: str | None = None,
        suggestion: str | None = None,
        exit_code: int = ExitCode.VALIDATION_ERROR,
    ) -> None:
        """Output an error message and set exit code."""
        self._exit_code = exit_code
        self._data["status"] = "error"

        if self.json_mode:
            error_obj: dict[str, Any] = {"message": message}
            if code:
                error_obj["code"] = code
            if suggestion:
                error_obj["suggestion"] = suggestion
            self._data["errors"].append(error_obj)
        else:
            self.console.print(f"[red]✗[/red] {escape(message)}")
            if suggestion:
                self.console.print(f"  [dim]→ {escape(suggestion)}[/dim]")

    def program_error(self, error: EnharmonicError) -> None:
        """Report a program error with its code and mapped exit code."""
        suggestion = None
        if error.user_fixable:
            suggestion = "Reword the claim and try again"
        self.error(
            error.message,
            code=error.code,
            suggestion=suggestion,
            exit_code=exit_code_for(error),
        )
        if self.json_mode and error.details:
            self._data["errors"][-1]["details"] = dict(error.details)

    def text(self, message: str) -> None:
        """Output plain text (human mode only)."""
        if not self.json_mode:
            self.console.print(message)

    def table(
        self,
        title: str,
        columns: list[str],
        rows: list[list[str]],
        *,
        data_key: str | None = None,
    ) -> None:
        """Output a formatted table.

        Args:
            title: Table title
            columns: Column headers
            rows: Table rows (list of lists)
            data_key: Key to use in JSON output (defaults to snake_case of title)
        """
        key = data_key or title.lower().replace(" ", "_")

        if self.json_mode:
            self._data[key] = [dict(zip(columns, row)) for row in rows]
        else:
            table = Table(title=title, show_header=True, header_style="bold")
            for i, col in enumerate(columns):
                justify = "right" if i > 0 else "left"
                table.add_column(col, justify=justify)
            for row in rows:
                table.add_row(*row)
            self.console.print(table)

    def set_data(self, key: str, value: Any) -> None:
        """Set arbitrary data in JSON output."""
        self._data[key] = value

    def finish(self) -> int:
        """Finalize output and return exit code.

        In JSON mode, prints the accumulated data as JSON to stdout.
        """
        if self.json_mode:
            self._data["exit_code"] = self._exit_code
            print(json.dumps(self._data, indent=2, default=str))

        return self._exit_code
