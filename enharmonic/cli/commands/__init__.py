"""CLI commands for Enharmonic."""

from . import (
    init_cmd,
    mint,
    account,
    bridge,
    score,
    state,
    config_cmd,
)

__all__ = [
    "init_cmd",
    "mint",
    "account",
    "bridge",
    "score",
    "state",
    "config_cmd",
]
