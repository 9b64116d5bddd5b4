"""Hosting collaborators: ledger storage, token primitive and derivation."""

from .ledger_db import LedgerDB, open_ledger_db, STORAGE_INT_MAX
from .derivation import (
    Capability,
    ProgramAuthority,
    DEFAULT_PROGRAM_ID,
    SEED_STATE_NAMESPACE,
    derive_address,
    seed_bytes,
)
from .schemas import TokenMint, TokenAccount
from .token import MintAuthority, TokenProgram, DEFAULT_DECIMALS, MAX_SUPPLY

__all__ = [
    "LedgerDB",
    "open_ledger_db",
    "STORAGE_INT_MAX",
    "Capability",
    "ProgramAuthority",
    "DEFAULT_PROGRAM_ID",
    "SEED_STATE_NAMESPACE",
    "derive_address",
    "seed_bytes",
    "TokenMint",
    "TokenAccount",
    "MintAuthority",
    "TokenProgram",
    "DEFAULT_DECIMALS",
    "MAX_SUPPLY",
]
