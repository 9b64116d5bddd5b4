"""Fungible-token primitive hosted on the ledger.

Provides mints, token accounts and ``mint_to``. Authority is verified by
re-deriving the signer address from the presented Capability and comparing
it with the mint's recorded authority. All writes join the caller's ledger
transaction, so a failed caller rolls the mint back too.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Protocol

from ..core.errors import MintRejected
from ..core.models import U64_MAX
from .derivation import Capability
from .ledger_db import STORAGE_INT_MAX, LedgerDB
from .schemas import TokenAccount, TokenMint

logger = logging.getLogger(__name__)

DEFAULT_DECIMALS = 6
MAX_SUPPLY = min(U64_MAX, STORAGE_INT_MAX)


class MintAuthority(Protocol):
    """The one operation the program needs from a token primitive."""

    def mint_to(
        self, mint: str, destination: str, amount: int, authority: Capability
    ) -> None:
        """Mint ``amount`` to ``destination`` or raise MintRejected."""
        ...


class TokenProgram:
    """SQLite-backed token mints and balances."""

    def __init__(self, db: LedgerDB):
        self.db = db

    def create_mint(
        self,
        authority: str,
        decimals: int = DEFAULT_DECIMALS,
        supply_cap: int | None = None,
    ) -> TokenMint:
        """Create a mint controlled by ``authority`` (an address)."""
        mint = TokenMint(
            address=uuid.uuid4().hex,
            authority=authority,
            decimals=decimals,
            supply_cap=supply_cap,
        )
        with self.db.transaction() as conn:
            conn.execute(
                """
                INSERT INTO mints (address, authority, decimals, supply, supply_cap, created_at)
                VALUES (?, ?, ?, 0, ?, ?)
                """,
                (
                    mint.address,
                    mint.authority,
                    mint.decimals,
                    mint.supply_cap,
                    datetime.now().isoformat(),
                ),
            )
        logger.debug("Created mint %s (authority=%s)", mint.address, authority)
        return mint

    def get_mint(self, address: str) -> TokenMint | None:
        row = self.db.fetch_one("SELECT * FROM mints WHERE address = ?", (address,))
        if not row:
            return None
        return TokenMint(
            address=row["address"],
            authority=row["authority"],
            decimals=row["decimals"],
            supply=row["supply"],
            supply_cap=row["supply_cap"],
        )

    def create_account(self, mint: str, owner: str) -> TokenAccount:
        """Open a zero-balance token account for ``owner`` on ``mint``."""
        if self.get_mint(mint) is None:
            raise LookupError(f"Unknown mint: {mint}")
        account = TokenAccount(address=uuid.uuid4().hex, mint=mint, owner=owner)
        with self.db.transaction() as conn:
            conn.execute(
                """
                INSERT INTO token_accounts (address, mint, owner, amount, created_at)
                VALUES (?, ?, ?, 0, ?)
                """,
                (account.address, mint, owner, datetime.now().isoformat()),
            )
        return account

    def get_account(self, address: str) -> TokenAccount | None:
        row = self.db.fetch_one(
            "SELECT * FROM token_accounts WHERE address = ?", (address,)
        )
        if not row:
            return None
        return TokenAccount(
            address=row["address"],
            mint=row["mint"],
            owner=row["owner"],
            amount=row["amount"],
        )

    def get_balance(self, address: str) -> int:
        account = self.get_account(address)
        if account is None:
            raise LookupError(f"Unknown token account: {address}")
        return account.amount

    def mint_to(
        self, mint: str, destination: str, amount: int, authority: Capability
    ) -> None:
        """Mint new units to a token account.

        Raises:
            MintRejected: On unknown mint/account, mint mismatch, authority
                mismatch, non-positive amount or supply overflow/cap.
        """
        if amount <= 0:
            raise MintRejected("amount must be positive", amount=amount)

        with self.db.transaction():
            token_mint = self.get_mint(mint)
            if token_mint is None:
                raise MintRejected("unknown mint", mint=mint)

            account = self.get_account(destination)
            if account is None:
                raise MintRejected("unknown destination account", destination=destination)
            if account.mint != mint:
                raise MintRejected(
                    "destination account belongs to a different mint",
                    destination=destination,
                )

            signer = authority.signer_address()
            if signer != token_mint.authority:
                raise MintRejected(
                    "authority mismatch", expected=token_mint.authority, signer=signer
                )

            new_supply = token_mint.supply + amount
            if new_supply > MAX_SUPPLY:
                raise MintRejected("supply overflow", supply=token_mint.supply)
            if token_mint.supply_cap is not None and new_supply > token_mint.supply_cap:
                raise MintRejected(
                    "supply cap exceeded",
                    supply=token_mint.supply,
                    supply_cap=token_mint.supply_cap,
                )

            self.db.conn.execute(
                "UPDATE mints SET supply = supply + ? WHERE address = ?",
                (amount, mint),
            )
            self.db.conn.execute(
                "UPDATE token_accounts SET amount = amount + ? WHERE address = ?",
                (amount, destination),
            )
        logger.debug("Minted %d to %s on mint %s", amount, destination, mint)
