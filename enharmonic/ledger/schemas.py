"""Pydantic schemas for token ledger rows."""

from __future__ import annotations

from pydantic import BaseModel, Field


class TokenMint(BaseModel):
    """A fungible-token mint and its authority."""

    address: str
    authority: str
    decimals: int = Field(default=6, ge=0, le=18)
    supply: int = Field(default=0, ge=0)
    supply_cap: int | None = Field(default=None, ge=0)


class TokenAccount(BaseModel):
    """A holder's balance for one mint."""

    address: str
    mint: str
    owner: str = Field(min_length=1)
    amount: int = Field(default=0, ge=0)
