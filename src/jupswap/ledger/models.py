"""Ledger state models."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

LAMPORTS_PER_SOL = 10**9
SOL_DECIMALS = 9


@dataclass(frozen=True)
class TokenHolding:
    """A single balance held by a wallet.

    One per token account with a non-zero balance, plus one synthetic
    holding for native SOL.
    """

    mint: str
    amount: int  # raw base units
    decimals: int
    ui_amount: Decimal
    account: str  # token account address (wallet address for native SOL)
    owner: str
    is_native: bool = False

    @classmethod
    def native(cls, wallet: str, lamports: int, mint: str) -> "TokenHolding":
        """Synthetic holding for the wallet's SOL balance."""
        return cls(
            mint=mint,
            amount=lamports,
            decimals=SOL_DECIMALS,
            ui_amount=Decimal(lamports) / Decimal(LAMPORTS_PER_SOL),
            account=wallet,
            owner=wallet,
            is_native=True,
        )


# ======================
# jsonParsed token account schema (getTokenAccountsByOwner)
# ======================


class ParsedTokenAmount(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    amount: str
    decimals: int = Field(..., ge=0)
    ui_amount_string: str = Field(..., alias="uiAmountString")
    ui_amount: Optional[float] = Field(None, alias="uiAmount")


class ParsedTokenAccountInfo(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    mint: str
    owner: str
    token_amount: ParsedTokenAmount = Field(..., alias="tokenAmount")
    is_native: bool = Field(False, alias="isNative")


class ParsedTokenAccount(BaseModel):
    """``account.data.parsed`` of an SPL token account."""

    model_config = ConfigDict(extra="allow")

    type: str
    info: ParsedTokenAccountInfo
