# =============================================================================
# STREAMING-CAT v1.0.0 -- DRIVER LAYER
# File:   streaming_cat/driver/coin.py
# =============================================================================
#
# SCOPE
# -----
# Ledger value records and spend envelopes:
#
#   Coin       -- (parent_coin_info, puzzle_hash, amount); id is content hash.
#   Puzzle     -- protocol every spending rule in this package implements.
#   CoinSpend  -- one coin, the puzzle that governs it, and a solution.
#
# Coin ids must match the ledger bit-for-bit:
#   coin_id = sha256(parent_coin_info || puzzle_hash || int_atom(amount))
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from hashlib import sha256
from typing import Any, Protocol, Tuple

from streaming_cat.core.covenant import Condition, StreamValidationError, int_atom
from streaming_cat.utils.constants import BYTES32_LEN, U64_MAX


@dataclass(frozen=True)
class Coin:
    """
    One unit of held value on the ledger.

    Attributes:
        parent_coin_info:  Id of the coin whose spend created this one.
        puzzle_hash:       Identity of the spending rule.
        amount:            Held value in mojos.
    """

    parent_coin_info: bytes
    puzzle_hash:      bytes
    amount:           int

    def __post_init__(self) -> None:
        for name in ("parent_coin_info", "puzzle_hash"):
            value = getattr(self, name)
            if not isinstance(value, bytes) or len(value) != BYTES32_LEN:
                raise StreamValidationError(
                    field_name=name,
                    value=value,
                    constraint="must be exactly 32 bytes",
                )
        if (
            not isinstance(self.amount, int)
            or isinstance(self.amount, bool)
            or not (0 <= self.amount <= U64_MAX)
        ):
            raise StreamValidationError(
                field_name="amount",
                value=self.amount,
                constraint="must be an integer in [0, 2**64 - 1]",
            )

    def coin_id(self) -> bytes:
        return sha256(self.parent_coin_info + self.puzzle_hash + int_atom(self.amount)).digest()


class Puzzle(Protocol):
    """A spending rule: an identity plus a solution -> conditions function."""

    @property
    def puzzle_hash(self) -> bytes: ...

    def run(self, coin: Coin, solution: Any) -> Tuple[Condition, ...]: ...


@dataclass(frozen=True)
class CoinSpend:
    coin:     Coin
    puzzle:   Puzzle
    solution: Any


__all__ = ["Coin", "Puzzle", "CoinSpend"]
