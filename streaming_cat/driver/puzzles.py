# =============================================================================
# STREAMING-CAT v1.0.0 -- DRIVER LAYER
# File:   streaming_cat/driver/puzzles.py
# =============================================================================
#
# SCOPE
# -----
# Executable stand-ins for the programs a streamed coin runs under:
#
#   StreamPuzzle  -- the streaming covenant; delegates to validate_spend().
#   CatLayer      -- outer asset layer; rewrites CREATE_COIN puzzle hashes so
#                    outputs stay inside the same asset. Supply accounting
#                    across a CAT ring is not modelled.
#   OwnerPuzzle   -- a party's wallet coin. Its solution is the list of
#                    conditions to emit. Ownership is modelled by puzzle hash
#                    alone; key checks are out of scope.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

from streaming_cat.core.covenant import (
    Condition,
    CreateCoin,
    SpendParameters,
    SpendRejectedError,
    StreamConsistencyError,
    StreamParameters,
    StreamState,
    cat_puzzle_hash,
    validate_spend,
)
from streaming_cat.utils.constants import BYTES32_LEN

from .coin import Coin, Puzzle


@dataclass(frozen=True)
class StreamPuzzle:
    """
    The streaming covenant curried with its parameters and state.

    The parameters are committed inside state.self_hash; a StreamPuzzle
    whose parameters do not hash to it cannot be constructed.
    """

    params: StreamParameters
    state:  StreamState

    def __post_init__(self) -> None:
        expected = self.params.self_hash()
        if self.state.self_hash != expected:
            raise StreamConsistencyError(
                field_a="state.self_hash",
                value_a=self.state.self_hash.hex(),
                field_b="params.self_hash()",
                value_b=expected.hex(),
                invariant_description="stream state must be curried from these parameters",
            )

    @property
    def puzzle_hash(self) -> bytes:
        return self.state.puzzle_hash()

    def run(self, coin: Coin, solution: Any) -> Tuple[Condition, ...]:
        if not isinstance(solution, SpendParameters):
            raise SpendRejectedError(
                rule_id="SPD-00",
                reason="solution must be SpendParameters; got " + type(solution).__name__,
                field_name="solution",
                value=solution,
            )
        return validate_spend(self.params, self.state, solution).conditions


@dataclass(frozen=True)
class CatLayer:
    asset_id: bytes
    inner:    Puzzle

    @property
    def puzzle_hash(self) -> bytes:
        return cat_puzzle_hash(self.asset_id, self.inner.puzzle_hash)

    def run(self, coin: Coin, solution: Any) -> Tuple[Condition, ...]:
        conditions = self.inner.run(coin, solution)
        return tuple(
            CreateCoin(cat_puzzle_hash(self.asset_id, c.puzzle_hash), c.amount, c.hints)
            if _wraps(c) else c
            for c in conditions
        )


def _wraps(condition: Any) -> bool:
    # A malformed CREATE_COIN is passed through for the ledger to reject.
    return (
        isinstance(condition, CreateCoin)
        and isinstance(condition.puzzle_hash, bytes)
        and len(condition.puzzle_hash) == BYTES32_LEN
    )


@dataclass(frozen=True)
class OwnerPuzzle:
    owner_puzzle_hash: bytes

    @property
    def puzzle_hash(self) -> bytes:
        return self.owner_puzzle_hash

    def run(self, coin: Coin, solution: Any) -> Tuple[Condition, ...]:
        if not isinstance(solution, (list, tuple)):
            raise SpendRejectedError(
                rule_id="SPD-00",
                reason="solution must be a sequence of conditions; got "
                + type(solution).__name__,
                field_name="solution",
                value=solution,
            )
        return tuple(solution)


__all__ = ["StreamPuzzle", "CatLayer", "OwnerPuzzle"]
