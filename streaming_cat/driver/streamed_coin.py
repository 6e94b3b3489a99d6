# =============================================================================
# STREAMING-CAT v1.0.0 -- DRIVER LAYER
# File:   streaming_cat/driver/streamed_coin.py
# =============================================================================
#
# SCOPE
# -----
# Wallet-side driver for one coin of a stream. Builds spends the covenant
# will accept, follows the chain from a parent spend to its successor, and
# encodes the launch hints indexers use to rediscover a stream.
#
# Everything here is derived from the covenant's public functions; no
# vesting or acceptance rule is re-implemented.
#
# LAUNCH HINTS
# ------------
#   (stream_hint(recipient), recipient, clawback, start_time, end_time)
#
# Times are int atoms. The first hint matches the hint every successor coin
# carries, so one lookup finds the whole chain.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from streaming_cat.core.covenant import (
    CreateCoin,
    SpendParameters,
    StreamConsistencyError,
    StreamParameters,
    StreamState,
    StreamValidationError,
    authorization_message,
    int_atom,
    required_payout,
    stream_hint,
    transition,
)
from streaming_cat.core.covenant.identity import atom_int, outer_puzzle_hash

from .coin import Coin, CoinSpend, Puzzle
from .puzzles import CatLayer, OwnerPuzzle, StreamPuzzle


# =============================================================================
# SECTION 1 -- LAUNCH HINTS
# =============================================================================

def launch_hints(params: StreamParameters, start_time: int) -> Tuple[bytes, ...]:
    return (
        stream_hint(params.recipient),
        params.recipient,
        params.clawback,
        int_atom(start_time),
        int_atom(params.end_time),
    )


def parse_launch_hints(hints: Sequence[bytes]) -> Tuple[StreamParameters, int]:
    """
    Recover (params, start_time) from launch_hints() output.

    Raises:
        StreamValidationError if the hints are not a stream launch.
    """
    if len(hints) != 5:
        raise StreamValidationError(
            field_name="hints",
            value=len(hints),
            constraint="must contain exactly 5 entries",
        )
    marker, recipient, clawback, start_atom, end_atom = hints
    params = StreamParameters(
        recipient=recipient,
        clawback=clawback,
        end_time=atom_int(end_atom),
    )
    if marker != stream_hint(recipient):
        raise StreamValidationError(
            field_name="hints[0]",
            value=marker,
            constraint="must equal stream_hint(recipient)",
        )
    return params, atom_int(start_atom)


# =============================================================================
# SECTION 2 -- STREAMED COIN
# =============================================================================

@dataclass(frozen=True)
class StreamedCoin:
    """
    A live stream coin together with everything needed to spend it.

    Attributes:
        coin:      The ledger coin.
        params:    Immutable stream parameters.
        state:     Curried state (self_hash, last_payment_time).
        asset_id:  CAT asset id when the stream carries a CAT, else None.

    Construction fails with StreamConsistencyError if the coin's puzzle
    hash is not the one these parameters and state produce.
    """

    coin:     Coin
    params:   StreamParameters
    state:    StreamState
    asset_id: Optional[bytes] = None

    def __post_init__(self) -> None:
        if self.coin.puzzle_hash != self.puzzle_hash:
            raise StreamConsistencyError(
                field_a="coin.puzzle_hash",
                value_a=self.coin.puzzle_hash.hex(),
                field_b="puzzle_hash",
                value_b=self.puzzle_hash.hex(),
                invariant_description="coin must be locked by this stream's puzzle",
            )

    # -----------------------------------------------------------------------
    # Identity
    # -----------------------------------------------------------------------

    @property
    def inner_puzzle_hash(self) -> bytes:
        return self.state.puzzle_hash()

    @property
    def puzzle_hash(self) -> bytes:
        return outer_puzzle_hash(self.inner_puzzle_hash, self.asset_id)

    def puzzle(self) -> Puzzle:
        inner = StreamPuzzle(self.params, self.state)
        if self.asset_id is None:
            return inner
        return CatLayer(self.asset_id, inner)

    # -----------------------------------------------------------------------
    # Launch
    # -----------------------------------------------------------------------

    @classmethod
    def launch(
        cls,
        parent_coin_info: bytes,
        amount:           int,
        params:           StreamParameters,
        start_time:       int,
        asset_id:         Optional[bytes] = None,
    ) -> "StreamedCoin":
        """
        The first coin of a new stream, as created by the funder's spend of
        parent_coin_info.
        """
        state = StreamState.genesis(params, start_time)
        puzzle_hash = outer_puzzle_hash(state.puzzle_hash(), asset_id)
        return cls(
            coin=Coin(parent_coin_info, puzzle_hash, amount),
            params=params,
            state=state,
            asset_id=asset_id,
        )

    # -----------------------------------------------------------------------
    # Claims
    # -----------------------------------------------------------------------

    def claimable(self, now: int) -> int:
        """Payout a normal claim at ledger time now would carry."""
        payment_time = min(max(now, self.state.last_payment_time), self.params.end_time)
        return required_payout(
            self.coin.amount,
            self.state.last_payment_time,
            self.params.end_time,
            payment_time,
        )

    def spend_parameters(self, payment_time: int, clawback: bool = False) -> SpendParameters:
        """Solution with to_pay computed exactly; the window is not checked."""
        last = self.state.last_payment_time
        end = self.params.end_time
        to_pay = 0
        if last < end and last <= payment_time <= end:
            to_pay = required_payout(self.coin.amount, last, end, payment_time)
        return SpendParameters(
            my_amount=self.coin.amount,
            payment_time=payment_time,
            to_pay=to_pay,
            clawback=clawback,
        )

    def build_spend(self, payment_time: int, clawback: bool = False) -> CoinSpend:
        return CoinSpend(
            coin=self.coin,
            puzzle=self.puzzle(),
            solution=self.spend_parameters(payment_time, clawback),
        )

    def authorization_spend(
        self,
        owner_coin:   Coin,
        payment_time: int,
        clawback:     bool = False,
    ) -> CoinSpend:
        """
        Companion spend from the recipient (claim) or clawback party
        (clawback) announcing payment_time to this coin. The owner coin's
        value is returned to its own puzzle hash.
        """
        expected = self.params.clawback if clawback else self.params.recipient
        if owner_coin.puzzle_hash != expected:
            raise StreamConsistencyError(
                field_a="owner_coin.puzzle_hash",
                value_a=owner_coin.puzzle_hash.hex(),
                field_b="clawback" if clawback else "recipient",
                value_b=expected.hex(),
                invariant_description="authorising coin must belong to the entitled party",
            )
        return CoinSpend(
            coin=owner_coin,
            puzzle=OwnerPuzzle(owner_coin.puzzle_hash),
            solution=(
                authorization_message(payment_time, self.coin.coin_id()),
                CreateCoin(owner_coin.puzzle_hash, owner_coin.amount),
            ),
        )

    # -----------------------------------------------------------------------
    # Lineage
    # -----------------------------------------------------------------------

    def child_from_spend(self, spend: SpendParameters) -> Optional["StreamedCoin"]:
        """
        Successor coin created by spending this coin with spend, or None
        when the spend ends the stream.

        Raises:
            SpendRejectedError if the covenant would reject spend.
        """
        result = transition(self.params, self.state, spend)
        if result.successor_state is None:
            return None
        successor_state = result.successor_state
        return StreamedCoin(
            coin=Coin(
                self.coin.coin_id(),
                outer_puzzle_hash(successor_state.puzzle_hash(), self.asset_id),
                result.effects.remainder,
            ),
            params=self.params,
            state=successor_state,
            asset_id=self.asset_id,
        )

    @classmethod
    def from_parent_spend(cls, parent_spend: CoinSpend) -> Optional["StreamedCoin"]:
        """
        Follow a stream from an observed spend of one of its coins.

        Returns None if the spent coin was not a stream coin or the spend
        ended the stream.
        """
        puzzle = parent_spend.puzzle
        asset_id: Optional[bytes] = None
        if isinstance(puzzle, CatLayer):
            asset_id = puzzle.asset_id
            puzzle = puzzle.inner
        if not isinstance(puzzle, StreamPuzzle):
            return None
        parent = cls(
            coin=parent_spend.coin,
            params=puzzle.params,
            state=puzzle.state,
            asset_id=asset_id,
        )
        return parent.child_from_spend(parent_spend.solution)


__all__ = [
    "StreamedCoin",
    "launch_hints",
    "parse_launch_hints",
]
