# =============================================================================
# STREAMING-CAT v1.0.0 -- COVENANT LAYER
# File:   streaming_cat/core/covenant/validator.py
# =============================================================================
#
# SCOPE
# -----
# Spend Validator / Transition Engine. Public symbols:
#
#   RequiredEffects  -- frozen dataclass; output of an accepted spend.
#   SpendDecision    -- frozen dataclass; non-raising view of a decision.
#   validate_spend   -- accept (return effects) or raise SpendRejectedError.
#   evaluate_spend   -- same decision, returned as a SpendDecision.
#
# VALIDATION SEQUENCE
# -------------------
# Every step is mandatory; the first failure rejects the whole spend and no
# condition is returned.
#
#   1. Amount binding       AssertMyAmount(my_amount)
#   2. Payout correctness   to_pay == required_payout(...)      SPD-01/02/04
#   3. Timing gate          clawback -> AssertBeforeSecondsAbsolute
#                           claim    -> AssertSecondsAbsolute
#                           a claim must advance last_payment_time  SPD-03
#   4. Recipient payout     CreateCoin(recipient, to_pay) when to_pay > 0
#   5. Remainder            clawback -> CreateCoin(clawback, remainder)
#                           claim    -> CreateCoin(successor, remainder)
#                           nothing when to_pay == my_amount
#   6. Authorization        ReceiveMessage from clawback / recipient
#
# Conditions are emitted in this order. Ledger time and companion
# authorisation cannot be observed here; they are demanded as conditions
# and checked by the ledger.
#
# DETERMINISM CONSTRAINTS
# -----------------------
# DET-01  No I/O, no clocks, no logging, no randomness.
# DET-02  Inputs are frozen and never mutated.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .conditions import (
    Condition,
    emit_amount_binding,
    emit_authorization,
    emit_clawback_remainder,
    emit_recipient_payout,
    emit_successor,
    emit_timing_gate,
)
from .domain import SpendParameters, StreamParameters, StreamState
from .exceptions import SpendRejectedError
from .identity import successor_identity
from .vesting import check_payout


# =============================================================================
# SECTION 1 -- OUTPUT CONTRACTS
# =============================================================================

@dataclass(frozen=True)
class RequiredEffects:
    """
    Everything an accepted spend demands from the ledger.

    Attributes:
        conditions:             Ordered conditions the ledger must verify.
        payout:                 Amount paid to the recipient (may be 0).
        remainder:              my_amount - payout.
        successor_puzzle_hash:  Identity of the new stream coin, or None when
                                the stream ends with this spend.
        clawback:               Echo of the spend's clawback flag.

    Invariant: payout + remainder == the spent coin's amount.
    """

    conditions:            Tuple[Condition, ...]
    payout:                int
    remainder:             int
    successor_puzzle_hash: Optional[bytes]
    clawback:              bool

    @property
    def terminates(self) -> bool:
        return self.successor_puzzle_hash is None


@dataclass(frozen=True)
class SpendDecision:
    """
    Non-raising result of evaluate_spend().

    Exactly one of effects / rejection is set.
    """

    accepted:  bool
    effects:   Optional[RequiredEffects]
    rejection: Optional[SpendRejectedError]


# =============================================================================
# SECTION 2 -- VALIDATE SPEND
# =============================================================================

def _check_advances(state: StreamState, spend: SpendParameters) -> None:
    """A normal claim must move last_payment_time strictly forward."""
    if not spend.clawback and spend.payment_time <= state.last_payment_time:
        raise SpendRejectedError(
            rule_id="SPD-03",
            reason=(
                "claim must advance last_payment_time "
                + str(state.last_payment_time)
                + "; got payment_time "
                + str(spend.payment_time)
            ),
            field_name="payment_time",
            value=spend.payment_time,
        )


def validate_spend(
    params: StreamParameters,
    state:  StreamState,
    spend:  SpendParameters,
) -> RequiredEffects:
    """
    Decide a proposed spend of a stream coin.

    Pure: reads its three arguments and returns the conditions the ledger
    must enforce for the spend to be final.

    Args:
        params:  Immutable stream parameters curried into the coin.
        state:   self_hash and last_payment_time curried into the coin.
        spend:   The spender's solution.

    Returns:
        RequiredEffects for an accepted spend.

    Raises:
        SpendRejectedError for any failed check. Nothing is emitted.
    """
    # --- Step 2: payout correctness (window + exact vesting) ---
    to_pay = check_payout(
        my_amount=spend.my_amount,
        last_payment_time=state.last_payment_time,
        end_time=params.end_time,
        payment_time=spend.payment_time,
        to_pay=spend.to_pay,
    )

    # --- Step 3: a claim must advance the checkpoint ---
    _check_advances(state, spend)

    remainder = spend.my_amount - to_pay
    successor: Optional[bytes] = None

    conditions: Tuple[Condition, ...] = (
        emit_amount_binding(spend)
        + emit_timing_gate(spend)
        + emit_recipient_payout(params, to_pay)
    )

    # --- Step 5: remainder disposition ---
    if remainder != 0:
        if spend.clawback:
            conditions += emit_clawback_remainder(params, remainder)
        else:
            successor = successor_identity(
                state.self_hash, state.self_hash, spend.payment_time
            )
            conditions += emit_successor(params, successor, remainder)

    # --- Step 6: companion authorisation ---
    conditions += emit_authorization(params, spend)

    return RequiredEffects(
        conditions=conditions,
        payout=to_pay,
        remainder=remainder,
        successor_puzzle_hash=successor,
        clawback=spend.clawback,
    )


# =============================================================================
# SECTION 3 -- EVALUATE SPEND
# =============================================================================

def evaluate_spend(
    params: StreamParameters,
    state:  StreamState,
    spend:  SpendParameters,
) -> SpendDecision:
    """
    Same decision as validate_spend(), returned instead of raised.

    Only SpendRejectedError is converted; any other exception propagates.
    """
    try:
        effects = validate_spend(params, state, spend)
    except SpendRejectedError as exc:
        return SpendDecision(accepted=False, effects=None, rejection=exc)
    return SpendDecision(accepted=True, effects=effects, rejection=None)


__all__ = [
    "RequiredEffects",
    "SpendDecision",
    "validate_spend",
    "evaluate_spend",
]
