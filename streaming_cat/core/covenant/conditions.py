# =============================================================================
# STREAMING-CAT v1.0.0 -- COVENANT LAYER
# File:   streaming_cat/core/covenant/conditions.py
# =============================================================================
#
# SCOPE
# -----
# Ledger Assertion Emitter. Declarative conditions a spend returns to the
# ledger, and the helpers that build the covenant's conditions from a
# decision already taken by the validator.
#
# The covenant never executes effects. It only demands them; the ledger
# verifies every condition independently before finalising a transaction.
#
# CONDITION TYPES
# ---------------
#   CreateCoin                   (51 puzzle_hash amount hints)
#   SendMessage                  (66 mode message receiver_coin_id)
#   ReceiveMessage               (67 mode message sender_puzzle_hash)
#   AssertMyAmount               (73 amount)
#   AssertSecondsAbsolute        (81 seconds)   ledger time >= seconds
#   AssertBeforeSecondsAbsolute  (85 seconds)   ledger time <  seconds
#
# WHAT IS NOT IN THIS FILE
# ------------------------
#   No accept / reject decisions.
#   No vesting arithmetic.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from streaming_cat.utils.constants import (
    ASSERT_BEFORE_SECONDS_ABSOLUTE,
    ASSERT_MY_AMOUNT,
    ASSERT_SECONDS_ABSOLUTE,
    CREATE_COIN,
    MESSAGE_MODE_PUZZLE_TO_COIN,
    RECEIVE_MESSAGE,
    SEND_MESSAGE,
)

from .domain import SpendParameters, StreamParameters
from .identity import int_atom, stream_hint


# =============================================================================
# SECTION 1 -- CONDITION TYPES
# =============================================================================

@dataclass(frozen=True)
class CreateCoin:
    puzzle_hash: bytes
    amount:      int
    hints:       Tuple[bytes, ...] = ()

    opcode = CREATE_COIN

    def as_list(self) -> list:
        out: list = [self.opcode, self.puzzle_hash.hex(), self.amount]
        if self.hints:
            out.append([h.hex() for h in self.hints])
        return out


@dataclass(frozen=True)
class SendMessage:
    mode:             int
    message:          bytes
    receiver_coin_id: bytes

    opcode = SEND_MESSAGE

    def as_list(self) -> list:
        return [self.opcode, self.mode, self.message.hex(), self.receiver_coin_id.hex()]


@dataclass(frozen=True)
class ReceiveMessage:
    mode:               int
    message:            bytes
    sender_puzzle_hash: bytes

    opcode = RECEIVE_MESSAGE

    def as_list(self) -> list:
        return [self.opcode, self.mode, self.message.hex(), self.sender_puzzle_hash.hex()]


@dataclass(frozen=True)
class AssertMyAmount:
    amount: int

    opcode = ASSERT_MY_AMOUNT

    def as_list(self) -> list:
        return [self.opcode, self.amount]


@dataclass(frozen=True)
class AssertSecondsAbsolute:
    seconds: int

    opcode = ASSERT_SECONDS_ABSOLUTE

    def as_list(self) -> list:
        return [self.opcode, self.seconds]


@dataclass(frozen=True)
class AssertBeforeSecondsAbsolute:
    seconds: int

    opcode = ASSERT_BEFORE_SECONDS_ABSOLUTE

    def as_list(self) -> list:
        return [self.opcode, self.seconds]


Condition = Union[
    CreateCoin,
    SendMessage,
    ReceiveMessage,
    AssertMyAmount,
    AssertSecondsAbsolute,
    AssertBeforeSecondsAbsolute,
]


# =============================================================================
# SECTION 2 -- EMITTERS
# =============================================================================
# One helper per step of the spend validation sequence. Each returns a tuple
# so the validator can concatenate them in a fixed order.

def emit_amount_binding(spend: SpendParameters) -> Tuple[Condition, ...]:
    return (AssertMyAmount(spend.my_amount),)


def emit_timing_gate(spend: SpendParameters) -> Tuple[Condition, ...]:
    """
    Clawback: ledger time strictly before payment_time.
    Claim:    ledger time at or after payment_time.
    """
    if spend.clawback:
        return (AssertBeforeSecondsAbsolute(spend.payment_time),)
    return (AssertSecondsAbsolute(spend.payment_time),)


def emit_recipient_payout(params: StreamParameters, to_pay: int) -> Tuple[Condition, ...]:
    if to_pay == 0:
        return ()
    return (CreateCoin(params.recipient, to_pay, (params.recipient,)),)


def emit_clawback_remainder(params: StreamParameters, remainder: int) -> Tuple[Condition, ...]:
    return (CreateCoin(params.clawback, remainder, (params.clawback,)),)


def emit_successor(
    params:                StreamParameters,
    successor_puzzle_hash: bytes,
    remainder:             int,
) -> Tuple[Condition, ...]:
    return (CreateCoin(successor_puzzle_hash, remainder, (stream_hint(params.recipient),)),)


def emit_authorization(params: StreamParameters, spend: SpendParameters) -> Tuple[Condition, ...]:
    """
    Require a companion spend, in the same bundle, from the party entitled to
    this kind of spend, announcing payment_time to this coin.
    """
    sender = params.clawback if spend.clawback else params.recipient
    return (
        ReceiveMessage(
            mode=MESSAGE_MODE_PUZZLE_TO_COIN,
            message=int_atom(spend.payment_time),
            sender_puzzle_hash=sender,
        ),
    )


def authorization_message(
    payment_time:     int,
    receiver_coin_id: bytes,
) -> SendMessage:
    """The SendMessage a companion spend emits to satisfy emit_authorization()."""
    return SendMessage(
        mode=MESSAGE_MODE_PUZZLE_TO_COIN,
        message=int_atom(payment_time),
        receiver_coin_id=receiver_coin_id,
    )


__all__ = [
    "CreateCoin",
    "SendMessage",
    "ReceiveMessage",
    "AssertMyAmount",
    "AssertSecondsAbsolute",
    "AssertBeforeSecondsAbsolute",
    "Condition",
    "emit_amount_binding",
    "emit_timing_gate",
    "emit_recipient_payout",
    "emit_clawback_remainder",
    "emit_successor",
    "emit_authorization",
    "authorization_message",
]
