# =============================================================================
# STREAMING-CAT v1.0.0 -- COVENANT LAYER
# File:   streaming_cat/core/covenant/domain.py
# =============================================================================
#
# SCOPE
# -----
# Frozen domain dataclasses for covenant inputs:
#
#   StreamParameters  -- immutable, fixed when the stream is launched.
#   StreamState       -- curried into each coin; advances one field per hop.
#   SpendParameters   -- the spender's one-shot solution.
#
# No vesting arithmetic. No condition emission. No accept / reject logic.
#
# VALIDATION PHILOSOPHY
# ---------------------
# Validation is fail-fast, in fixed order per dataclass:
#
#   V1  Type         -- ints are ints (bool excluded), identities are bytes.
#                       Raises StreamValidationError.
#   V2  Range        -- ints in [0, U64_MAX], identities exactly 32 bytes.
#                       Raises StreamValidationError.
#
# Relations between parameters, state and spend (e.g. payment time inside
# the remaining window) are NOT checked here. They decide whether a spend is
# accepted, and that decision belongs to the validator.
#
# There is NO silent coercion. No float is ever accepted.
#
# INVARIANTS ENFORCED
# -------------------
#   INV-SP-01  recipient, clawback: 32 bytes.
#   INV-SP-02  end_time: int in [0, U64_MAX].
#   INV-ST-01  self_hash: 32 bytes.
#   INV-ST-02  last_payment_time: int in [0, U64_MAX].
#   INV-SN-01  my_amount, payment_time, to_pay: int in [0, U64_MAX].
#   INV-SN-02  clawback: bool.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass

from streaming_cat.utils.constants import BYTES32_LEN, U64_MAX

from .exceptions import StreamConsistencyError, StreamValidationError
from .identity import stream_self_hash, successor_identity


# =============================================================================
# SECTION 1 -- INTERNAL VALIDATION HELPERS
# =============================================================================

def _check_u64(field_name: str, value: int) -> None:
    """V1 + V2: value must be an int (not bool) in [0, U64_MAX]."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise StreamValidationError(
            field_name=field_name,
            value=value,
            constraint="must be an integer",
        )
    if not (0 <= value <= U64_MAX):
        raise StreamValidationError(
            field_name=field_name,
            value=value,
            constraint="must be in [0, 2**64 - 1]",
        )


def _check_bytes32(field_name: str, value: bytes) -> None:
    """V1 + V2: value must be bytes of length 32."""
    if not isinstance(value, bytes):
        raise StreamValidationError(
            field_name=field_name,
            value=value,
            constraint="must be bytes",
        )
    if len(value) != BYTES32_LEN:
        raise StreamValidationError(
            field_name=field_name,
            value=value,
            constraint="must be exactly 32 bytes",
        )


def _check_bool(field_name: str, value: bool) -> None:
    if not isinstance(value, bool):
        raise StreamValidationError(
            field_name=field_name,
            value=value,
            constraint="must be a bool",
        )


# =============================================================================
# SECTION 2 -- STREAM PARAMETERS
# =============================================================================

@dataclass(frozen=True)
class StreamParameters:
    """
    Immutable parameters of one stream, shared by every coin in its chain.

    Attributes:
        recipient:  Puzzle hash the vested amount is paid to. Also the
                    address whose companion spend authorises normal claims.
        clawback:   Puzzle hash that may terminate the stream and receives
                    the unvested remainder.
        end_time:   Absolute timestamp (seconds) at which the full amount
                    has vested. Never changes.
    """

    recipient: bytes
    clawback:  bytes
    end_time:  int

    def __post_init__(self) -> None:
        _check_bytes32("recipient", self.recipient)
        _check_bytes32("clawback", self.clawback)
        _check_u64("end_time", self.end_time)

    def self_hash(self) -> bytes:
        """First-stage curried identity; carried as StreamState.self_hash."""
        return stream_self_hash(self.recipient, self.clawback, self.end_time)


# =============================================================================
# SECTION 3 -- STREAM STATE
# =============================================================================

@dataclass(frozen=True)
class StreamState:
    """
    The part of a stream coin's configuration that changes between hops.

    Attributes:
        self_hash:          Identity of the first-stage curried covenant.
                            Constant across the whole chain.
        last_payment_time:  Timestamp up to which value has already been
                            paid out. Starts at the stream's start time.
    """

    self_hash:         bytes
    last_payment_time: int

    def __post_init__(self) -> None:
        _check_bytes32("self_hash", self.self_hash)
        _check_u64("last_payment_time", self.last_payment_time)

    @classmethod
    def genesis(cls, params: StreamParameters, start_time: int) -> "StreamState":
        """
        State of the first coin of a stream.

        Raises:
            StreamValidationError if start_time is not a u64.
            StreamConsistencyError if start_time is not before end_time.
        """
        _check_u64("start_time", start_time)
        if start_time >= params.end_time:
            raise StreamConsistencyError(
                field_a="start_time",
                value_a=start_time,
                field_b="end_time",
                value_b=params.end_time,
                invariant_description="start_time must be strictly less than end_time",
            )
        return cls(self_hash=params.self_hash(), last_payment_time=start_time)

    def puzzle_hash(self) -> bytes:
        """Full identity of the coin carrying this state."""
        return successor_identity(self.self_hash, self.self_hash, self.last_payment_time)

    def advanced_to(self, payment_time: int) -> "StreamState":
        """State of the successor after a claim up to payment_time."""
        return StreamState(self_hash=self.self_hash, last_payment_time=payment_time)


# =============================================================================
# SECTION 4 -- SPEND PARAMETERS
# =============================================================================

@dataclass(frozen=True)
class SpendParameters:
    """
    Solution supplied by the spender. Never stored.

    Attributes:
        my_amount:     Amount the spent coin holds. Bound to the real coin
                       amount by an emitted assertion.
        payment_time:  Timestamp the claim vests up to.
        to_pay:        Amount paid to the recipient by this spend.
        clawback:      True when the clawback party terminates the stream.
    """

    my_amount:    int
    payment_time: int
    to_pay:       int
    clawback:     bool = False

    def __post_init__(self) -> None:
        _check_u64("my_amount", self.my_amount)
        _check_u64("payment_time", self.payment_time)
        _check_u64("to_pay", self.to_pay)
        _check_bool("clawback", self.clawback)


__all__ = [
    "StreamParameters",
    "StreamState",
    "SpendParameters",
]
