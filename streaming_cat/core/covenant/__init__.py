from .exceptions import (
    SpendRejectedError,
    StreamConsistencyError,
    StreamError,
    StreamValidationError,
)
from .domain import (
    SpendParameters,
    StreamParameters,
    StreamState,
)
from .identity import (
    cat_puzzle_hash,
    curry_tree_hash,
    int_atom,
    stream_hint,
    stream_puzzle_hash,
    stream_self_hash,
    successor_identity,
)
from .vesting import (
    check_payout,
    required_payout,
)
from .conditions import (
    AssertBeforeSecondsAbsolute,
    AssertMyAmount,
    AssertSecondsAbsolute,
    Condition,
    CreateCoin,
    ReceiveMessage,
    SendMessage,
    authorization_message,
)
from .validator import (
    RequiredEffects,
    SpendDecision,
    evaluate_spend,
    validate_spend,
)
from .engine import StreamTransition, transition

__all__ = [
    # Exceptions
    "StreamError",
    "SpendRejectedError",
    "StreamValidationError",
    "StreamConsistencyError",
    # Domain dataclasses
    "StreamParameters",
    "StreamState",
    "SpendParameters",
    # Identity deriver
    "int_atom",
    "curry_tree_hash",
    "successor_identity",
    "stream_self_hash",
    "stream_puzzle_hash",
    "cat_puzzle_hash",
    "stream_hint",
    # Vesting calculator
    "required_payout",
    "check_payout",
    # Conditions
    "Condition",
    "CreateCoin",
    "SendMessage",
    "ReceiveMessage",
    "AssertMyAmount",
    "AssertSecondsAbsolute",
    "AssertBeforeSecondsAbsolute",
    "authorization_message",
    # Validator
    "RequiredEffects",
    "SpendDecision",
    "validate_spend",
    "evaluate_spend",
    # Orchestration
    "StreamTransition",
    "transition",
]
