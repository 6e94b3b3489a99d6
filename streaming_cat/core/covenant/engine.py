from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .domain import SpendParameters, StreamParameters, StreamState
from .validator import RequiredEffects, validate_spend


@dataclass(frozen=True)
class StreamTransition:
    """
    Accepted spend together with the state curried into its successor.

    successor_state is None exactly when effects.terminates is True.
    """

    effects:         RequiredEffects
    successor_state: Optional[StreamState]


def transition(
    params: StreamParameters,
    state:  StreamState,
    spend:  SpendParameters,
) -> StreamTransition:
    """
    Validate a spend and derive the next stream state in one call.

    Delegates every decision to validate_spend(). Pure, deterministic,
    non-mutating. Raises SpendRejectedError exactly when validate_spend does.
    """
    effects = validate_spend(params, state, spend)
    if effects.terminates:
        return StreamTransition(effects=effects, successor_state=None)
    return StreamTransition(
        effects=effects,
        successor_state=state.advanced_to(spend.payment_time),
    )


__all__ = ["StreamTransition", "transition"]
