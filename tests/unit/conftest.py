import pytest

from streaming_cat.core.covenant import (
    StreamParameters,
    StreamState,
)

RECIPIENT: bytes = b"\x11" * 32
CLAWBACK:  bytes = b"\x22" * 32
ASSET_ID:  bytes = b"\xca" * 32


@pytest.fixture
def params() -> StreamParameters:
    """Stream over [0, 1000] used by the worked scenarios."""
    return StreamParameters(recipient=RECIPIENT, clawback=CLAWBACK, end_time=1000)


@pytest.fixture
def genesis_state(params) -> StreamState:
    """State of the first coin: last_payment_time == start_time == 0."""
    return StreamState.genesis(params, 0)
