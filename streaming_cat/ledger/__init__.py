# streaming_cat/ledger/__init__.py
# Version: 1.0.0

from streaming_cat.ledger.simulator import CoinRecord, SimulatedLedger
from streaming_cat.ledger.exceptions import LedgerRejectionError

__all__ = [
    "CoinRecord",
    "SimulatedLedger",
    "LedgerRejectionError",
]
