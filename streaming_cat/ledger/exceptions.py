# streaming_cat/ledger/exceptions.py
# Version: 1.0.0

from __future__ import annotations

from typing import Optional


class LedgerRejectionError(Exception):
    """
    Raised when the simulated ledger refuses a spend bundle.

    Nothing in the bundle takes effect.

    Attributes
    ----------
    rule_id : str      -- ledger rule that failed (e.g. "LDG-05").
    reason  : str
    coin_id : Optional[bytes] -- coin whose spend triggered the failure,
                                 None for bundle-level failures.
    """

    def __init__(self, rule_id: str, reason: str, coin_id: Optional[bytes] = None) -> None:
        self.rule_id = rule_id
        self.reason = reason
        self.coin_id = coin_id
        where = f" (coin 0x{coin_id.hex()})" if coin_id is not None else ""
        super().__init__(f"[{rule_id}] {reason}{where}")
