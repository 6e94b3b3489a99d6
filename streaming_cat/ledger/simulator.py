# =============================================================================
# STREAMING-CAT v1.0.0 -- LEDGER SIMULATOR
# File:   streaming_cat/ledger/simulator.py
# =============================================================================
#
# PURPOSE
# -------
# In-memory stand-in for the ledger a streamed coin lives on. It executes
# spend bundles the way consensus would, at the level the covenant relies on:
#
#   - every spent coin exists, is unspent, and matches its puzzle's hash
#   - every puzzle is run; a puzzle exception rejects the bundle
#   - AssertMyAmount / AssertSecondsAbsolute / AssertBeforeSecondsAbsolute
#     are checked against the coin and the ledger clock
#   - every SendMessage is paired with exactly one ReceiveMessage
#   - created value never exceeds spent value (the difference is the fee)
#
# A bundle is validated completely before any state changes: either every
# spend in it commits or none does. A coin can be spent at most once.
#
# RULE IDS
# --------
#   LDG-01  empty bundle                  LDG-08  seconds not yet reached
#   LDG-02  coin spent twice in bundle    LDG-09  before-seconds expired
#   LDG-03  unknown coin                  LDG-10  unsupported message mode
#   LDG-04  coin already spent            LDG-11  unpaired message
#   LDG-05  puzzle hash mismatch          LDG-12  outputs exceed inputs
#   LDG-06  puzzle rejected the spend     LDG-13  duplicate output coin
#   LDG-07  AssertMyAmount mismatch       LDG-14  unknown condition
#                                         LDG-15  malformed condition
#
# Signature checks and CAT supply rules are not modelled.
# =============================================================================

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

from streaming_cat.core.covenant import (
    AssertBeforeSecondsAbsolute,
    AssertMyAmount,
    AssertSecondsAbsolute,
    CreateCoin,
    ReceiveMessage,
    SendMessage,
    StreamError,
    StreamValidationError,
)
from streaming_cat.core.logging_layer import (
    BUNDLE_ACCEPTED,
    BUNDLE_REJECTED,
    COIN_CREATED,
    COIN_SPENT,
    EventLogger,
)
from streaming_cat.driver.coin import Coin, CoinSpend
from streaming_cat.utils.constants import MESSAGE_MODE_PUZZLE_TO_COIN

from .exceptions import LedgerRejectionError


# =============================================================================
# SECTION 1 -- COIN RECORD
# =============================================================================

@dataclass(frozen=True)
class CoinRecord:
    """
    Ledger bookkeeping for one coin.

    Attributes
    ----------
    coin          : The coin.
    confirmed_at  : Ledger time the coin was created.
    spent_at      : Ledger time the coin was spent, or None while unspent.
    """

    coin:         Coin
    confirmed_at: int
    spent_at:     Optional[int] = None

    @property
    def spent(self) -> bool:
        return self.spent_at is not None


# =============================================================================
# SECTION 2 -- SIMULATED LEDGER
# =============================================================================

class SimulatedLedger:
    """
    Single-threaded, in-memory coin set with a caller-driven clock.

    The clock only moves through advance_to(); push() evaluates every
    time assertion against the current value.
    """

    def __init__(self, now: int = 0) -> None:
        self._now: int = now
        self._records: Dict[bytes, CoinRecord] = {}
        self._logger: EventLogger = EventLogger()

    # -----------------------------------------------------------------------
    # Accessors
    # -----------------------------------------------------------------------

    @property
    def now(self) -> int:
        return self._now

    @property
    def logger(self) -> EventLogger:
        return self._logger

    def coin_record(self, coin_id: bytes) -> Optional[CoinRecord]:
        return self._records.get(coin_id)

    def unspent(self, puzzle_hash: Optional[bytes] = None) -> List[Coin]:
        return [
            r.coin
            for r in self._records.values()
            if not r.spent and (puzzle_hash is None or r.coin.puzzle_hash == puzzle_hash)
        ]

    # -----------------------------------------------------------------------
    # Mutators
    # -----------------------------------------------------------------------

    def advance_to(self, timestamp: int) -> None:
        if timestamp < self._now:
            raise ValueError(
                f"Ledger time cannot move backwards: now={self._now}, requested={timestamp}"
            )
        self._now = timestamp

    def add_coin(self, coin: Coin) -> CoinRecord:
        """Create a coin out of thin air (funding a test wallet)."""
        coin_id = coin.coin_id()
        if coin_id in self._records:
            raise LedgerRejectionError("LDG-13", "coin already exists", coin_id)
        record = CoinRecord(coin=coin, confirmed_at=self._now)
        self._records[coin_id] = record
        self._logger.log_event(COIN_CREATED, {"coin_id": coin_id, "amount": coin.amount}, self._now)
        return record

    def push(self, bundle: Sequence[CoinSpend]) -> Tuple[Coin, ...]:
        """
        Validate and apply a spend bundle atomically.

        Returns
        -------
        Tuple[Coin, ...] : Coins created by the bundle, in emission order.

        Raises
        ------
        LedgerRejectionError : on any failed rule. The ledger is unchanged.
        """
        try:
            created = self._validate(bundle)
        except LedgerRejectionError as exc:
            self._logger.log_event(
                BUNDLE_REJECTED,
                {"rule_id": exc.rule_id, "reason": exc.reason, "coin_id": exc.coin_id},
                self._now,
            )
            raise

        for spend in bundle:
            coin_id = spend.coin.coin_id()
            self._records[coin_id] = replace(self._records[coin_id], spent_at=self._now)
            self._logger.log_event(COIN_SPENT, {"coin_id": coin_id}, self._now)
        for coin in created:
            coin_id = coin.coin_id()
            self._records[coin_id] = CoinRecord(coin=coin, confirmed_at=self._now)
            self._logger.log_event(
                COIN_CREATED, {"coin_id": coin_id, "amount": coin.amount}, self._now
            )
        self._logger.log_event(
            BUNDLE_ACCEPTED,
            {"spends": len(bundle), "created": len(created)},
            self._now,
        )
        return created

    # -----------------------------------------------------------------------
    # Validation (no state changes)
    # -----------------------------------------------------------------------

    def _validate(self, bundle: Sequence[CoinSpend]) -> Tuple[Coin, ...]:
        if not bundle:
            raise LedgerRejectionError("LDG-01", "bundle contains no spends")

        seen: set = set()
        created: List[Coin] = []
        sends: Counter = Counter()
        receives: Counter = Counter()
        spent_total = 0

        for spend in bundle:
            coin = spend.coin
            coin_id = coin.coin_id()
            if coin_id in seen:
                raise LedgerRejectionError("LDG-02", "coin spent twice in one bundle", coin_id)
            seen.add(coin_id)

            record = self._records.get(coin_id)
            if record is None:
                raise LedgerRejectionError("LDG-03", "coin does not exist", coin_id)
            if record.spent:
                raise LedgerRejectionError("LDG-04", "coin already spent", coin_id)
            if spend.puzzle.puzzle_hash != coin.puzzle_hash:
                raise LedgerRejectionError("LDG-05", "puzzle does not match coin", coin_id)

            try:
                conditions = spend.puzzle.run(coin, spend.solution)
            except StreamError as exc:
                raise LedgerRejectionError("LDG-06", exc.message, coin_id) from exc

            spent_total += coin.amount
            for condition in conditions:
                self._apply_condition(coin, coin_id, condition, created, sends, receives)

        if sends != receives:
            raise LedgerRejectionError("LDG-11", "messages are not paired one to one")

        created_total = sum(c.amount for c in created)
        if created_total > spent_total:
            raise LedgerRejectionError(
                "LDG-12",
                f"outputs {created_total} exceed inputs {spent_total}",
            )

        ids = [c.coin_id() for c in created]
        if len(set(ids)) != len(ids) or any(i in self._records for i in ids):
            raise LedgerRejectionError("LDG-13", "bundle creates a duplicate coin")

        return tuple(created)

    def _apply_condition(
        self,
        coin: Coin,
        coin_id: bytes,
        condition: object,
        created: List[Coin],
        sends: Counter,
        receives: Counter,
    ) -> None:
        if isinstance(condition, CreateCoin):
            try:
                child = Coin(coin_id, condition.puzzle_hash, condition.amount)
            except StreamValidationError as exc:
                raise LedgerRejectionError("LDG-15", exc.message, coin_id) from exc
            created.append(child)
        elif isinstance(condition, AssertMyAmount):
            self._check_int("amount", condition.amount, coin_id)
            if condition.amount != coin.amount:
                raise LedgerRejectionError(
                    "LDG-07",
                    f"asserted amount {condition.amount} but coin holds {coin.amount}",
                    coin_id,
                )
        elif isinstance(condition, AssertSecondsAbsolute):
            self._check_int("seconds", condition.seconds, coin_id)
            if self._now < condition.seconds:
                raise LedgerRejectionError(
                    "LDG-08",
                    f"ledger time {self._now} is before {condition.seconds}",
                    coin_id,
                )
        elif isinstance(condition, AssertBeforeSecondsAbsolute):
            self._check_int("seconds", condition.seconds, coin_id)
            if self._now >= condition.seconds:
                raise LedgerRejectionError(
                    "LDG-09",
                    f"ledger time {self._now} is not before {condition.seconds}",
                    coin_id,
                )
        elif isinstance(condition, SendMessage):
            self._check_mode(condition.mode, coin_id)
            self._check_bytes("message", condition.message, coin_id)
            self._check_bytes("receiver_coin_id", condition.receiver_coin_id, coin_id)
            sends[(coin.puzzle_hash, condition.message, condition.receiver_coin_id)] += 1
        elif isinstance(condition, ReceiveMessage):
            self._check_mode(condition.mode, coin_id)
            self._check_bytes("message", condition.message, coin_id)
            self._check_bytes("sender_puzzle_hash", condition.sender_puzzle_hash, coin_id)
            receives[(condition.sender_puzzle_hash, condition.message, coin_id)] += 1
        else:
            raise LedgerRejectionError(
                "LDG-14", f"unknown condition {type(condition).__name__}", coin_id
            )

    @staticmethod
    def _check_int(name: str, value: object, coin_id: bytes) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise LedgerRejectionError(
                "LDG-15", f"condition field {name} must be an integer; got {value!r}", coin_id
            )

    @staticmethod
    def _check_bytes(name: str, value: object, coin_id: bytes) -> None:
        if not isinstance(value, bytes):
            raise LedgerRejectionError(
                "LDG-15", f"condition field {name} must be bytes; got {value!r}", coin_id
            )

    @classmethod
    def _check_mode(cls, mode: int, coin_id: bytes) -> None:
        cls._check_int("mode", mode, coin_id)
        if mode != MESSAGE_MODE_PUZZLE_TO_COIN:
            raise LedgerRejectionError("LDG-10", f"unsupported message mode {mode:#x}", coin_id)


__all__ = ["CoinRecord", "SimulatedLedger"]
