# streaming_cat/core/logging_layer.py
# Event Logging Layer
# STREAMING-CAT v1.0.0
#
# Scope: append-only, hash-chained record of ledger-side activity (bundles
# accepted or rejected, coins created and spent). The covenant itself never
# logs; the ledger simulator owns one EventLogger per ledger.
#
# Every event commits to the hash of the event before it, so a stored log
# can be re-verified end to end with verify_chain(). Timestamps are the
# ledger clock (int seconds) and may not go backwards.
#
# Canonical import:
#   from streaming_cat.core.logging_layer import EventLogger, Event, EventFilter
#
# Prohibited: time.time(), uuid, random, file IO, global mutable state

# ===========================================================================
# SECTION 1 -- STDLIB IMPORTS
# ===========================================================================

import hashlib
import json
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

# ===========================================================================
# SECTION 2 -- CONSTANTS
# ===========================================================================

# prev_hash of the first event in every log.
GENESIS_HASH: str = "0" * 64

BUNDLE_ACCEPTED: str = "BUNDLE_ACCEPTED"
BUNDLE_REJECTED: str = "BUNDLE_REJECTED"
COIN_CREATED:    str = "COIN_CREATED"
COIN_SPENT:      str = "COIN_SPENT"

# ===========================================================================
# SECTION 3 -- DATACLASSES: Event, EventFilter
# ===========================================================================

@dataclass(frozen=True)
class Event:
    """
    One entry of a ledger event log.

    Fields
    ------
    id        : "EVT-" + 16-digit sequence number, starting at 1.
    type      : BUNDLE_ACCEPTED, COIN_SPENT, ...
    timestamp : Ledger time in seconds.
    data      : JSON-safe payload. bytes are stored as lowercase hex.
    prev_hash : hash of the preceding event, GENESIS_HASH for the first.
    hash      : SHA-256 hex over the canonical JSON of every field above.
    """
    id:        str
    type:      str
    timestamp: int
    data:      Dict[str, Any]
    prev_hash: str
    hash:      str


@dataclass(frozen=True)
class EventFilter:
    """
    Selection criteria for EventLogger.query_events(). None means "any".

    coin_id matches events whose data carries that coin id. Time bounds are
    inclusive; limit keeps the oldest matches.
    """
    event_type: Optional[str] = None
    coin_id:    Optional[bytes] = None
    start_time: Optional[int] = None
    end_time:   Optional[int] = None
    limit:      Optional[int] = None

    def matches(self, event: Event) -> bool:
        if self.event_type is not None and event.type != self.event_type:
            return False
        if self.coin_id is not None and event.data.get("coin_id") != self.coin_id.hex():
            return False
        if self.start_time is not None and event.timestamp < self.start_time:
            return False
        if self.end_time is not None and event.timestamp > self.end_time:
            return False
        return True

# ===========================================================================
# SECTION 4 -- INTERNAL HELPERS
# ===========================================================================

def _to_json_safe(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.hex()
    if isinstance(value, (list, tuple)):
        return [_to_json_safe(item) for item in value]
    if isinstance(value, dict):
        return {str(k): _to_json_safe(v) for k, v in value.items()}
    return value


def _event_hash(
    prev_hash: str,
    event_id: str,
    event_type: str,
    timestamp: int,
    data: Dict[str, Any],
) -> str:
    preimage = json.dumps(
        [prev_hash, event_id, event_type, timestamp, data],
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=True,
    )
    return hashlib.sha256(preimage.encode("ascii")).hexdigest()


def _event_id(sequence: int) -> str:
    return "EVT-%016d" % sequence

# ===========================================================================
# SECTION 5 -- EventLogger
# ===========================================================================

class EventLogger:
    """
    Append-only event log for one ledger.

    log_event() raises LoggingError rather than dropping or reordering an
    event. Two loggers fed the same calls hold identical hashes.
    """

    def __init__(self) -> None:
        self._events: List[Event] = []

    @property
    def head_hash(self) -> str:
        """Hash of the newest event, or GENESIS_HASH for an empty log."""
        return self._events[-1].hash if self._events else GENESIS_HASH

    def log_event(self, event_type: str, data: Dict[str, Any], timestamp: int) -> str:
        """
        Append one event and return its id.

        Raises
        ------
        LoggingError : empty event_type, a timestamp that is not a
                       non-negative int, or a timestamp older than the
                       newest event.
        """
        if not isinstance(event_type, str) or not event_type:
            raise LoggingError("event_type must be a non-empty string")
        if timestamp is None:
            raise LoggingError("timestamp must be caller-supplied; None is not permitted")
        if isinstance(timestamp, bool) or not isinstance(timestamp, int):
            raise LoggingError(
                "timestamp must be int ledger seconds; got %s" % type(timestamp).__name__
            )
        if timestamp < 0:
            raise LoggingError("timestamp must be >= 0; got %d" % timestamp)
        if self._events and timestamp < self._events[-1].timestamp:
            raise LoggingError(
                "timestamp %d is older than the newest event (%d)"
                % (timestamp, self._events[-1].timestamp)
            )

        payload = _to_json_safe(dict(data))
        event_id = _event_id(len(self._events) + 1)
        prev_hash = self.head_hash
        self._events.append(
            Event(
                id=event_id,
                type=event_type,
                timestamp=timestamp,
                data=payload,
                prev_hash=prev_hash,
                hash=_event_hash(prev_hash, event_id, event_type, timestamp, payload),
            )
        )
        return event_id

    def query_events(self, filter: EventFilter) -> List[Event]:
        """Events matching filter, oldest first."""
        if filter is None:
            raise LoggingError("filter must not be None")
        selected = [event for event in self._events if filter.matches(event)]
        return selected if filter.limit is None else selected[: filter.limit]

    def get_event_stream(self, start_time: int) -> Iterator[Event]:
        """Yield events at or after start_time, oldest first."""
        if start_time is None:
            raise LoggingError("start_time must be caller-supplied; None is not permitted")
        return (event for event in self._events if event.timestamp >= start_time)

    def verify_chain(self) -> Tuple[bool, Optional[str]]:
        """
        Recompute every hash link.

        Returns (True, None) for an intact log, otherwise (False, id of the
        first event that does not verify).
        """
        prev_hash = GENESIS_HASH
        for event in self._events:
            expected = _event_hash(prev_hash, event.id, event.type, event.timestamp, event.data)
            if event.prev_hash != prev_hash or event.hash != expected:
                return False, event.id
            prev_hash = event.hash
        return True, None

    def event_count(self) -> int:
        return len(self._events)

# ===========================================================================
# SECTION 6 -- EXCEPTIONS
# ===========================================================================

class LoggingError(Exception):
    """Raised by EventLogger instead of dropping an event. Never swallowed."""


__all__ = [
    "GENESIS_HASH",
    "BUNDLE_ACCEPTED",
    "BUNDLE_REJECTED",
    "COIN_CREATED",
    "COIN_SPENT",
    "Event",
    "EventFilter",
    "EventLogger",
    "LoggingError",
]
