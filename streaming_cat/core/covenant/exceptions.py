# =============================================================================
# STREAMING-CAT v1.0.0 -- COVENANT LAYER
# File:   streaming_cat/core/covenant/exceptions.py
# =============================================================================
#
# SCOPE
# -----
# Exception hierarchy for the streaming covenant.
# All exceptions are pure value objects: no side effects, no logging,
# no I/O of any kind.
#
# EXCEPTION HIERARCHY
# -------------------
#   StreamError(Exception)                    -- base; never raised directly
#     SpendRejectedError(StreamError)         -- the covenant refuses a spend
#     StreamValidationError(StreamError)      -- malformed field (type / range)
#     StreamConsistencyError(StreamError)     -- cross-field violation
#
# SpendRejectedError is the only outcome a spender ever sees from the
# covenant itself. The other two signal that a caller built an input object
# that can never describe a real cell or spend.
#
# MESSAGE CONTRACT
# ----------------
# Every exception message is deterministic, ASCII-safe, non-empty, and names
# the offending field and value.
# =============================================================================

from __future__ import annotations

from typing import Any, Tuple


def _require_text(owner: str, name: str, text: Any, allow_empty: bool = False) -> None:
    """Constructor argument check shared by every exception below."""
    if not isinstance(text, str):
        raise ValueError("%s: %s must be a string" % (owner, name))
    if not text and not allow_empty:
        raise ValueError("%s: %s must be a non-empty string" % (owner, name))


# =============================================================================
# BASE EXCEPTION
# =============================================================================

class StreamError(Exception):
    """
    Base class for all streaming covenant exceptions.

    Attributes:
        message:     Human-readable description. Always non-empty.
        field_name:  Offending field, or "" when no single field is at fault.
        value:       The offending value, or None.

    Two errors compare equal when they have the same class, message, field
    and value, so a rejection can be asserted on as a value.
    """

    def __init__(self, message: str, field_name: str = "", value: Any = None) -> None:
        _require_text("StreamError", "message", message)
        _require_text("StreamError", "field_name", field_name, allow_empty=True)
        super().__init__(message)
        self.message = message
        self.field_name = field_name
        self.value = value

    def _identity(self) -> Tuple[Any, ...]:
        return (type(self), self.message, self.field_name, self.value)

    def __repr__(self) -> str:
        return "%s(field_name=%r, value=%r, message=%r)" % (
            type(self).__name__,
            self.field_name,
            self.value,
            self.message,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StreamError):
            return NotImplemented
        return self._identity() == other._identity()

    __hash__ = Exception.__hash__


# =============================================================================
# CONCRETE EXCEPTIONS
# =============================================================================

class SpendRejectedError(StreamError):
    """
    Raised when the covenant refuses a proposed spend.

    A rejection carries no partial effects: the enclosing transaction is
    discarded as a whole.

    Message format:
        "SpendRejectedError [<rule_id>]: <reason>"

    rule_id is stable across releases (SPD-00 .. SPD-04) so callers and
    tests can branch on it instead of parsing the reason.
    """

    def __init__(
        self,
        rule_id:    str,
        reason:     str,
        field_name: str = "",
        value:      Any = None,
    ) -> None:
        _require_text("SpendRejectedError", "rule_id", rule_id)
        _require_text("SpendRejectedError", "reason", reason)
        self.rule_id = rule_id
        self.reason = reason
        super().__init__(
            "SpendRejectedError [%s]: %s" % (rule_id, reason),
            field_name=field_name,
            value=value,
        )


class StreamValidationError(StreamError):
    """A single field has the wrong type, length or range."""

    def __init__(self, field_name: str, value: Any, constraint: str) -> None:
        _require_text("StreamValidationError", "field_name", field_name)
        _require_text("StreamValidationError", "constraint", constraint)
        self.constraint = constraint
        super().__init__(
            "StreamValidationError: field '%s' violates constraint '%s': got %r."
            % (field_name, constraint, value),
            field_name=field_name,
            value=value,
        )


class StreamConsistencyError(StreamError):
    """
    Individually valid fields break a relation between them: a stream whose
    start is not before its end, a coin locked by some other puzzle, an
    authorising coin owned by the wrong party.

    field_name / value of the base class are field_a / value_a.
    """

    def __init__(
        self,
        field_a:               str,
        value_a:               Any,
        field_b:               str,
        value_b:               Any,
        invariant_description: str,
    ) -> None:
        owner = "StreamConsistencyError"
        _require_text(owner, "field_a", field_a)
        _require_text(owner, "field_b", field_b)
        _require_text(owner, "invariant_description", invariant_description)
        self.field_a = field_a
        self.value_a = value_a
        self.field_b = field_b
        self.value_b = value_b
        self.invariant_description = invariant_description
        super().__init__(
            "StreamConsistencyError: %s. %s=%r, %s=%r."
            % (invariant_description, field_a, value_a, field_b, value_b),
            field_name=field_a,
            value=value_a,
        )


__all__ = [
    "StreamError",
    "SpendRejectedError",
    "StreamValidationError",
    "StreamConsistencyError",
]
