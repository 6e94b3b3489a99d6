# streaming_cat/governance/launch_policy.py
# Version: 1.0.0
# Pre-launch checks for a new stream. Launching is irreversible once the
# funding spend confirms, so every problem is reported at once instead of
# failing on the first one.

from __future__ import annotations
from dataclasses import dataclass
from typing import List
from streaming_cat.utils.constants import BYTES32_LEN, U64_MAX

_MIN_WINDOW_SECONDS: int = 60


@dataclass(frozen=True)
class PolicyViolation:
    rule_id:        str
    field_name:     str
    observed_value: object
    message:        str
    is_blocking:    bool


@dataclass(frozen=True)
class PolicyValidationResult:
    is_compliant:        bool
    violations:          tuple
    warnings:            tuple
    blocking_violations: tuple
    validated_fields:    tuple


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_bytes32(value: object) -> bool:
    return isinstance(value, bytes) and len(value) == BYTES32_LEN


def validate_launch_config(
    amount: int,
    start_time: int,
    end_time: int,
    recipient: bytes,
    clawback: bytes,
) -> PolicyValidationResult:
    violations: List[PolicyViolation] = []
    validated_fields: List[str] = []

    validated_fields.append("amount")
    if not _is_int(amount):
        violations.append(PolicyViolation("LNC-01", "amount", amount,
            f"amount must be an integer number of mojos; got: {type(amount).__name__}.", True))
    elif not (0 < amount <= U64_MAX):
        violations.append(PolicyViolation("LNC-01", "amount", amount,
            f"amount must be in [1, 2**64 - 1]; got: {amount}.", True))

    validated_fields.append("start_time")
    if not _is_int(start_time):
        violations.append(PolicyViolation("LNC-02", "start_time", start_time,
            f"start_time must be an integer timestamp; got: {type(start_time).__name__}.", True))
    elif not (0 <= start_time <= U64_MAX):
        violations.append(PolicyViolation("LNC-02", "start_time", start_time,
            f"start_time must be in [0, 2**64 - 1]; got: {start_time}.", True))

    validated_fields.append("end_time")
    if not _is_int(end_time):
        violations.append(PolicyViolation("LNC-03", "end_time", end_time,
            f"end_time must be an integer timestamp; got: {type(end_time).__name__}.", True))
    elif not (0 <= end_time <= U64_MAX):
        violations.append(PolicyViolation("LNC-03", "end_time", end_time,
            f"end_time must be in [0, 2**64 - 1]; got: {end_time}.", True))
    elif _is_int(start_time) and end_time <= start_time:
        violations.append(PolicyViolation("LNC-03", "end_time", end_time,
            f"end_time must be after start_time ({start_time}); got: {end_time}.", True))
    elif _is_int(start_time) and end_time - start_time < _MIN_WINDOW_SECONDS:
        violations.append(PolicyViolation("LNC-03", "end_time", end_time,
            f"stream window of {end_time - start_time}s is shorter than "
            f"{_MIN_WINDOW_SECONDS}s; the stream is effectively a plain transfer.", False))

    validated_fields.append("recipient")
    if not _is_bytes32(recipient):
        violations.append(PolicyViolation("LNC-04", "recipient", recipient,
            "recipient must be a 32-byte puzzle hash.", True))

    validated_fields.append("clawback")
    if not _is_bytes32(clawback):
        violations.append(PolicyViolation("LNC-05", "clawback", clawback,
            "clawback must be a 32-byte puzzle hash.", True))

    validated_fields.append("recipient_clawback_distinct")
    if _is_bytes32(recipient) and _is_bytes32(clawback) and recipient == clawback:
        violations.append(PolicyViolation("LNC-06", "clawback", clawback.hex(),
            "clawback equals recipient; the recipient can end the stream and "
            "collect the unvested remainder at any time.", False))

    validated_fields.append("amount_granularity")
    if (_is_int(amount) and _is_int(start_time) and _is_int(end_time)
            and 0 < amount and start_time < end_time
            and amount < end_time - start_time):
        violations.append(PolicyViolation("LNC-07", "amount", amount,
            f"amount {amount} is smaller than the window of {end_time - start_time}s; "
            f"early claims may vest 0 mojos until enough time has elapsed.", False))

    blocking = tuple(v for v in violations if v.is_blocking)
    advisory = tuple(v for v in violations if not v.is_blocking)
    return PolicyValidationResult(
        is_compliant=len(blocking) == 0,
        violations=tuple(violations),
        warnings=advisory,
        blocking_violations=blocking,
        validated_fields=tuple(validated_fields),
    )
