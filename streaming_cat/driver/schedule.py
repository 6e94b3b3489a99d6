# streaming_cat/driver/schedule.py
# Version: 1.0.0
# Vesting schedule projection for display (CLI `view`).
#
# The projection samples the covenant's own required_payout() at evenly
# spaced timestamps of the remaining window. It is informational: the
# amount a claim actually carries is always recomputed by the covenant.
#
# Arrays:
#   times      int64   -- sample timestamps, strictly increasing, first is
#                         last_payment_time, last is end_time.
#   claimable  uint64  -- cumulative payout a claim at each time would carry.
#
# Standard import:
#   from streaming_cat.driver.schedule import project_schedule, VestingSchedule

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from streaming_cat.core.covenant import StreamValidationError, required_payout
from streaming_cat.utils.constants import U64_MAX

# Timestamps above 2**53 lose precision in the float64 sampling grid.
_MAX_TIMESTAMP: int = 2 ** 53


@dataclass(frozen=True)
class VestingSchedule:
    """
    Sampled vesting curve of one stream coin.

    Fields:
      times     -- np.ndarray[int64], strictly increasing sample timestamps.
      claimable -- np.ndarray[uint64], payout of a claim at each timestamp.
    """
    times:     np.ndarray
    claimable: np.ndarray

    def increments(self) -> np.ndarray:
        """Amount vesting between consecutive samples (first entry is 0)."""
        out = np.zeros_like(self.claimable)
        out[1:] = np.diff(self.claimable)
        return out

    def is_monotonic(self) -> bool:
        return bool(np.all(self.claimable[1:] >= self.claimable[:-1]))

    def rows(self) -> list:
        return list(zip(self.times.tolist(), self.claimable.tolist()))


def project_schedule(
    my_amount:         int,
    last_payment_time: int,
    end_time:          int,
    points:            int = 11,
) -> VestingSchedule:
    """
    Project the vesting curve of a coin over its remaining window.

    Raises ValueError if points < 2.
    Raises StreamValidationError if my_amount is not in [0, 2**64 - 1], the
    window is empty, or end_time exceeds 2**53.
    """
    if points < 2:
        raise ValueError(
            "At least 2 sample points are required. "
            f"Received: {points}"
        )
    if (
        not isinstance(my_amount, int)
        or isinstance(my_amount, bool)
        or not (0 <= my_amount <= U64_MAX)
    ):
        raise StreamValidationError(
            field_name="my_amount",
            value=my_amount,
            constraint="must be an integer in [0, 2**64 - 1]",
        )
    if end_time <= last_payment_time:
        raise StreamValidationError(
            field_name="end_time",
            value=end_time,
            constraint="must be greater than last_payment_time",
        )
    if end_time > _MAX_TIMESTAMP:
        raise StreamValidationError(
            field_name="end_time",
            value=end_time,
            constraint="must be <= 2**53 for schedule projection",
        )

    raw = np.linspace(last_payment_time, end_time, num=points, dtype=np.float64)
    times = np.floor(raw).astype(np.int64)
    times[0] = last_payment_time
    times[-1] = end_time
    times = np.unique(times)

    claimable = np.array(
        [
            required_payout(my_amount, last_payment_time, end_time, t)
            for t in times.tolist()
        ],
        dtype=np.uint64,
    )
    return VestingSchedule(times=times, claimable=claimable)


__all__ = ["VestingSchedule", "project_schedule"]
