# =============================================================================
# STREAMING-CAT v1.0.0 -- COVENANT LAYER
# File:   streaming_cat/core/covenant/vesting.py
# =============================================================================
#
# SCOPE
# -----
# Vesting Calculator. Linear vesting over the REMAINING window:
#
#   payout = my_amount * (payment_time - last_payment_time)
#                      // (end_time - last_payment_time)
#
# Integer arithmetic only. All operands are non-negative, so floor division
# equals truncation toward zero. Re-anchoring last_payment_time on every hop
# keeps the schedule a function of the current coin alone; truncation never
# compounds across hops because the truncated remainder stays in the coin.
#
# WINDOW RULES
# ------------
#   last_payment_time <  end_time                      (SPD-01)
#   last_payment_time <= payment_time <= end_time      (SPD-02)
#   to_pay == required_payout(...)                     (SPD-04)
# =============================================================================

from __future__ import annotations

from .exceptions import SpendRejectedError


def required_payout(
    my_amount:         int,
    last_payment_time: int,
    end_time:          int,
    payment_time:      int,
) -> int:
    """
    Amount vested between last_payment_time and payment_time.

    Callers must have checked the window with check_window(); this function
    only performs the arithmetic.
    """
    return (my_amount * (payment_time - last_payment_time)) // (end_time - last_payment_time)


def check_window(last_payment_time: int, end_time: int, payment_time: int) -> None:
    """
    Reject payment times that fall outside the coin's remaining window.

    Raises:
        SpendRejectedError SPD-01 if the window is already exhausted.
        SpendRejectedError SPD-02 if payment_time is outside
        [last_payment_time, end_time].
    """
    if last_payment_time >= end_time:
        raise SpendRejectedError(
            rule_id="SPD-01",
            reason=(
                "stream window exhausted: last_payment_time "
                + str(last_payment_time)
                + " is not before end_time "
                + str(end_time)
            ),
            field_name="last_payment_time",
            value=last_payment_time,
        )
    if not (last_payment_time <= payment_time <= end_time):
        raise SpendRejectedError(
            rule_id="SPD-02",
            reason=(
                "payment_time "
                + str(payment_time)
                + " outside remaining window ["
                + str(last_payment_time)
                + ", "
                + str(end_time)
                + "]"
            ),
            field_name="payment_time",
            value=payment_time,
        )


def check_payout(
    my_amount:         int,
    last_payment_time: int,
    end_time:          int,
    payment_time:      int,
    to_pay:            int,
) -> int:
    """
    Validate a declared payout and return it.

    Any deviation from required_payout(), including off-by-one rounding,
    rejects the spend.

    Raises:
        SpendRejectedError SPD-01 / SPD-02 from check_window().
        SpendRejectedError SPD-04 on payout mismatch.
    """
    check_window(last_payment_time, end_time, payment_time)
    expected = required_payout(my_amount, last_payment_time, end_time, payment_time)
    if to_pay != expected:
        raise SpendRejectedError(
            rule_id="SPD-04",
            reason=(
                "to_pay "
                + str(to_pay)
                + " does not match vested amount "
                + str(expected)
            ),
            field_name="to_pay",
            value=to_pay,
        )
    return expected


__all__ = [
    "required_payout",
    "check_window",
    "check_payout",
]
