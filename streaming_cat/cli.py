# streaming_cat/cli.py
# Offline command-line interface for streamed coins.
#
# Standard invocation:
#   python -m streaming_cat.cli launch RECIPIENT CLAWBACK 10.000 START END \
#       --asset-id <hex>
#   python -m streaming_cat.cli view  --recipient .. --clawback .. \
#       --end-time .. --last-payment-time .. --amount .. [--now ..]
#   python -m streaming_cat.cli claim --recipient .. --clawback .. \
#       --end-time .. --last-payment-time .. --amount .. --payment-time .. \
#       [--clawback-spend]
#
# Nothing is submitted anywhere: the CLI derives puzzle hashes, projects the
# vesting schedule, and prints the conditions a spend would demand. Wallet
# RPC and fee handling belong to the wallet.
#
# EXIT CODES:
#   0  -- success.
#   1  -- the covenant rejected the spend.
#   2  -- invalid input (argparse errors also exit 2).

import argparse
import json
import sys
from typing import List, Optional

from streaming_cat.core.covenant import (
    SpendParameters,
    SpendRejectedError,
    StreamError,
    StreamParameters,
    StreamState,
    StreamValidationError,
    evaluate_spend,
    required_payout,
)
from streaming_cat.core.covenant.identity import outer_puzzle_hash
from streaming_cat.driver.schedule import project_schedule
from streaming_cat.driver.streamed_coin import launch_hints
from streaming_cat.governance import GovernanceViolationError, validate_launch_config
from streaming_cat.utils.constants import BYTES32_LEN, CAT_DECIMALS, U64_MAX, XCH_DECIMALS


# ---------------------------------------------------------------------------
# ARGUMENT PARSING HELPERS
# ---------------------------------------------------------------------------

def parse_amount(text: str, is_cat: bool) -> int:
    """
    Convert a decimal amount in CAT / XCH units to mojos.

    The amount must contain a '.', so that a mojo count is never mistaken
    for a unit count. CATs have 3 decimals, XCH has 12.

    Raises ValueError on malformed input.
    """
    decimals = CAT_DECIMALS if is_cat else XCH_DECIMALS
    if "." not in text:
        raise ValueError(
            "Invalid amount: the amount is in XCH/CAT units, not mojos. "
            "Include a '.' in the amount to confirm."
        )
    whole, fractional = text.split(".", 1)
    if not whole:
        whole = "0"
    if not (whole.isdigit() and (fractional == "" or fractional.isdigit())):
        raise ValueError(f"Invalid amount: {text!r}")
    if len(fractional) > decimals:
        raise ValueError(
            f"Invalid amount: {text!r} has more than {decimals} decimal places"
        )
    return int(whole) * 10 ** decimals + int(fractional.ljust(decimals, "0") or "0")


def _bytes32(text: str) -> bytes:
    raw = text[2:] if text.lower().startswith("0x") else text
    try:
        value = bytes.fromhex(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a hex string: {text!r}")
    if len(value) != BYTES32_LEN:
        raise argparse.ArgumentTypeError(f"expected 32 bytes, got {len(value)}: {text!r}")
    return value


def _hex(value: bytes) -> str:
    return "0x" + value.hex()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inspect and plan spends of streamed coins",
        prog="python -m streaming_cat.cli",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    launch = sub.add_parser("launch", help="Derive the address and hints of a new stream.")
    launch.add_argument("recipient", type=_bytes32, help="Recipient puzzle hash (hex).")
    launch.add_argument("clawback", type=_bytes32, help="Clawback puzzle hash (hex).")
    launch.add_argument("amount", help="Amount in CAT units (or XCH without --asset-id); must contain '.'.")
    launch.add_argument("start_time", type=int, help="Stream start timestamp (seconds).")
    launch.add_argument("end_time", type=int, help="Stream end timestamp (seconds).")
    launch.add_argument("--asset-id", type=_bytes32, default=None, help="CAT asset id (hex).")

    for name, help_text in (
        ("view", "Show what a stream coin can pay out."),
        ("claim", "Print the conditions a claim or clawback would demand."),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--recipient", type=_bytes32, required=True)
        p.add_argument("--clawback", type=_bytes32, required=True)
        p.add_argument("--end-time", type=int, required=True)
        p.add_argument("--last-payment-time", type=int, required=True)
        p.add_argument("--amount", type=int, required=True, help="Coin amount in mojos.")
        p.add_argument("--asset-id", type=_bytes32, default=None)
        if name == "view":
            p.add_argument("--now", type=int, default=None, help="Ledger time to evaluate at.")
            p.add_argument("--points", type=int, default=11, help="Schedule sample points.")
        else:
            p.add_argument("--payment-time", type=int, required=True)
            p.add_argument(
                "--clawback-spend",
                action="store_true",
                default=False,
                help="Terminate the stream instead of claiming.",
            )
    return parser


# ---------------------------------------------------------------------------
# COMMANDS
# ---------------------------------------------------------------------------

def _cmd_launch(args: argparse.Namespace) -> int:
    is_cat = args.asset_id is not None
    amount = parse_amount(args.amount, is_cat)
    policy = validate_launch_config(
        amount=amount,
        start_time=args.start_time,
        end_time=args.end_time,
        recipient=args.recipient,
        clawback=args.clawback,
    )
    if not policy.is_compliant:
        raise GovernanceViolationError(policy)

    params = StreamParameters(args.recipient, args.clawback, args.end_time)
    state = StreamState.genesis(params, args.start_time)
    inner = state.puzzle_hash()

    print(f"Amount (mojos): {amount}")
    print(f"Stream inner puzzle hash: {_hex(inner)}")
    print(f"Stream puzzle hash: {_hex(outer_puzzle_hash(inner, args.asset_id))}")
    print("Launch hints:")
    for hint in launch_hints(params, args.start_time):
        print(f"  {_hex(hint)}")
    for warning in policy.warnings:
        print(f"Warning [{warning.rule_id}]: {warning.message}")
    return 0


def _stream_from_args(args: argparse.Namespace):
    params = StreamParameters(args.recipient, args.clawback, args.end_time)
    state = StreamState(params.self_hash(), args.last_payment_time)
    return params, state


def _cmd_view(args: argparse.Namespace) -> int:
    params, state = _stream_from_args(args)
    if not (0 <= args.amount <= U64_MAX):
        raise StreamValidationError(
            field_name="amount",
            value=args.amount,
            constraint="must be in [0, 2**64 - 1]",
        )
    inner = state.puzzle_hash()
    print(f"Stream puzzle hash: {_hex(outer_puzzle_hash(inner, args.asset_id))}")
    print(f"Amount remaining: {args.amount}")
    print(f"Last payment time: {state.last_payment_time}")
    print(f"End time: {params.end_time}")

    if state.last_payment_time >= params.end_time:
        print("Stream window exhausted.")
        return 0

    if args.now is not None:
        payment_time = min(max(args.now, state.last_payment_time), params.end_time)
        claimable = required_payout(
            args.amount, state.last_payment_time, params.end_time, payment_time
        )
        print(f"Claimable at {args.now}: {claimable}")

    schedule = project_schedule(
        args.amount, state.last_payment_time, params.end_time, args.points
    )
    print("Schedule (time, claimable):")
    for t, amount in schedule.rows():
        print(f"  {t} {amount}")
    return 0


def _cmd_claim(args: argparse.Namespace) -> int:
    params, state = _stream_from_args(args)
    last, end = state.last_payment_time, params.end_time
    to_pay = 0
    if last < end and last <= args.payment_time <= end:
        to_pay = required_payout(args.amount, last, end, args.payment_time)
    spend = SpendParameters(
        my_amount=args.amount,
        payment_time=args.payment_time,
        to_pay=to_pay,
        clawback=args.clawback_spend,
    )
    decision = evaluate_spend(params, state, spend)
    if not decision.accepted:
        print(decision.rejection.message, file=sys.stderr)
        return 1

    effects = decision.effects
    successor = effects.successor_puzzle_hash
    report = {
        "coin_puzzle_hash": _hex(outer_puzzle_hash(state.puzzle_hash(), args.asset_id)),
        "payout": effects.payout,
        "remainder": effects.remainder,
        "clawback": effects.clawback,
        "successor_puzzle_hash": _hex(successor) if successor is not None else None,
        "conditions": [c.as_list() for c in effects.conditions],
    }
    print(json.dumps(report, indent=2))
    return 0


_COMMANDS = {
    "launch": _cmd_launch,
    "view": _cmd_view,
    "claim": _cmd_claim,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        return _COMMANDS[args.command](args)
    except SpendRejectedError as exc:
        print(exc.message, file=sys.stderr)
        return 1
    except (StreamError, GovernanceViolationError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
