# tests/test_cli_contract.py
# Version: 1.0.0
# Contract tests for the streaming_cat command line.
#
# CONSTRAINTS:
#   Only public entry points: main() and parse_amount().
#   Output is checked through capsys; nothing touches the network.

import json

import pytest

from streaming_cat.cli import main, parse_amount
from streaming_cat.core.covenant import cat_puzzle_hash, stream_hint, stream_puzzle_hash

RECIPIENT = b"\x11" * 32
CLAWBACK = b"\x22" * 32
ASSET_ID = b"\xca" * 32


def _stream_args(**overrides):
    values = {
        "--recipient": RECIPIENT.hex(),
        "--clawback": "0x" + CLAWBACK.hex(),
        "--end-time": "1000",
        "--last-payment-time": "0",
        "--amount": "1000",
    }
    values.update(overrides)
    args = []
    for key, value in values.items():
        args.extend([key, value])
    return args


# ---------------------------------------------------------------------------
# parse_amount
# ---------------------------------------------------------------------------

class TestParseAmount:

    def test_cat_units(self):
        assert parse_amount("10.5", is_cat=True) == 10_500

    def test_xch_units(self):
        assert parse_amount("1.0", is_cat=False) == 10 ** 12

    def test_leading_dot(self):
        assert parse_amount(".001", is_cat=True) == 1

    def test_trailing_dot(self):
        assert parse_amount("3.", is_cat=True) == 3000

    def test_dot_required(self):
        with pytest.raises(ValueError, match="not mojos"):
            parse_amount("10", is_cat=True)

    def test_too_many_decimals(self):
        with pytest.raises(ValueError, match="3 decimal places"):
            parse_amount("0.0001", is_cat=True)

    @pytest.mark.parametrize("text", ["1.2.3", "-1.0", "abc.0", "1.x"])
    def test_malformed(self, text):
        with pytest.raises(ValueError):
            parse_amount(text, is_cat=True)


# ---------------------------------------------------------------------------
# launch
# ---------------------------------------------------------------------------

class TestLaunch:

    def test_xch_launch(self, capsys):
        code = main(["launch", RECIPIENT.hex(), CLAWBACK.hex(), "0.000000001", "0", "1000"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Amount (mojos): 1000" in out
        inner = stream_puzzle_hash(RECIPIENT, CLAWBACK, 1000, 0)
        assert f"Stream puzzle hash: 0x{inner.hex()}" in out
        assert f"0x{stream_hint(RECIPIENT).hex()}" in out

    def test_cat_launch(self, capsys):
        code = main([
            "launch", RECIPIENT.hex(), CLAWBACK.hex(), "1.000", "0", "1000",
            "--asset-id", ASSET_ID.hex(),
        ])
        out = capsys.readouterr().out
        inner = stream_puzzle_hash(RECIPIENT, CLAWBACK, 1000, 0)
        assert code == 0
        assert f"Stream inner puzzle hash: 0x{inner.hex()}" in out
        assert f"Stream puzzle hash: 0x{cat_puzzle_hash(ASSET_ID, inner).hex()}" in out

    def test_launch_warnings_printed(self, capsys):
        code = main(["launch", RECIPIENT.hex(), RECIPIENT.hex(), "1.000", "0", "1000"])
        assert code == 0
        assert "Warning [LNC-06]" in capsys.readouterr().out

    def test_launch_policy_violation(self, capsys):
        code = main(["launch", RECIPIENT.hex(), CLAWBACK.hex(), "1.000", "1000", "10",
                     "--asset-id", ASSET_ID.hex()])
        assert code == 2
        assert "LNC-03" in capsys.readouterr().err

    def test_launch_amount_without_dot(self, capsys):
        code = main(["launch", RECIPIENT.hex(), CLAWBACK.hex(), "1000", "0", "1000"])
        assert code == 2
        assert "not mojos" in capsys.readouterr().err

    def test_bad_hex_is_argparse_error(self):
        with pytest.raises(SystemExit) as info:
            main(["launch", "zz", CLAWBACK.hex(), "1.0", "0", "1000"])
        assert info.value.code == 2


# ---------------------------------------------------------------------------
# view
# ---------------------------------------------------------------------------

class TestView:

    def test_view_with_now(self, capsys):
        code = main(["view"] + _stream_args() + ["--now", "250", "--points", "3"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Amount remaining: 1000" in out
        assert "Claimable at 250: 250" in out
        assert "  500 500" in out

    def test_view_clamps_now(self, capsys):
        main(["view"] + _stream_args() + ["--now", "5000"])
        assert "Claimable at 5000: 1000" in capsys.readouterr().out

    def test_view_exhausted(self, capsys):
        code = main(["view"] + _stream_args(**{"--last-payment-time": "1000"}))
        assert code == 0
        assert "Stream window exhausted." in capsys.readouterr().out

    @pytest.mark.parametrize("amount", ["-5", str(2 ** 64)])
    def test_view_amount_out_of_range(self, capsys, amount):
        code = main(["view"] + _stream_args(**{"--amount": amount}) + ["--now", "500"])
        captured = capsys.readouterr()
        assert code == 2
        assert captured.out == ""
        assert "amount" in captured.err


# ---------------------------------------------------------------------------
# claim
# ---------------------------------------------------------------------------

class TestClaim:

    def test_claim_report(self, capsys):
        code = main(["claim"] + _stream_args() + ["--payment-time", "250"])
        report = json.loads(capsys.readouterr().out)
        assert code == 0
        assert report["payout"] == 250
        assert report["remainder"] == 750
        assert report["clawback"] is False
        successor = stream_puzzle_hash(RECIPIENT, CLAWBACK, 1000, 250)
        assert report["successor_puzzle_hash"] == "0x" + successor.hex()
        assert [c[0] for c in report["conditions"]] == [73, 81, 51, 51, 67]

    def test_clawback_report(self, capsys):
        code = main(["claim"] + _stream_args() + ["--payment-time", "300", "--clawback-spend"])
        report = json.loads(capsys.readouterr().out)
        assert code == 0
        assert report["clawback"] is True
        assert report["successor_puzzle_hash"] is None
        assert report["conditions"][1] == [85, 300]

    def test_claim_rejected(self, capsys):
        code = main(["claim"] + _stream_args(**{"--last-payment-time": "500"})
                    + ["--payment-time", "400"])
        captured = capsys.readouterr()
        assert code == 1
        assert "SPD-02" in captured.err
        assert captured.out == ""

    def test_claim_must_advance(self, capsys):
        code = main(["claim"] + _stream_args() + ["--payment-time", "0"])
        assert code == 1
        assert "SPD-03" in capsys.readouterr().err
