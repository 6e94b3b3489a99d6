# streaming_cat/utils/constants.py
# Version: 1.0.0
# Single authoritative source for ledger and covenant constants.
#
# Standard import pattern:
#   from streaming_cat.utils.constants import (
#       CREATE_COIN,
#       ASSERT_MY_AMOUNT,
#       ASSERT_SECONDS_ABSOLUTE,
#       ASSERT_BEFORE_SECONDS_ABSOLUTE,
#       SEND_MESSAGE,
#       RECEIVE_MESSAGE,
#       MESSAGE_MODE_PUZZLE_TO_COIN,
#       STREAM_PUZZLE_HASH,
#       CAT_MOD_HASH,
#       STREAM_HINT_MARKER,
#   )
#
# Changing STREAM_PUZZLE_HASH or CAT_MOD_HASH changes every derived stream
# address. Both must match the compiled programs the ledger executes.


# ---------------------------------------------------------------------------
# CONDITION OPCODES
# ---------------------------------------------------------------------------

CREATE_COIN:                    int = 51
SEND_MESSAGE:                   int = 66
RECEIVE_MESSAGE:                int = 67
ASSERT_MY_AMOUNT:               int = 73
ASSERT_SECONDS_ABSOLUTE:        int = 81
ASSERT_BEFORE_SECONDS_ABSOLUTE: int = 85


# ---------------------------------------------------------------------------
# MESSAGE MODES
# ---------------------------------------------------------------------------
# Six bits: sender (parent, puzzle, amount) then receiver (parent, puzzle,
# amount). 0b010_111 commits the sender by puzzle hash and the receiver by
# full coin id.

MESSAGE_MODE_PUZZLE_TO_COIN: int = 0x17


# ---------------------------------------------------------------------------
# PROGRAM IDENTITIES
# ---------------------------------------------------------------------------

# Tree hash of the uncurried streaming covenant module.
STREAM_PUZZLE_HASH: bytes = bytes.fromhex(
    "3dbd86c0b4b09e4767adf8d8d149539480b7fbf38381acb326c03898d5d73233"
)

# Tree hash of the CAT v2 outer layer.
CAT_MOD_HASH: bytes = bytes.fromhex(
    "37bef360ee858133b69d595a906dc45d01af50379dad515eb9518abb7c1d2a7a"
)

# Prefix hashed together with the recipient to tag stream cells for indexers.
STREAM_HINT_MARKER: bytes = b"stream"


# ---------------------------------------------------------------------------
# NUMERIC BOUNDS
# ---------------------------------------------------------------------------

U64_MAX:     int = 2 ** 64 - 1
BYTES32_LEN: int = 32


# ---------------------------------------------------------------------------
# AMOUNT UNITS (CLI)
# ---------------------------------------------------------------------------

CAT_DECIMALS: int = 3     # 1 CAT  = 1_000 mojos
XCH_DECIMALS: int = 12    # 1 XCH  = 1_000_000_000_000 mojos
