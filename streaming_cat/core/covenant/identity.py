# =============================================================================
# STREAMING-CAT v1.0.0 -- COVENANT LAYER
# File:   streaming_cat/core/covenant/identity.py
# =============================================================================
#
# SCOPE
# -----
# Identity Deriver. Computes the tree hashes by which the ledger recognises
# which program (and which curried parameters) governs a coin.
#
# TREE HASH SCHEME
# ----------------
#   atom  b     ->  sha256(0x01 || b)
#   pair (l, r) ->  sha256(0x02 || hash(l) || hash(r))
#
# A curried program (a (q . MOD) (c (q . A1) (c (q . A2) ... 1))) can be
# hashed from MOD's hash and the argument hashes alone, without the program
# text. Every function here works on hashes only.
#
# STREAM IDENTITY
# ---------------
# The covenant is curried in two stages:
#
#   SELF_HASH   = curry(STREAM_PUZZLE_HASH, RECIPIENT, CLAWBACK, END_TIME)
#   full puzzle = curry(SELF_HASH, SELF_HASH, LAST_PAYMENT_TIME)
#
# The second stage lets a running instance re-derive its successor from the
# value it already carries: only LAST_PAYMENT_TIME changes between hops.
#
# These hashes must be bit-exact with the ledger's own hashing or successor
# coins become unspendable.
#
# DETERMINISM CONSTRAINTS
# -----------------------
# DET-01  Pure functions of explicit inputs. No module-level mutable state.
# DET-02  SHA-256 only.
# =============================================================================

from __future__ import annotations

from hashlib import sha256
from typing import Optional, Sequence

from streaming_cat.utils.constants import (
    CAT_MOD_HASH,
    STREAM_HINT_MARKER,
    STREAM_PUZZLE_HASH,
)


# =============================================================================
# SECTION 1 -- ATOM ENCODING
# =============================================================================

def int_atom(value: int) -> bytes:
    """
    Encode an integer as a minimal two's-complement big-endian atom.

    Zero is the empty atom. Positive values carry a leading 0x00 only when
    the high bit of the first byte would otherwise be set.
    """
    if value == 0:
        return b""
    byte_count = (value.bit_length() + 8) >> 3
    encoded = value.to_bytes(byte_count, "big", signed=True)
    while len(encoded) > 1 and encoded[0] == (0xFF if encoded[1] & 0x80 else 0x00):
        encoded = encoded[1:]
    return encoded


def atom_int(atom: bytes) -> int:
    """Inverse of int_atom()."""
    if not atom:
        return 0
    return int.from_bytes(atom, "big", signed=True)


# =============================================================================
# SECTION 2 -- TREE HASHING
# =============================================================================

def hash_atom(atom: bytes) -> bytes:
    return sha256(b"\x01" + atom).digest()


def hash_pair(left: bytes, right: bytes) -> bytes:
    return sha256(b"\x02" + left + right).digest()


_NIL_HASH:       bytes = hash_atom(b"")
_ONE_HASH:       bytes = hash_atom(b"\x01")
_QUOTE_KW_HASH:  bytes = hash_atom(b"\x01")
_APPLY_KW_HASH:  bytes = hash_atom(b"\x02")
_CONS_KW_HASH:   bytes = hash_atom(b"\x04")


def _curried_values_hash(arg_hashes: Sequence[bytes]) -> bytes:
    """Hash of (c (q . A1) (c (q . A2) ... 1)) built from argument hashes."""
    result = _ONE_HASH
    for arg_hash in reversed(arg_hashes):
        result = hash_pair(
            _CONS_KW_HASH,
            hash_pair(
                hash_pair(_QUOTE_KW_HASH, arg_hash),
                hash_pair(result, _NIL_HASH),
            ),
        )
    return result


def curry_tree_hash(mod_hash: bytes, arg_hashes: Sequence[bytes]) -> bytes:
    """
    Tree hash of MOD curried with the given (already hashed) arguments.

    Args:
        mod_hash:    Tree hash of the program being curried.
        arg_hashes:  Tree hashes of the curried arguments, in order.

    Returns:
        32-byte tree hash of (a (q . MOD) <curried values>).
    """
    quoted_mod_hash = hash_pair(_QUOTE_KW_HASH, mod_hash)
    return hash_pair(
        _APPLY_KW_HASH,
        hash_pair(
            quoted_mod_hash,
            hash_pair(_curried_values_hash(arg_hashes), _NIL_HASH),
        ),
    )


# =============================================================================
# SECTION 3 -- STREAM IDENTITIES
# =============================================================================

def successor_identity(
    base_identity: bytes,
    self_identity: bytes,
    payment_time:  int,
) -> bytes:
    """
    Identity of the next stream coin after a claim up to payment_time.

    base_identity is the program being curried (the first-stage SELF_HASH);
    self_identity is the value re-curried into it. For a well-formed stream
    the two are the same hash.
    """
    return curry_tree_hash(
        base_identity,
        [hash_atom(self_identity), hash_atom(int_atom(payment_time))],
    )


def stream_self_hash(recipient: bytes, clawback: bytes, end_time: int) -> bytes:
    """First-stage curry: the immutable stream parameters."""
    return curry_tree_hash(
        STREAM_PUZZLE_HASH,
        [hash_atom(recipient), hash_atom(clawback), hash_atom(int_atom(end_time))],
    )


def stream_puzzle_hash(
    recipient:         bytes,
    clawback:          bytes,
    end_time:          int,
    last_payment_time: int,
) -> bytes:
    """Full two-stage identity of a stream coin (without any outer layer)."""
    self_hash = stream_self_hash(recipient, clawback, end_time)
    return successor_identity(self_hash, self_hash, last_payment_time)


def cat_puzzle_hash(asset_id: bytes, inner_puzzle_hash: bytes) -> bytes:
    """
    Wrap an inner puzzle hash in the CAT outer layer.

    The inner puzzle is curried in by hash; the module hash and asset id are
    curried in as atoms.
    """
    return curry_tree_hash(
        CAT_MOD_HASH,
        [hash_atom(CAT_MOD_HASH), hash_atom(asset_id), inner_puzzle_hash],
    )


def outer_puzzle_hash(inner_puzzle_hash: bytes, asset_id: Optional[bytes]) -> bytes:
    if asset_id is None:
        return inner_puzzle_hash
    return cat_puzzle_hash(asset_id, inner_puzzle_hash)


def stream_hint(recipient: bytes) -> bytes:
    """Hint carried by every stream coin; distinct from the recipient's own."""
    return sha256(STREAM_HINT_MARKER + recipient).digest()


# =============================================================================
# MODULE __all__
# =============================================================================

__all__ = [
    "int_atom",
    "atom_int",
    "hash_atom",
    "hash_pair",
    "curry_tree_hash",
    "successor_identity",
    "stream_self_hash",
    "stream_puzzle_hash",
    "cat_puzzle_hash",
    "outer_puzzle_hash",
    "stream_hint",
]
