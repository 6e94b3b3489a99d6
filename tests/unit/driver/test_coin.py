from hashlib import sha256

import pytest

from streaming_cat.core.covenant import (
    CreateCoin,
    SpendParameters,
    SpendRejectedError,
    StreamConsistencyError,
    StreamState,
    StreamValidationError,
    cat_puzzle_hash,
)
from streaming_cat.driver import CatLayer, Coin, OwnerPuzzle, StreamPuzzle

PARENT = b"\x01" * 32
PUZZLE = b"\x02" * 32
RECIPIENT = b"\x11" * 32
ASSET_ID = b"\xca" * 32


class TestCoin:

    def test_coin_id(self):
        coin = Coin(PARENT, PUZZLE, 1000)
        assert coin.coin_id() == sha256(PARENT + PUZZLE + b"\x03\xe8").digest()

    def test_coin_id_uses_sign_byte(self):
        coin = Coin(PARENT, PUZZLE, 128)
        assert coin.coin_id() == sha256(PARENT + PUZZLE + b"\x00\x80").digest()

    def test_zero_amount_is_empty_atom(self):
        assert Coin(PARENT, PUZZLE, 0).coin_id() == sha256(PARENT + PUZZLE).digest()

    def test_amount_changes_id(self):
        assert Coin(PARENT, PUZZLE, 1).coin_id() != Coin(PARENT, PUZZLE, 2).coin_id()

    @pytest.mark.parametrize("field", ["parent_coin_info", "puzzle_hash"])
    def test_bytes32_fields(self, field):
        values = dict(parent_coin_info=PARENT, puzzle_hash=PUZZLE, amount=1)
        values[field] = b"\x00" * 31
        with pytest.raises(StreamValidationError) as info:
            Coin(**values)
        assert info.value.field_name == field

    @pytest.mark.parametrize("amount", [-1, 2 ** 64, 1.0, False])
    def test_amount_range(self, amount):
        with pytest.raises(StreamValidationError):
            Coin(PARENT, PUZZLE, amount)


class TestStreamPuzzle:

    def test_puzzle_hash_is_state_hash(self, params, genesis_state):
        assert StreamPuzzle(params, genesis_state).puzzle_hash == genesis_state.puzzle_hash()

    def test_foreign_state_rejected(self, params):
        with pytest.raises(StreamConsistencyError):
            StreamPuzzle(params, StreamState(b"\x55" * 32, 0))

    def test_run_returns_conditions(self, params, genesis_state):
        puzzle = StreamPuzzle(params, genesis_state)
        coin = Coin(PARENT, puzzle.puzzle_hash, 1000)
        conditions = puzzle.run(coin, SpendParameters(1000, 500, 500))
        assert CreateCoin(RECIPIENT, 500, (RECIPIENT,)) in conditions

    def test_run_rejects_foreign_solution(self, params, genesis_state):
        puzzle = StreamPuzzle(params, genesis_state)
        coin = Coin(PARENT, puzzle.puzzle_hash, 1000)
        with pytest.raises(SpendRejectedError) as info:
            puzzle.run(coin, (1000, 500, 500))
        assert info.value.rule_id == "SPD-00"


class TestCatLayer:

    def test_wraps_puzzle_hash(self, params, genesis_state):
        inner = StreamPuzzle(params, genesis_state)
        layer = CatLayer(ASSET_ID, inner)
        assert layer.puzzle_hash == cat_puzzle_hash(ASSET_ID, inner.puzzle_hash)

    def test_wraps_created_coins_only(self, params, genesis_state):
        layer = CatLayer(ASSET_ID, StreamPuzzle(params, genesis_state))
        coin = Coin(PARENT, layer.puzzle_hash, 1000)
        conditions = layer.run(coin, SpendParameters(1000, 500, 500))
        payout = [c for c in conditions if isinstance(c, CreateCoin)][0]
        assert payout.puzzle_hash == cat_puzzle_hash(ASSET_ID, RECIPIENT)
        assert payout.hints == (RECIPIENT,)
        assert conditions[0].amount == 1000

    def test_malformed_output_passes_through(self):
        layer = CatLayer(ASSET_ID, OwnerPuzzle(RECIPIENT))
        bad = CreateCoin(b"\x01", 5)
        assert layer.run(Coin(PARENT, layer.puzzle_hash, 5), [bad]) == (bad,)


class TestOwnerPuzzle:

    def test_emits_solution(self):
        puzzle = OwnerPuzzle(RECIPIENT)
        create = CreateCoin(RECIPIENT, 5)
        assert puzzle.puzzle_hash == RECIPIENT
        assert puzzle.run(Coin(PARENT, RECIPIENT, 5), [create]) == (create,)

    def test_rejects_non_sequence_solution(self):
        with pytest.raises(SpendRejectedError) as info:
            OwnerPuzzle(RECIPIENT).run(Coin(PARENT, RECIPIENT, 5), 42)
        assert info.value.rule_id == "SPD-00"
