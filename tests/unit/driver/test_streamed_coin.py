import pytest

from streaming_cat.core.covenant import (
    CreateCoin,
    SendMessage,
    SpendParameters,
    SpendRejectedError,
    StreamConsistencyError,
    StreamParameters,
    StreamValidationError,
    cat_puzzle_hash,
    int_atom,
    stream_hint,
    stream_puzzle_hash,
)
from streaming_cat.driver import (
    CatLayer,
    Coin,
    CoinSpend,
    OwnerPuzzle,
    StreamedCoin,
    StreamPuzzle,
    launch_hints,
    parse_launch_hints,
)

RECIPIENT = b"\x11" * 32
CLAWBACK = b"\x22" * 32
ASSET_ID = b"\xca" * 32
FUNDER = b"\xf0" * 32


@pytest.fixture
def stream(params) -> StreamedCoin:
    return StreamedCoin.launch(FUNDER, 1000, params, 0)


class TestLaunchHints:

    def test_layout(self, params):
        hints = launch_hints(params, 0)
        assert hints == (stream_hint(RECIPIENT), RECIPIENT, CLAWBACK, b"", int_atom(1000))

    def test_parse_recovers_parameters(self, params):
        parsed, start = parse_launch_hints(launch_hints(params, 250))
        assert parsed == params
        assert start == 250

    def test_wrong_length(self, params):
        with pytest.raises(StreamValidationError, match="hints"):
            parse_launch_hints(launch_hints(params, 0)[:4])

    def test_wrong_marker(self, params):
        hints = (RECIPIENT,) + launch_hints(params, 0)[1:]
        with pytest.raises(StreamValidationError) as info:
            parse_launch_hints(hints)
        assert info.value.field_name == "hints[0]"


class TestLaunch:

    def test_plain_stream(self, stream):
        assert stream.coin.parent_coin_info == FUNDER
        assert stream.coin.amount == 1000
        assert stream.puzzle_hash == stream_puzzle_hash(RECIPIENT, CLAWBACK, 1000, 0)
        assert isinstance(stream.puzzle(), StreamPuzzle)

    def test_cat_stream(self, params):
        stream = StreamedCoin.launch(FUNDER, 1000, params, 0, asset_id=ASSET_ID)
        assert stream.puzzle_hash == cat_puzzle_hash(ASSET_ID, stream.inner_puzzle_hash)
        assert isinstance(stream.puzzle(), CatLayer)
        assert stream.puzzle().puzzle_hash == stream.coin.puzzle_hash

    def test_start_must_precede_end(self, params):
        with pytest.raises(StreamConsistencyError):
            StreamedCoin.launch(FUNDER, 1000, params, 1000)

    def test_mismatched_coin_rejected(self, params, genesis_state):
        with pytest.raises(StreamConsistencyError):
            StreamedCoin(Coin(FUNDER, b"\x00" * 32, 1000), params, genesis_state)


class TestClaims:

    @pytest.mark.parametrize("now,expected", [(0, 0), (250, 250), (1000, 1000), (5000, 1000)])
    def test_claimable(self, stream, now, expected):
        assert stream.claimable(now) == expected

    def test_spend_parameters(self, stream):
        assert stream.spend_parameters(250) == SpendParameters(1000, 250, 250)
        assert stream.spend_parameters(300, clawback=True) == SpendParameters(1000, 300, 300, True)

    def test_spend_parameters_outside_window_pays_nothing(self, stream):
        assert stream.spend_parameters(2000).to_pay == 0

    def test_build_spend(self, stream):
        spend = stream.build_spend(250)
        assert spend.coin == stream.coin
        assert spend.puzzle.puzzle_hash == stream.coin.puzzle_hash
        assert spend.solution == SpendParameters(1000, 250, 250)

    def test_authorization_spend(self, stream):
        owner = Coin(b"\x0a" * 32, RECIPIENT, 1)
        spend = stream.authorization_spend(owner, 250)
        assert isinstance(spend.puzzle, OwnerPuzzle)
        assert spend.solution == (
            SendMessage(0x17, int_atom(250), stream.coin.coin_id()),
            CreateCoin(RECIPIENT, 1),
        )

    def test_authorization_spend_for_clawback(self, stream):
        owner = Coin(b"\x0a" * 32, CLAWBACK, 1)
        spend = stream.authorization_spend(owner, 300, clawback=True)
        assert spend.coin == owner

    def test_authorization_from_wrong_party(self, stream):
        owner = Coin(b"\x0a" * 32, CLAWBACK, 1)
        with pytest.raises(StreamConsistencyError):
            stream.authorization_spend(owner, 250)


class TestLineage:

    def test_child_from_claim(self, stream):
        child = stream.child_from_spend(stream.spend_parameters(250))
        assert child.coin.parent_coin_info == stream.coin.coin_id()
        assert child.coin.amount == 750
        assert child.state.last_payment_time == 250
        assert child.params == stream.params

    def test_child_from_final_claim(self, stream):
        assert stream.child_from_spend(stream.spend_parameters(1000)) is None

    def test_child_from_clawback(self, stream):
        assert stream.child_from_spend(stream.spend_parameters(300, clawback=True)) is None

    def test_child_from_rejected_spend(self, stream):
        with pytest.raises(SpendRejectedError):
            stream.child_from_spend(SpendParameters(1000, 250, 1))

    def test_from_parent_spend(self, stream):
        child = StreamedCoin.from_parent_spend(stream.build_spend(400))
        assert child.coin.amount == 600
        assert child.coin.puzzle_hash == stream_puzzle_hash(RECIPIENT, CLAWBACK, 1000, 400)

    def test_from_parent_spend_cat(self, params):
        stream = StreamedCoin.launch(FUNDER, 1000, params, 0, asset_id=ASSET_ID)
        child = StreamedCoin.from_parent_spend(stream.build_spend(400))
        assert child.asset_id == ASSET_ID
        assert child.coin.puzzle_hash == cat_puzzle_hash(
            ASSET_ID, stream_puzzle_hash(RECIPIENT, CLAWBACK, 1000, 400)
        )

    def test_from_parent_spend_not_a_stream(self):
        owner = Coin(FUNDER, RECIPIENT, 5)
        spend = CoinSpend(owner, OwnerPuzzle(RECIPIENT), (CreateCoin(RECIPIENT, 5),))
        assert StreamedCoin.from_parent_spend(spend) is None

    def test_chain_follows_two_hops(self, params):
        first = StreamedCoin.launch(FUNDER, 1000, params, 0)
        second = StreamedCoin.from_parent_spend(first.build_spend(250))
        third = StreamedCoin.from_parent_spend(second.build_spend(500))
        assert third.coin.amount == 500
        assert third.state.last_payment_time == 500
        assert StreamParameters(RECIPIENT, CLAWBACK, 1000) == third.params
