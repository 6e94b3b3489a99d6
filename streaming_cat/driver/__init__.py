from .coin import Coin, CoinSpend, Puzzle
from .puzzles import CatLayer, OwnerPuzzle, StreamPuzzle
from .streamed_coin import StreamedCoin, launch_hints, parse_launch_hints
from .schedule import VestingSchedule, project_schedule

__all__ = [
    "Coin",
    "CoinSpend",
    "Puzzle",
    "StreamPuzzle",
    "CatLayer",
    "OwnerPuzzle",
    "StreamedCoin",
    "launch_hints",
    "parse_launch_hints",
    "VestingSchedule",
    "project_schedule",
]
