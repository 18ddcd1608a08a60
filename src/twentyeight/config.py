"""
Rule parameters for one table size.

4 players: 8 ranks per suit (32 cards), 4 cards per deal.
6 players: 9 ranks per suit (36 cards), 3 cards per deal.
Bidding1 runs 14..20 with the dealer forced to open; bidding2 runs 21..28.
"""
from __future__ import annotations

from dataclasses import dataclass

from .errors import UnsupportedPlayerCount

SUPPORTED_PLAYER_COUNTS = (4, 6)
NUM_SUITS = 4

BIDDING1_MIN = 14
BIDDING1_MAX = 20
BIDDING2_MIN = 21
BIDDING2_MAX = 28


def check_player_count(player_count: int) -> int:
    if player_count not in SUPPORTED_PLAYER_COUNTS:
        raise UnsupportedPlayerCount(player_count)
    return player_count


# player count -> (cards per deal, ranks per suit)
TABLE_SHAPES: dict[int, tuple[int, int]] = {4: (4, 8), 6: (3, 9)}


@dataclass(frozen=True)
class RulesConfig:
    """
    Per-table rule constants. Deal size and deck shape follow from
    ``player_count``, so ``RulesConfig(6)`` and ``RulesConfig.for_players(6)``
    are the same table.
    """

    player_count: int = 4
    bidding1_min: int = BIDDING1_MIN
    bidding1_max: int = BIDDING1_MAX
    bidding2_min: int = BIDDING2_MIN
    bidding2_max: int = BIDDING2_MAX

    def __post_init__(self) -> None:
        check_player_count(self.player_count)

    @classmethod
    def for_players(cls, player_count: int) -> "RulesConfig":
        return cls(player_count=player_count)

    @property
    def cards_per_deal(self) -> int:
        return TABLE_SHAPES[self.player_count][0]

    @property
    def ranks_per_suit(self) -> int:
        return TABLE_SHAPES[self.player_count][1]

    @property
    def deck_size(self) -> int:
        return NUM_SUITS * self.ranks_per_suit

    @property
    def cards_per_player(self) -> int:
        """Cards a seat holds after both deals (before folding)."""
        return 2 * self.cards_per_deal


__all__ = [
    "SUPPORTED_PLAYER_COUNTS",
    "NUM_SUITS",
    "BIDDING1_MIN",
    "BIDDING1_MAX",
    "BIDDING2_MIN",
    "BIDDING2_MAX",
    "TABLE_SHAPES",
    "RulesConfig",
    "check_player_count",
]
