"""
Card catalog and deck: 4 suits × 8 ranks (4 players) or × 9 ranks (6 players).
Point values: J=3, 9=2, A=1, 10=1, everything else 0 (28 points per deck).
Trick precedence is a separate fixed order J > 9 > A > 10 > K > Q > 8 > 7 > 6.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, NamedTuple

from .config import check_player_count


class Suit(IntEnum):
    """Fixed suit order, also used for stable card indexing."""
    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3


class RankInfo(NamedTuple):
    point_value: int
    priority_rank: int  # 0 = highest trick precedence


# Ordered from highest to lowest trick precedence.
RANK_TABLE: dict[str, RankInfo] = {
    "J": RankInfo(3, 0),
    "9": RankInfo(2, 1),
    "A": RankInfo(1, 2),
    "10": RankInfo(1, 3),
    "K": RankInfo(0, 4),
    "Q": RankInfo(0, 5),
    "8": RankInfo(0, 6),
    "7": RankInfo(0, 7),
    "6": RankInfo(0, 8),
}

RANKS_4P = ("J", "9", "A", "10", "K", "Q", "8", "7")
RANKS_6P = RANKS_4P + ("6",)

TOTAL_POINTS = sum(info.point_value for info in RANK_TABLE.values()) * len(Suit)


@dataclass(frozen=True)
class Card:
    """
    A single card. ``point_value`` and ``priority_rank`` are derived from the
    rank, so two cards with the same (suit, rank) always compare equal.
    """

    suit: Suit
    rank: str

    def __post_init__(self) -> None:
        if self.rank not in RANK_TABLE:
            raise ValueError(f"Unknown rank: {self.rank!r}")
        if not isinstance(self.suit, Suit):
            object.__setattr__(self, "suit", Suit(self.suit))

    @property
    def point_value(self) -> int:
        return RANK_TABLE[self.rank].point_value

    @property
    def priority_rank(self) -> int:
        return RANK_TABLE[self.rank].priority_rank

    def __str__(self) -> str:
        suit_char = "♥♦♣♠"[self.suit]
        return f"{self.rank}{suit_char}"

    def __repr__(self) -> str:
        return str(self)


def ranks_for(player_count: int) -> tuple[str, ...]:
    """Rank set for the table size (raises UnsupportedPlayerCount)."""
    check_player_count(player_count)
    return RANKS_4P if player_count == 4 else RANKS_6P


def build_deck(player_count: int) -> list[Card]:
    """Full ordered deck (suit-major, then precedence order)."""
    ranks = ranks_for(player_count)
    return [Card(suit, rank) for suit in Suit for rank in ranks]


def shuffle(deck: Iterable[Card], rng: random.Random | None = None) -> list[Card]:
    """
    Return a uniformly shuffled copy of ``deck``; the input is not mutated.
    Pass a seeded ``random.Random`` for deterministic sequences.
    """
    if rng is None:
        rng = random.Random()
    cards = list(deck)
    rng.shuffle(cards)
    return cards


def cards_point_total(cards: Iterable[Card]) -> int:
    return sum(c.point_value for c in cards)


__all__ = [
    "Suit",
    "Card",
    "RankInfo",
    "RANK_TABLE",
    "RANKS_4P",
    "RANKS_6P",
    "TOTAL_POINTS",
    "ranks_for",
    "build_deck",
    "shuffle",
    "cards_point_total",
]
