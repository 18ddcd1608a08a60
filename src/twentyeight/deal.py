"""
Dealing and seating: round-robin deals from the front of the deck,
alternating-seat teams, dealer rotation.
"""
from __future__ import annotations

import logging

from .deck import Card
from .errors import DeckTooSmall

logger = logging.getLogger(__name__)


def deal_round_robin(
    deck: list[Card],
    hands: list[list[Card]],
    cards_per_player: int,
    start_seat: int = 0,
    allow_short: bool = False,
) -> list[Card]:
    """
    Deal ``cards_per_player`` cards to every hand, one at a time starting at
    ``start_seat``, consuming from the front of ``deck``. Hands are extended in
    place; the undealt remainder is returned as a new list.

    With ``allow_short=True`` a deck that cannot cover the full deal is dealt
    out as far as it goes instead of raising ``DeckTooSmall``.
    """
    num_players = len(hands)
    needed = num_players * cards_per_player
    if len(deck) < needed:
        if not allow_short:
            raise DeckTooSmall(needed, len(deck))
        logger.warning("Not enough cards for deal (need %d, have %d); dealing remaining only", needed, len(deck))
    count = min(needed, len(deck))
    for i in range(count):
        hands[(start_seat + i) % num_players].append(deck[i])
    return list(deck[count:])


def team_of(seat: int) -> int:
    """Team 0 = even seats, team 1 = odd seats."""
    return seat % 2


def make_teams(num_players: int) -> dict[int, tuple[int, ...]]:
    return {
        0: tuple(range(0, num_players, 2)),
        1: tuple(range(1, num_players, 2)),
    }


def next_dealer(dealer: int, num_players: int) -> int:
    """Dealer rotates in seat order (0 -> 1 -> ... -> 0)."""
    return (dealer + 1) % num_players


def seat_order_from(start: int, num_players: int) -> tuple[int, ...]:
    """All seats starting at ``start`` and wrapping."""
    return tuple((start + i) % num_players for i in range(num_players))


__all__ = ["deal_round_robin", "team_of", "make_teams", "next_dealer", "seat_order_from"]
