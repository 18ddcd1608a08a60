"""
Trick resolution.

The priority suit of a trick is the suit of the first card marked as a
priority reveal (the folded card shown, or a card played as a thurp), or the
lead suit if no card is marked. Among cards of the priority suit, the lowest
``priority_rank`` wins. The winner's team takes the point value of every card
in the trick, whatever its suit.
"""
from __future__ import annotations

from dataclasses import dataclass

from .deck import Card, Suit, cards_point_total


@dataclass(frozen=True)
class TrickEntry:
    card: Card
    seat: int
    is_priority_reveal: bool = False


@dataclass(frozen=True)
class CompletedTrick:
    entries: tuple[TrickEntry, ...]
    winner: int
    points: int
    priority_suit: Suit


def priority_suit(trick: list[TrickEntry]) -> Suit:
    if not trick:
        raise ValueError("Cannot determine priority suit of an empty trick")
    for entry in trick:
        if entry.is_priority_reveal:
            return entry.card.suit
    return trick[0].card.suit


def winning_entry(trick: list[TrickEntry]) -> TrickEntry:
    suit = priority_suit(trick)
    candidates = [e for e in trick if e.card.suit == suit]
    return min(candidates, key=lambda e: e.card.priority_rank)


def trick_winner(trick: list[TrickEntry]) -> int:
    """Seat that wins the (complete) trick."""
    return winning_entry(trick).seat


def trick_points(trick: list[TrickEntry]) -> int:
    return cards_point_total(e.card for e in trick)


def resolve_trick(trick: list[TrickEntry]) -> CompletedTrick:
    return CompletedTrick(
        entries=tuple(trick),
        winner=trick_winner(trick),
        points=trick_points(trick),
        priority_suit=priority_suit(trick),
    )


__all__ = [
    "TrickEntry",
    "CompletedTrick",
    "priority_suit",
    "winning_entry",
    "trick_winner",
    "trick_points",
    "resolve_trick",
]
