"""
Baseline seats for driving a ``GameEngine`` through ``twentyeight.env``.

Every agent sees the same thing a learned policy would: the flat observation
from ``encode_observation`` and the boolean mask from ``legal_action_mask``.
The decision kind is read off the mask: any bid slot set means an auction
turn, reveal slots set means a play turn, card slots alone mean the fold.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Protocol, Sequence

import numpy as np

from .deck import Card
from .env import (
    CARD_ACTION_OFFSET,
    NUM_BID_ACTIONS,
    NUM_CARDS,
    PASS_ACTION,
    REVEAL_ACTION_OFFSET,
    card_from_index,
    card_index,
)


class Policy(Protocol):
    def act(self, obs: Sequence[float], legal_actions_mask: Sequence[bool]) -> int:
        """Return an action index whose mask entry is true."""


def _legal_indices(legal_actions_mask: Sequence[bool]) -> np.ndarray:
    legal = np.flatnonzero(np.asarray(legal_actions_mask, dtype=bool))
    if legal.size == 0:
        raise ValueError("No legal actions in mask")
    return legal


@dataclass
class RandomAgent:
    """Uniform over legal actions; seeded for reproducible matches."""

    seed: int | None = None

    def __post_init__(self) -> None:
        self._rng = np.random.default_rng(self.seed)

    def act(self, obs: Sequence[float], legal_actions_mask: Sequence[bool]) -> int:
        return int(self._rng.choice(_legal_indices(legal_actions_mask)))


def _hand_from_obs(obs: Sequence[float]) -> list[Card]:
    bits = np.asarray(obs[:NUM_CARDS])
    return [card_from_index(int(i)) for i in np.flatnonzero(bits)]


def _card_slots(mask: np.ndarray, offset: int) -> list[int]:
    """Card indices set in the card region starting at ``offset``."""
    return [int(i) for i in np.flatnonzero(mask[offset:offset + NUM_CARDS])]


@dataclass
class GreedyAgent:
    """
    Rule-of-thumb seat.

    - Auction: bids the lowest legal value when its hand holds at least
      ``min_hand_points`` points (or when passing is not allowed), else passes.
    - Fold: sets aside the best card of its longest suit.
    - Play: plays its highest-precedence card face down; the folded card goes
      out only when nothing else is left.
    """

    min_hand_points: int = 5

    def act(self, obs: Sequence[float], legal_actions_mask: Sequence[bool]) -> int:
        mask = np.asarray(legal_actions_mask, dtype=bool)
        _legal_indices(mask)
        if mask[:NUM_BID_ACTIONS].any():
            return self._bid(obs, mask)
        if mask[REVEAL_ACTION_OFFSET:].any():
            return self._play(mask)
        return self._fold(mask)

    def _bid(self, obs: Sequence[float], mask: np.ndarray) -> int:
        bids = [i for i in range(PASS_ACTION + 1, NUM_BID_ACTIONS) if mask[i]]
        points = sum(c.point_value for c in _hand_from_obs(obs))
        if bids and (points >= self.min_hand_points or not mask[PASS_ACTION]):
            return bids[0]
        return PASS_ACTION

    def _fold(self, mask: np.ndarray) -> int:
        cards = [card_from_index(i) for i in _card_slots(mask, CARD_ACTION_OFFSET)]
        lengths = Counter(c.suit for c in cards)
        # longest suit, lower suit index on ties
        suit = min(lengths, key=lambda s: (-lengths[s], int(s)))
        best = min((c for c in cards if c.suit == suit), key=lambda c: c.priority_rank)
        return CARD_ACTION_OFFSET + card_index(best)

    def _play(self, mask: np.ndarray) -> int:
        plain = _card_slots(mask, CARD_ACTION_OFFSET)
        if plain:
            best = min(plain, key=lambda i: (card_from_index(i).priority_rank, i))
            return CARD_ACTION_OFFSET + best
        # only the folded card is left
        return REVEAL_ACTION_OFFSET + _card_slots(mask, REVEAL_ACTION_OFFSET)[0]


__all__ = ["Policy", "RandomAgent", "GreedyAgent"]
