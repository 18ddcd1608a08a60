"""
Observation / action encoding for agents driving a ``GameEngine``.

Flat ``float32`` observations and boolean legal-action masks over one global
action space, so the same ``Policy`` can make every decision of a round:

- 0          : pass
- 1..15      : bid 14..28
- 16..51     : fold or play card ``card_index`` (36 slots, 6-player deck)
- 52..87     : play card ``card_index`` as a priority reveal

The 4-player deck uses a subset of the 36 card slots (no sixes).
"""
from __future__ import annotations

from typing import Iterable

import numpy as np

from .bidding import Bid, Pass, can_pass, legal_bid_values
from .config import BIDDING1_MIN, BIDDING2_MAX, SUPPORTED_PLAYER_COUNTS
from .deck import RANKS_6P, Card, Suit
from .game import GameEngine, RoundPhase, RoundState
from .scoring import RoundOutcome

MAX_PLAYERS: int = 6
NUM_CARDS: int = len(Suit) * len(RANKS_6P)  # 36
PASS_ACTION: int = 0
NUM_BID_ACTIONS: int = 1 + (BIDDING2_MAX - BIDDING1_MIN + 1)  # pass + 15 values
NUM_CARD_ACTIONS: int = NUM_CARDS
CARD_ACTION_OFFSET: int = NUM_BID_ACTIONS
REVEAL_ACTION_OFFSET: int = NUM_BID_ACTIONS + NUM_CARD_ACTIONS
NUM_ACTIONS: int = NUM_BID_ACTIONS + 2 * NUM_CARD_ACTIONS  # 88

_PHASES = list(RoundPhase)
_MAX_SCORE = float(BIDDING2_MAX)

# 4 card sets + bids/passed + highest + seat/dealer/declarer + phase + player count + scores + priority
OBS_SIZE: int = (
    4 * NUM_CARDS
    + 2 * MAX_PLAYERS
    + 1
    + 3 * MAX_PLAYERS
    + len(_PHASES)
    + len(SUPPORTED_PLAYER_COUNTS)
    + 2
    + len(Suit)
)


def card_index(card: Card) -> int:
    """Stable index 0..35: suit-major, then trick precedence (J first)."""
    return int(card.suit) * len(RANKS_6P) + card.priority_rank


def card_from_index(index: int) -> Card:
    suit, rank_pos = divmod(index, len(RANKS_6P))
    return Card(Suit(suit), RANKS_6P[rank_pos])


def bid_action(value: int) -> int:
    return value - BIDDING1_MIN + 1


def encode_card_set(cards: Iterable[Card]) -> np.ndarray:
    vec = np.zeros(NUM_CARDS, dtype=np.float32)
    for c in cards:
        vec[card_index(c)] = 1.0
    return vec


def _one_hot(index: int | None, size: int) -> np.ndarray:
    vec = np.zeros(size, dtype=np.float32)
    if index is not None and 0 <= index < size:
        vec[index] = 1.0
    return vec


def encode_observation(state: RoundState, seat: int) -> np.ndarray:
    """
    Observation for ``seat``. Only public information plus the seat's own
    hand and own folded card; other hands and the deck are hidden.
    """
    player = state.players[seat]
    own_fold = [player.folded_card] if player.folded_card is not None else []
    played = [e.card for t in state.tricks for e in t.entries]

    bids = np.zeros(MAX_PLAYERS, dtype=np.float32)
    passed = np.zeros(MAX_PLAYERS, dtype=np.float32)
    highest = 0.0
    if state.bidding is not None:
        for s, value in state.bidding.history:
            if value is not None:
                bids[s] = value / _MAX_SCORE
        for s in state.bidding.passed_seats:
            passed[s] = 1.0
        if state.bidding.highest_bid is not None:
            highest = state.bidding.highest_bid.value / _MAX_SCORE

    revealed: int | None = None
    for e in state.current_trick:
        if e.is_priority_reveal:
            revealed = int(e.card.suit)
            break

    parts = [
        encode_card_set(player.hand),
        encode_card_set(own_fold),
        encode_card_set(e.card for e in state.current_trick),
        encode_card_set(played),
        bids,
        passed,
        np.array([highest], dtype=np.float32),
        _one_hot(seat, MAX_PLAYERS),
        _one_hot(state.dealer, MAX_PLAYERS),
        _one_hot(state.declarer, MAX_PLAYERS),
        _one_hot(_PHASES.index(state.phase), len(_PHASES)),
        _one_hot(SUPPORTED_PLAYER_COUNTS.index(state.num_players), len(SUPPORTED_PLAYER_COUNTS)),
        np.array([state.team_scores[0], state.team_scores[1]], dtype=np.float32) / _MAX_SCORE,
        _one_hot(revealed, len(Suit)),
    ]
    obs = np.concatenate(parts)
    assert obs.shape == (OBS_SIZE,)
    return obs


def legal_action_mask(state: RoundState, seat: int) -> np.ndarray:
    """Boolean mask over NUM_ACTIONS for ``seat`` in the current phase."""
    mask = np.zeros(NUM_ACTIONS, dtype=bool)
    player = state.players[seat]
    if state.phase in (RoundPhase.BIDDING1, RoundPhase.BIDDING2):
        bidding = state.bidding
        if bidding is None or bidding.finished or bidding.current_seat != seat:
            return mask
        mask[PASS_ACTION] = can_pass(bidding)
        for value in legal_bid_values(bidding):
            mask[bid_action(value)] = True
    elif state.phase == RoundPhase.FOLD:
        if seat == state.declarer:
            for c in player.hand:
                mask[CARD_ACTION_OFFSET + card_index(c)] = True
    elif state.phase == RoundPhase.PLAY:
        assert state.leader is not None
        if (state.leader + len(state.current_trick)) % state.num_players != seat:
            return mask
        for c in player.hand:
            mask[CARD_ACTION_OFFSET + card_index(c)] = True
            mask[REVEAL_ACTION_OFFSET + card_index(c)] = True
        if player.folded_card is not None:
            # the folded card is always played face up
            mask[REVEAL_ACTION_OFFSET + card_index(player.folded_card)] = True
    return mask


def apply_action_index(engine: GameEngine, seat: int, action: int) -> RoundOutcome | None:
    """Translate a global action index into the matching engine call."""
    if not 0 <= action < NUM_ACTIONS:
        raise ValueError(f"Action index out of range: {action}")
    phase = engine.phase
    if action < NUM_BID_ACTIONS:
        if action == PASS_ACTION:
            engine.apply(Pass(seat=seat))
        else:
            engine.apply(Bid(seat=seat, value=action - 1 + BIDDING1_MIN))
        return None
    if action < REVEAL_ACTION_OFFSET:
        card = card_from_index(action - CARD_ACTION_OFFSET)
        if phase == RoundPhase.FOLD:
            engine.fold_card(seat, card)
            return None
        return engine.play_card(seat, card)
    card = card_from_index(action - REVEAL_ACTION_OFFSET)
    return engine.play_card(seat, card, is_priority_reveal=True)


__all__ = [
    "MAX_PLAYERS",
    "NUM_CARDS",
    "PASS_ACTION",
    "NUM_BID_ACTIONS",
    "NUM_CARD_ACTIONS",
    "CARD_ACTION_OFFSET",
    "REVEAL_ACTION_OFFSET",
    "NUM_ACTIONS",
    "OBS_SIZE",
    "card_index",
    "card_from_index",
    "bid_action",
    "encode_card_set",
    "encode_observation",
    "legal_action_mask",
    "apply_action_index",
]
