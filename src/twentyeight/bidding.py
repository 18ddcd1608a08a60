"""
Two-phase auction.

Turn order starts at the dealer and wraps. A seat may bid (strictly higher
than the current highest, within the phase bounds) or pass. Any raise reopens
the auction for every seat that already passed. The auction ends when the
highest bidder is the only seat that has not passed since the last raise, or
when every seat passed without a bid.

Bidding1 (14..20) forces the dealer to open; bidding2 (21..28) has no forced
opener and may end with no bid at all.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from .config import BIDDING1_MAX, BIDDING1_MIN, BIDDING2_MAX, BIDDING2_MIN
from .deal import seat_order_from
from .errors import (
    AuctionFinished,
    BidExceedsMax,
    BidNotHigherThanCurrent,
    BidTooLow,
    ForcedOpenerCannotPass,
    NotPlayersTurn,
)

logger = logging.getLogger(__name__)


class BiddingPhase(str, Enum):
    BIDDING1 = "bidding1"
    BIDDING2 = "bidding2"


PHASE_BOUNDS: dict[BiddingPhase, tuple[int, int]] = {
    BiddingPhase.BIDDING1: (BIDDING1_MIN, BIDDING1_MAX),
    BiddingPhase.BIDDING2: (BIDDING2_MIN, BIDDING2_MAX),
}


@dataclass(frozen=True)
class Bid:
    seat: int
    value: int


@dataclass(frozen=True)
class Pass:
    seat: int


BidAction = Union[Bid, Pass]


@dataclass(frozen=True)
class HighBid:
    """Seat holding the highest bid and its value."""
    seat: int
    value: int


@dataclass
class BiddingState:
    phase: BiddingPhase
    turn_order: tuple[int, ...]
    min_bid: int
    max_bid: int
    forced_opener: int | None = None
    current_turn_index: int = 0
    passed_seats: set[int] = field(default_factory=set)
    highest_bid: HighBid | None = None
    finished: bool = False
    # (seat, value) per accepted action; value is None for a pass
    history: list[tuple[int, int | None]] = field(default_factory=list)

    @property
    def current_seat(self) -> int:
        return self.turn_order[self.current_turn_index]

    def has_acted(self, seat: int) -> bool:
        return any(s == seat for s, _ in self.history)

    def is_forced_opener_turn(self) -> bool:
        """True while the forced opener still owes its first (non-pass) action."""
        seat = self.current_seat
        return self.forced_opener == seat and not self.has_acted(seat)


def create_bidding_state(
    num_players: int,
    start_seat: int,
    phase: BiddingPhase,
    forced_opener: int | None = None,
) -> BiddingState:
    """Fresh auction starting at ``start_seat`` (normally the dealer)."""
    phase = BiddingPhase(phase)
    min_bid, max_bid = PHASE_BOUNDS[phase]
    return BiddingState(
        phase=phase,
        turn_order=seat_order_from(start_seat, num_players),
        min_bid=min_bid,
        max_bid=max_bid,
        forced_opener=forced_opener,
    )


def validate_action(state: BiddingState, action: BidAction) -> None:
    """Raise the matching error if ``action`` is illegal now. Never mutates."""
    if state.finished:
        raise AuctionFinished()
    current = state.current_seat
    if action.seat != current:
        raise NotPlayersTurn(action.seat, current)
    if isinstance(action, Pass):
        if state.is_forced_opener_turn():
            raise ForcedOpenerCannotPass(action.seat)
        return
    if action.value < state.min_bid:
        raise BidTooLow(action.value, state.min_bid)
    if state.highest_bid is not None and action.value <= state.highest_bid.value:
        raise BidNotHigherThanCurrent(action.value, state.highest_bid.value)
    if action.value > state.max_bid:
        raise BidExceedsMax(action.value, state.max_bid)


def apply_action(state: BiddingState, action: BidAction) -> BiddingState:
    """
    Validate and apply one bid or pass; returns the (mutated) state.
    On error nothing is changed.
    """
    validate_action(state, action)

    if isinstance(action, Pass):
        state.passed_seats.add(action.seat)
        state.history.append((action.seat, None))
    else:
        state.highest_bid = HighBid(seat=action.seat, value=action.value)
        # a raise reopens the auction for seats that already passed
        state.passed_seats = set()
        state.history.append((action.seat, action.value))

    state.current_turn_index = (state.current_turn_index + 1) % len(state.turn_order)

    if state.highest_bid is not None:
        still_in = [s for s in state.turn_order if s not in state.passed_seats]
        state.finished = still_in == [state.highest_bid.seat]
    else:
        state.finished = len(state.passed_seats) == len(state.turn_order)

    if state.finished:
        logger.debug("%s finished, highest bid: %s", state.phase.value, state.highest_bid)
    return state


def legal_bid_values(state: BiddingState) -> list[int]:
    """Bid values the current seat may make (empty once finished)."""
    if state.finished:
        return []
    low = state.min_bid
    if state.highest_bid is not None:
        low = max(low, state.highest_bid.value + 1)
    return list(range(low, state.max_bid + 1))


def can_pass(state: BiddingState) -> bool:
    return not state.finished and not state.is_forced_opener_turn()


__all__ = [
    "BiddingPhase",
    "PHASE_BOUNDS",
    "Bid",
    "Pass",
    "BidAction",
    "HighBid",
    "BiddingState",
    "create_bidding_state",
    "validate_action",
    "apply_action",
    "legal_bid_values",
    "can_pass",
]
