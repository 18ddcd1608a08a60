"""
Typed failures raised by the engine.

Every error is a rejected action: the engine validates before mutating, so
state is unchanged when one of these is raised. All of them subclass
``ValueError`` so callers that only care about "illegal move" can catch that.
"""
from __future__ import annotations


class EngineError(ValueError):
    """Base class for every rejected action."""


# ---- Setup ----


class SetupError(EngineError):
    pass


class UnsupportedPlayerCount(SetupError):
    def __init__(self, player_count: int):
        super().__init__(f"Only 4 or 6 player games are supported (got {player_count})")
        self.player_count = player_count


class DeckTooSmall(SetupError):
    def __init__(self, needed: int, available: int):
        super().__init__(f"Deck too small for deal: need {needed}, have {available}")
        self.needed = needed
        self.available = available


# ---- Turn order ----


class TurnOrderError(EngineError):
    pass


class NotPlayersTurn(TurnOrderError):
    def __init__(self, seat: int, expected: int | None):
        super().__init__(f"Not seat {seat}'s turn (expected seat {expected})")
        self.seat = seat
        self.expected = expected


class AuctionFinished(TurnOrderError):
    def __init__(self) -> None:
        super().__init__("Bidding already finished")


class WrongPhase(TurnOrderError):
    def __init__(self, action: str, phase: str):
        super().__init__(f"Cannot {action} during phase {phase!r}")
        self.action = action
        self.phase = phase


# ---- Bid legality ----


class BidError(EngineError):
    pass


class ForcedOpenerCannotPass(BidError):
    def __init__(self, seat: int):
        super().__init__(f"Seat {seat} is the forced opener and cannot pass on its first turn")
        self.seat = seat


class BidTooLow(BidError):
    def __init__(self, value: int, min_bid: int):
        super().__init__(f"Bid {value} is below the minimum {min_bid}")
        self.value = value
        self.min_bid = min_bid


class BidNotHigherThanCurrent(BidError):
    def __init__(self, value: int, current: int):
        super().__init__(f"Bid {value} must be higher than current highest {current}")
        self.value = value
        self.current = current


class BidExceedsMax(BidError):
    def __init__(self, value: int, max_bid: int):
        super().__init__(f"Bid {value} exceeds the maximum {max_bid}")
        self.value = value
        self.max_bid = max_bid


# ---- Hand ----


class HandError(EngineError):
    pass


class CardNotInHand(HandError):
    def __init__(self, seat: int, card: object):
        super().__init__(f"Card {card} not in hand of seat {seat}")
        self.seat = seat
        self.card = card


class AlreadyFolded(HandError):
    def __init__(self, seat: int):
        super().__init__(f"A card was already folded this round (seat {seat})")
        self.seat = seat


class NotDeclarer(HandError):
    def __init__(self, seat: int, declarer: int | None):
        super().__init__(f"Seat {seat} is not the declarer (declarer is seat {declarer})")
        self.seat = seat
        self.declarer = declarer


__all__ = [
    "EngineError",
    "SetupError",
    "UnsupportedPlayerCount",
    "DeckTooSmall",
    "TurnOrderError",
    "NotPlayersTurn",
    "AuctionFinished",
    "WrongPhase",
    "BidError",
    "ForcedOpenerCannotPass",
    "BidTooLow",
    "BidNotHigherThanCurrent",
    "BidExceedsMax",
    "HandError",
    "CardNotInHand",
    "AlreadyFolded",
    "NotDeclarer",
]
