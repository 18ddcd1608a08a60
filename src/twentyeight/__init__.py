"""Rules engine for the 28 card game (4 or 6 players)."""

__version__ = "0.1.0"

from .errors import (
    EngineError,
    UnsupportedPlayerCount,
    DeckTooSmall,
    NotPlayersTurn,
    AuctionFinished,
    WrongPhase,
    ForcedOpenerCannotPass,
    BidTooLow,
    BidNotHigherThanCurrent,
    BidExceedsMax,
    CardNotInHand,
    AlreadyFolded,
    NotDeclarer,
)
from .config import RulesConfig
from .deck import Card, Suit, build_deck, shuffle, cards_point_total
from .deal import deal_round_robin, team_of, make_teams, next_dealer
from .bidding import (
    Bid,
    Pass,
    BiddingPhase,
    BiddingState,
    HighBid,
    create_bidding_state,
    apply_action,
    legal_bid_values,
    can_pass,
)
from .play import TrickEntry, CompletedTrick, priority_suit, trick_winner, trick_points, resolve_trick
from .scoring import RoundOutcome, round_outcome
from .game import GameEngine, RoundPhase, RoundState, PlayerState, play_one_round, run_match
