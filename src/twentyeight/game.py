"""
Round orchestration: deal → bidding1 → fold → deal → bidding2 → play → end.

``GameEngine`` owns one table's ``RoundState`` and is the only thing that
mutates it. Every public operation validates fully before changing anything,
so a raised ``EngineError`` leaves the round exactly as it was.
"""
from __future__ import annotations

import copy
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from .bidding import (
    Bid,
    BidAction,
    BiddingPhase,
    BiddingState,
    HighBid,
    Pass,
    apply_action,
    create_bidding_state,
)
from .config import RulesConfig
from .deal import deal_round_robin, make_teams, next_dealer, team_of
from .deck import Card, build_deck, shuffle
from .errors import (
    AlreadyFolded,
    CardNotInHand,
    NotDeclarer,
    NotPlayersTurn,
    WrongPhase,
)
from .play import CompletedTrick, TrickEntry, resolve_trick
from .scoring import RoundOutcome, round_outcome

logger = logging.getLogger(__name__)


class RoundPhase(str, Enum):
    INIT = "init"
    BIDDING1 = "bidding1"
    FOLD = "fold"
    BIDDING2 = "bidding2"
    PLAY = "play"
    END = "end"


@dataclass
class PlayerState:
    index: int
    hand: list[Card] = field(default_factory=list)
    folded_card: Card | None = None


@dataclass
class RoundState:
    """Everything about the round in progress. Read it via ``GameEngine.snapshot()``."""

    config: RulesConfig
    dealer: int
    players: list[PlayerState]
    teams: dict[int, tuple[int, ...]]
    deck: list[Card]
    phase: RoundPhase = RoundPhase.INIT
    team_scores: dict[int, int] = field(default_factory=lambda: {0: 0, 1: 0})
    bidding: BiddingState | None = None
    declarer: int | None = None  # highest bidder of bidding1, holder of the fold
    bidding1_bid: HighBid | None = None
    declared_bid: HighBid | None = None
    current_trick: list[TrickEntry] = field(default_factory=list)
    leader: int | None = None
    tricks: list[CompletedTrick] = field(default_factory=list)
    outcome: RoundOutcome | None = None

    @property
    def num_players(self) -> int:
        return len(self.players)

    def fold_done(self) -> bool:
        return self.declarer is not None and self.phase not in (RoundPhase.BIDDING1, RoundPhase.FOLD)

    def cards_in_play(self) -> int:
        """Hands + held folded cards + current trick + resolved tricks + deck."""
        held = sum(len(p.hand) + (p.folded_card is not None) for p in self.players)
        played = len(self.current_trick) + sum(len(t.entries) for t in self.tricks)
        return held + played + len(self.deck)


class GameEngine:
    """
    Rules engine for one table. Seats are 0..player_count-1; teams are even
    vs odd seats.

    Usage:
        engine = GameEngine(4, rng=random.Random(7))
        engine.start_round()
        engine.bid(0, 14)
        ...
    """

    def __init__(
        self,
        player_count: int = 4,
        rng: random.Random | None = None,
        dealer: int = 0,
    ) -> None:
        self.config = RulesConfig.for_players(player_count)
        self.rng = rng or random.Random()
        n = self.config.player_count
        self.state = RoundState(
            config=self.config,
            dealer=dealer % n,
            players=[PlayerState(index=i) for i in range(n)],
            teams=make_teams(n),
            deck=self._fresh_deck(),
        )

    # ---- Read access ----

    @property
    def phase(self) -> RoundPhase:
        return self.state.phase

    def snapshot(self) -> RoundState:
        """Deep copy of the current state; mutating it does not affect the engine."""
        return copy.deepcopy(self.state)

    def current_turn(self) -> int | None:
        """Seat expected to act now, or None in init/end."""
        s = self.state
        if s.phase in (RoundPhase.BIDDING1, RoundPhase.BIDDING2):
            assert s.bidding is not None
            return s.bidding.current_seat
        if s.phase == RoundPhase.FOLD:
            return s.declarer
        if s.phase == RoundPhase.PLAY:
            assert s.leader is not None
            return (s.leader + len(s.current_trick)) % s.num_players
        return None

    def legal_cards(self, seat: int) -> list[Card]:
        """Cards ``seat`` could play now: its hand plus a folded card it still holds."""
        player = self.state.players[seat]
        cards = list(player.hand)
        if player.folded_card is not None:
            cards.append(player.folded_card)
        return cards

    # ---- Transitions ----

    def start_round(self) -> None:
        """init → bidding1: first deal, then the dealer-forced auction."""
        s = self.state
        self._require_phase("start round", RoundPhase.INIT)
        hands = [list(p.hand) for p in s.players]
        remaining = deal_round_robin(s.deck, hands, self.config.cards_per_deal, start_seat=0)
        for player, hand in zip(s.players, hands):
            player.hand = hand
        s.deck = remaining
        s.bidding = create_bidding_state(
            s.num_players, s.dealer, BiddingPhase.BIDDING1, forced_opener=s.dealer
        )
        s.phase = RoundPhase.BIDDING1
        logger.info("Round started, dealer=%d, hands=%s", s.dealer, [len(p.hand) for p in s.players])

    def bid(self, seat: int, value: int) -> None:
        self._apply_bid_action(Bid(seat=seat, value=value))

    def pass_turn(self, seat: int) -> None:
        self._apply_bid_action(Pass(seat=seat))

    def apply(self, action: BidAction) -> None:
        """Apply an explicit ``Bid`` or ``Pass``."""
        self._apply_bid_action(action)

    def fold_card(self, seat: int, card: Card) -> None:
        """fold → bidding2: declarer sets one card aside, then the second deal."""
        s = self.state
        if s.fold_done():
            raise AlreadyFolded(s.declarer)  # type: ignore[arg-type]
        self._require_phase("fold", RoundPhase.FOLD)
        if seat != s.declarer:
            raise NotDeclarer(seat, s.declarer)
        player = s.players[seat]
        if card not in player.hand:
            raise CardNotInHand(seat, card)

        player.hand.remove(card)
        player.folded_card = card
        logger.debug("Seat %d folded a card", seat)

        hands = [p.hand for p in s.players]
        s.deck = deal_round_robin(s.deck, hands, self.config.cards_per_deal, start_seat=0, allow_short=True)
        s.bidding = create_bidding_state(s.num_players, s.dealer, BiddingPhase.BIDDING2)
        s.phase = RoundPhase.BIDDING2
        logger.info("Second deal done, hands=%s", [len(p.hand) for p in s.players])

    def play_card(self, seat: int, card: Card, is_priority_reveal: bool = False) -> RoundOutcome | None:
        """
        Play one card into the current trick. Playing the folded card always
        reveals the priority suit. Returns the round outcome when this card
        ends the round, else None.
        """
        s = self.state
        self._require_phase("play a card", RoundPhase.PLAY)
        expected = self.current_turn()
        if seat != expected:
            raise NotPlayersTurn(seat, expected)
        player = s.players[seat]
        from_fold = card not in player.hand and player.folded_card == card
        if card not in player.hand and not from_fold:
            raise CardNotInHand(seat, card)

        if from_fold:
            player.folded_card = None
            is_priority_reveal = True
            logger.info("Seat %d reveals folded card %s", seat, card)
        else:
            player.hand.remove(card)
        s.current_trick.append(TrickEntry(card=card, seat=seat, is_priority_reveal=is_priority_reveal))

        if len(s.current_trick) == s.num_players:
            self._close_trick()
        if self._all_cards_played():
            return self._end_round()
        return None

    def prepare_next_round(self) -> None:
        """end → init: rotate dealer, clear hands/scores/bids, fresh shuffled deck."""
        s = self.state
        self._require_phase("prepare next round", RoundPhase.END)
        s.dealer = next_dealer(s.dealer, s.num_players)
        for p in s.players:
            p.hand = []
            p.folded_card = None
        s.team_scores = {0: 0, 1: 0}
        s.deck = self._fresh_deck()
        s.bidding = None
        s.declarer = None
        s.bidding1_bid = None
        s.declared_bid = None
        s.current_trick = []
        s.leader = None
        s.tricks = []
        s.outcome = None
        s.phase = RoundPhase.INIT
        logger.info("Next round prepared, dealer=%d", s.dealer)

    # ---- Internal helpers ----

    def _fresh_deck(self) -> list[Card]:
        return shuffle(build_deck(self.config.player_count), self.rng)

    def _require_phase(self, action: str, *phases: RoundPhase) -> None:
        if self.state.phase not in phases:
            raise WrongPhase(action, self.state.phase.value)

    def _apply_bid_action(self, action: BidAction) -> None:
        s = self.state
        self._require_phase("bid or pass", RoundPhase.BIDDING1, RoundPhase.BIDDING2)
        assert s.bidding is not None
        apply_action(s.bidding, action)
        if not s.bidding.finished:
            return

        if s.phase == RoundPhase.BIDDING1:
            # forced opener guarantees a bid
            assert s.bidding.highest_bid is not None
            s.bidding1_bid = s.bidding.highest_bid
            s.declarer = s.bidding1_bid.seat
            s.phase = RoundPhase.FOLD
            logger.info("Bidding1 won by seat %d at %d", s.declarer, s.bidding1_bid.value)
            return

        if s.bidding.highest_bid is not None:
            s.declared_bid = s.bidding.highest_bid
        else:
            s.declared_bid = s.bidding1_bid
            logger.info("Bidding2 passed out; bidding1 bid stands")
        s.phase = RoundPhase.PLAY
        s.leader = s.dealer
        s.current_trick = []
        logger.info("Play starts, declared bid=%s", s.declared_bid)

    def _close_trick(self) -> None:
        s = self.state
        completed = resolve_trick(s.current_trick)
        s.team_scores[team_of(completed.winner)] += completed.points
        s.tricks.append(completed)
        s.current_trick = []
        s.leader = completed.winner
        logger.debug(
            "Trick %d won by seat %d (priority %s), points=%d",
            len(s.tricks), completed.winner, completed.priority_suit.name, completed.points,
        )

    def _all_cards_played(self) -> bool:
        return not self.state.current_trick and all(
            not p.hand and p.folded_card is None for p in self.state.players
        )

    def _end_round(self) -> RoundOutcome:
        s = self.state
        assert s.declared_bid is not None
        outcome = round_outcome(s.declared_bid.seat, s.declared_bid.value, s.team_scores)
        s.outcome = outcome
        s.phase = RoundPhase.END
        logger.info(
            "Round over: team %d %s (%d points vs bid %d)",
            outcome.declaring_team,
            "made it" if outcome.success else "went down",
            outcome.team_score,
            outcome.bid_value,
        )
        return outcome


# ---- Callback drivers ----

BidCallback = Callable[[RoundState, int], BidAction]
FoldCallback = Callable[[RoundState, int], Card]
PlayCallback = Callable[[RoundState, int], tuple[Card, bool]]


def play_one_round(
    engine: GameEngine,
    get_bid: BidCallback,
    get_fold: FoldCallback,
    get_play: PlayCallback,
) -> RoundOutcome:
    """
    Run a full round from init to end by asking callbacks for each decision.
    Callbacks receive a snapshot and the seat to act.
    get_bid -> Bid/Pass, get_fold -> Card, get_play -> (Card, is_priority_reveal).
    """
    engine.start_round()
    outcome: RoundOutcome | None = None
    while engine.phase != RoundPhase.END:
        seat = engine.current_turn()
        assert seat is not None
        phase = engine.phase
        if phase in (RoundPhase.BIDDING1, RoundPhase.BIDDING2):
            engine.apply(get_bid(engine.snapshot(), seat))
        elif phase == RoundPhase.FOLD:
            engine.fold_card(seat, get_fold(engine.snapshot(), seat))
        else:
            card, reveal = get_play(engine.snapshot(), seat)
            outcome = engine.play_card(seat, card, is_priority_reveal=reveal)
    assert outcome is not None
    return outcome


def run_match(
    num_rounds: int,
    get_bid: BidCallback,
    get_fold: FoldCallback,
    get_play: PlayCallback,
    player_count: int = 4,
    rng: random.Random | None = None,
) -> tuple[tuple[int, int], list[RoundOutcome]]:
    """
    Play ``num_rounds`` rounds with dealer rotation.
    Returns (contracts made per team, per-round outcomes).
    """
    engine = GameEngine(player_count, rng=rng)
    made = [0, 0]
    outcomes: list[RoundOutcome] = []
    for i in range(num_rounds):
        if i > 0:
            engine.prepare_next_round()
        outcome = play_one_round(engine, get_bid, get_fold, get_play)
        outcomes.append(outcome)
        if outcome.success:
            made[outcome.declaring_team] += 1
    return (made[0], made[1]), outcomes


__all__ = [
    "RoundPhase",
    "PlayerState",
    "RoundState",
    "GameEngine",
    "play_one_round",
    "run_match",
]
