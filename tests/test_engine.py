"""Tests for round orchestration in GameEngine."""
import logging
import random

import pytest

from twentyeight.bidding import Bid, Pass
from twentyeight.deck import Card, Suit, build_deck
from twentyeight.errors import (
    AlreadyFolded,
    CardNotInHand,
    DeckTooSmall,
    NotDeclarer,
    NotPlayersTurn,
    UnsupportedPlayerCount,
    WrongPhase,
)
from twentyeight.game import GameEngine, RoundPhase, play_one_round, run_match

H, D, C, S = Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES


def _engine_unshuffled(players=4, dealer=0):
    """
    Engine whose deck is in catalog order. For 4 players the first deal gives
    seat 0: J♥ K♥ J♦ K♦, seat 1: 9♥ Q♥ 9♦ Q♦, seat 2: A♥ 8♥ A♦ 8♦,
    seat 3: 10♥ 7♥ 10♦ 7♦; the second deal repeats the pattern in clubs/spades.
    """
    engine = GameEngine(players, rng=random.Random(0), dealer=dealer)
    engine.state.deck = build_deck(players)
    return engine


def _to_play_phase(engine, fold=Card(D, "K")):
    """Dealer opens at 14, everyone passes, dealer folds, bidding2 passes out."""
    engine.start_round()
    dealer = engine.state.dealer
    n = engine.state.num_players
    engine.bid(dealer, 14)
    for i in range(1, n):
        engine.pass_turn((dealer + i) % n)
    engine.fold_card(dealer, fold)
    for i in range(n):
        engine.pass_turn((dealer + i) % n)
    assert engine.phase == RoundPhase.PLAY


def _first_card_bid(state, seat):
    if state.bidding.highest_bid is None:
        return Bid(seat, state.bidding.min_bid)
    return Pass(seat)


def _first_card_fold(state, seat):
    return state.players[seat].hand[0]


def _first_card_play(state, seat):
    player = state.players[seat]
    if player.hand:
        return player.hand[0], False
    return player.folded_card, True


def _assert_conserved(engine):
    s = engine.state
    assert s.cards_in_play() == s.config.deck_size
    seen = [c for p in s.players for c in p.hand]
    seen += [p.folded_card for p in s.players if p.folded_card is not None]
    seen += [e.card for e in s.current_trick]
    seen += [e.card for t in s.tricks for e in t.entries]
    seen += s.deck
    assert len(seen) == len(set(seen))


def test_unsupported_player_count():
    with pytest.raises(UnsupportedPlayerCount):
        GameEngine(5)


@pytest.mark.parametrize("players,per_deal", [(4, 4), (6, 3)])
def test_start_round_deals_first_set(players, per_deal):
    engine = GameEngine(players, rng=random.Random(1))
    assert engine.phase == RoundPhase.INIT
    engine.start_round()
    s = engine.state
    assert s.phase == RoundPhase.BIDDING1
    assert [len(p.hand) for p in s.players] == [per_deal] * players
    assert len(s.deck) == s.config.deck_size - per_deal * players
    assert engine.current_turn() == s.dealer
    assert s.bidding.forced_opener == s.dealer
    _assert_conserved(engine)


def test_first_deal_is_round_robin_from_seat_zero():
    engine = _engine_unshuffled()
    engine.start_round()
    assert engine.state.players[0].hand == [Card(H, "J"), Card(H, "K"), Card(D, "J"), Card(D, "K")]
    assert engine.state.players[3].hand == [Card(H, "10"), Card(H, "7"), Card(D, "10"), Card(D, "7")]


def test_deck_too_small_leaves_state_untouched():
    engine = GameEngine(4, rng=random.Random(2))
    engine.state.deck = build_deck(4)[:10]
    with pytest.raises(DeckTooSmall):
        engine.start_round()
    assert engine.phase == RoundPhase.INIT
    assert all(not p.hand for p in engine.state.players)
    assert len(engine.state.deck) == 10


def test_wrong_phase_errors():
    engine = GameEngine(4, rng=random.Random(3))
    with pytest.raises(WrongPhase):
        engine.bid(0, 14)
    with pytest.raises(WrongPhase):
        engine.prepare_next_round()
    engine.start_round()
    with pytest.raises(WrongPhase):
        engine.start_round()
    with pytest.raises(WrongPhase):
        engine.play_card(0, engine.state.players[0].hand[0])


def test_bidding1_finish_moves_to_fold_with_declarer():
    engine = _engine_unshuffled(dealer=1)
    engine.start_round()
    engine.bid(1, 14)
    engine.bid(2, 17)
    engine.pass_turn(3)
    engine.pass_turn(0)
    assert engine.phase == RoundPhase.BIDDING1
    engine.pass_turn(1)
    assert engine.phase == RoundPhase.FOLD
    assert engine.state.declarer == 2
    assert engine.current_turn() == 2


def test_fold_errors_and_second_deal():
    engine = _engine_unshuffled()
    engine.start_round()
    engine.bid(0, 14)
    for seat in (1, 2, 3):
        engine.pass_turn(seat)

    with pytest.raises(NotDeclarer):
        engine.fold_card(1, Card(H, "9"))
    with pytest.raises(CardNotInHand):
        engine.fold_card(0, Card(S, "J"))
    assert engine.state.players[0].folded_card is None

    engine.fold_card(0, Card(D, "K"))
    s = engine.state
    assert s.phase == RoundPhase.BIDDING2
    assert s.players[0].folded_card == Card(D, "K")
    assert Card(D, "K") not in s.players[0].hand
    assert [len(p.hand) for p in s.players] == [7, 8, 8, 8]
    assert s.deck == []
    assert s.bidding.forced_opener is None
    assert (s.bidding.min_bid, s.bidding.max_bid) == (21, 28)
    assert engine.current_turn() == 0
    _assert_conserved(engine)

    with pytest.raises(AlreadyFolded):
        engine.fold_card(0, Card(H, "J"))


def test_short_second_deal_deals_what_remains(caplog):
    engine = GameEngine(4, rng=random.Random(4))
    engine.state.deck = build_deck(4)[:20]
    engine.start_round()
    engine.bid(0, 14)
    for seat in (1, 2, 3):
        engine.pass_turn(seat)
    with caplog.at_level(logging.WARNING):
        engine.fold_card(0, engine.state.players[0].hand[0])
    assert [len(p.hand) for p in engine.state.players] == [4, 5, 5, 5]
    assert engine.state.deck == []
    assert engine.phase == RoundPhase.BIDDING2
    assert "Not enough cards" in caplog.text


def test_bidding2_bid_becomes_declared_bid():
    engine = _engine_unshuffled()
    engine.start_round()
    engine.bid(0, 14)
    for seat in (1, 2, 3):
        engine.pass_turn(seat)
    engine.fold_card(0, Card(D, "K"))
    engine.pass_turn(0)
    engine.bid(1, 22)
    engine.pass_turn(2)
    engine.pass_turn(3)
    engine.pass_turn(0)
    assert engine.phase == RoundPhase.PLAY
    assert engine.state.declared_bid.seat == 1
    assert engine.state.declared_bid.value == 22
    # fold stays with the bidding1 declarer
    assert engine.state.players[0].folded_card == Card(D, "K")


def test_bidding2_passed_out_keeps_bidding1_bid():
    engine = _engine_unshuffled()
    _to_play_phase(engine)
    assert engine.state.declared_bid.seat == 0
    assert engine.state.declared_bid.value == 14
    assert engine.current_turn() == 0


def test_trick_winner_scores_and_leads_next():
    engine = _engine_unshuffled()
    _to_play_phase(engine)
    engine.play_card(0, Card(H, "K"))
    with pytest.raises(NotPlayersTurn):
        engine.play_card(2, Card(H, "A"))
    with pytest.raises(CardNotInHand):
        engine.play_card(1, Card(H, "J"))
    engine.play_card(1, Card(H, "9"))
    engine.play_card(2, Card(H, "A"))
    engine.play_card(3, Card(H, "10"))

    s = engine.state
    assert s.current_trick == []
    assert s.tricks[-1].winner == 1
    assert s.team_scores == {0: 0, 1: 4}
    assert engine.current_turn() == 1
    _assert_conserved(engine)


def test_priority_reveal_in_play():
    engine = _engine_unshuffled()
    _to_play_phase(engine)
    engine.play_card(0, Card(H, "K"))
    engine.play_card(1, Card(H, "Q"))
    engine.play_card(2, Card(S, "8"), is_priority_reveal=True)
    engine.play_card(3, Card(H, "7"))
    assert engine.state.tricks[-1].winner == 2
    assert engine.state.tricks[-1].priority_suit == S
    assert engine.state.team_scores == {0: 0, 1: 0}
    assert engine.current_turn() == 2


def test_playing_folded_card_reveals_it():
    engine = _engine_unshuffled()
    _to_play_phase(engine)
    assert Card(D, "K") in engine.legal_cards(0)
    engine.play_card(0, Card(D, "K"))
    assert engine.state.players[0].folded_card is None
    assert engine.state.current_trick[0].is_priority_reveal
    engine.play_card(1, Card(D, "9"))
    engine.play_card(2, Card(D, "A"))
    engine.play_card(3, Card(D, "7"))
    assert engine.state.tricks[-1].winner == 1
    assert engine.state.team_scores[1] == 3


@pytest.mark.parametrize("players", [4, 6])
def test_full_round_accounts_for_every_point(players):
    engine = GameEngine(players, rng=random.Random(10 + players))
    outcome = play_one_round(engine, _first_card_bid, _first_card_fold, _first_card_play)
    s = engine.state
    assert s.phase == RoundPhase.END
    assert s.outcome == outcome
    assert sum(s.team_scores.values()) == 28
    assert len(s.tricks) == s.config.cards_per_player
    assert all(not p.hand and p.folded_card is None for p in s.players)
    assert outcome.success == (outcome.team_score >= outcome.bid_value)
    assert engine.current_turn() is None
    _assert_conserved(engine)


def test_prepare_next_round_resets_and_rotates_dealer():
    engine = GameEngine(6, rng=random.Random(5), dealer=5)
    play_one_round(engine, _first_card_bid, _first_card_fold, _first_card_play)
    engine.prepare_next_round()
    s = engine.state
    assert s.dealer == 0
    assert s.phase == RoundPhase.INIT
    assert s.team_scores == {0: 0, 1: 0}
    assert all(not p.hand and p.folded_card is None for p in s.players)
    assert s.declared_bid is None and s.declarer is None and s.outcome is None
    assert s.tricks == []
    assert len(s.deck) == 36
    engine.start_round()
    assert engine.current_turn() == 0


def test_snapshot_is_independent_copy():
    engine = GameEngine(4, rng=random.Random(6))
    engine.start_round()
    snap = engine.snapshot()
    snap.players[0].hand.clear()
    assert len(engine.state.players[0].hand) == 4


def test_apply_explicit_actions():
    engine = GameEngine(4, rng=random.Random(7))
    engine.start_round()
    engine.apply(Bid(0, 15))
    engine.apply(Pass(1))
    assert engine.state.bidding.history == [(0, 15), (1, None)]


def test_run_match_rotates_dealer():
    totals, outcomes = run_match(
        3, _first_card_bid, _first_card_fold, _first_card_play, player_count=4, rng=random.Random(8)
    )
    assert len(outcomes) == 3
    assert sum(totals) == sum(1 for o in outcomes if o.success)
    # the dealer always opens at the minimum and everyone else passes
    assert [o.declarer for o in outcomes] == [0, 1, 2]
