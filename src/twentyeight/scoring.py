"""
Round outcome: the declaring team makes its contract when the trick points it
collected reach the declared bid (score == bid counts as made). Trick points
are the only score; there is no bonus or penalty on top.
"""
from __future__ import annotations

from dataclasses import dataclass

from .deal import team_of


@dataclass(frozen=True)
class RoundOutcome:
    declarer: int
    declaring_team: int
    bid_value: int
    team_score: int
    success: bool
    team_scores: tuple[int, int]


def declaring_team_made_bid(team_score: int, bid_value: int) -> bool:
    return team_score >= bid_value


def round_outcome(declarer: int, bid_value: int, team_scores: dict[int, int]) -> RoundOutcome:
    team = team_of(declarer)
    score = team_scores[team]
    return RoundOutcome(
        declarer=declarer,
        declaring_team=team,
        bid_value=bid_value,
        team_score=score,
        success=declaring_team_made_bid(score, bid_value),
        team_scores=(team_scores[0], team_scores[1]),
    )


__all__ = ["RoundOutcome", "declaring_team_made_bid", "round_outcome"]
