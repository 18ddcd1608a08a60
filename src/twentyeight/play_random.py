"""
Tiny CLI to run random rounds through the engine.

Usage (from project root, after installing in editable mode):
    python -m twentyeight.play_random --players 6 --rounds 5 --seed 1
"""
from __future__ import annotations

import argparse
import logging
import random
from typing import Sequence

from .agents import GreedyAgent, Policy, RandomAgent
from .config import SUPPORTED_PLAYER_COUNTS
from .env import apply_action_index, encode_observation, legal_action_mask
from .game import GameEngine, RoundPhase
from .scoring import RoundOutcome

logger = logging.getLogger(__name__)

MAX_STEPS_PER_ROUND = 10_000
POLICIES = ("random", "greedy", "mixed")


def run_random_round(engine: GameEngine, agents: Sequence[Policy]) -> RoundOutcome:
    """Drive one round from init to end with one policy per seat."""
    engine.start_round()
    outcome: RoundOutcome | None = None
    steps = 0
    while engine.phase != RoundPhase.END:
        if steps >= MAX_STEPS_PER_ROUND:
            raise RuntimeError("Round did not finish within the step limit")
        seat = engine.current_turn()
        assert seat is not None
        state = engine.state
        action = agents[seat].act(encode_observation(state, seat), legal_action_mask(state, seat))
        outcome = apply_action_index(engine, seat, action)
        steps += 1
    assert outcome is not None
    return outcome


def make_agents(policy: str, player_count: int, seed: int) -> list[Policy]:
    if policy == "greedy":
        return [GreedyAgent() for _ in range(player_count)]
    if policy == "mixed":
        # greedy on even seats, random on odd seats
        return [GreedyAgent() if i % 2 == 0 else RandomAgent(seed=seed + i) for i in range(player_count)]
    return [RandomAgent(seed=seed + i) for i in range(player_count)]


def run_random_match(
    player_count: int, num_rounds: int, seed: int, policy: str = "random"
) -> list[RoundOutcome]:
    engine = GameEngine(player_count, rng=random.Random(seed))
    agents = make_agents(policy, player_count, seed)
    outcomes: list[RoundOutcome] = []
    for i in range(num_rounds):
        if i > 0:
            engine.prepare_next_round()
        outcome = run_random_round(engine, agents)
        outcomes.append(outcome)
        logger.info(
            "Round %d: declarer seat %d bid %d, team %d scored %d -> %s",
            i + 1,
            outcome.declarer,
            outcome.bid_value,
            outcome.declaring_team,
            outcome.team_score,
            "made" if outcome.success else "failed",
        )
    return outcomes


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run random rounds of 28 through the rules engine.")
    parser.add_argument(
        "--players",
        type=int,
        choices=list(SUPPORTED_PLAYER_COUNTS),
        default=4,
        help="Number of players at the table.",
    )
    parser.add_argument(
        "--rounds",
        type=int,
        default=3,
        help="Number of rounds to play.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility.",
    )
    parser.add_argument(
        "--policy",
        choices=POLICIES,
        default="random",
        help="Seat policy: random, greedy, or mixed (greedy on even seats).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    outcomes = run_random_match(args.players, args.rounds, args.seed, policy=args.policy)
    made = sum(1 for o in outcomes if o.success)
    print(f"{args.players}p {args.policy}: rounds={len(outcomes)}, contracts made={made}, failed={len(outcomes) - made}")


if __name__ == "__main__":
    main()
