# simulate.py
# Plays the recommended strategy against an opponent that nominates and sends
# uniformly at random, on random balanced boards.
#
# Run:
#   python simulate.py --games 500 --seed 7
from __future__ import annotations

import argparse
import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from config import MAX_SCORE, SIM_GAMES, SIM_SEED, setup_logging
from matrix import balanced_matrix
from session import LockedPairing, PairingSession, Phase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContestRecord:
    own_score: float
    opp_score: float
    pairings: List[LockedPairing] = field(default_factory=list)


@dataclass(frozen=True)
class SimulationSummary:
    games: int
    wins: int
    ties: int
    losses: int
    mean_own_score: float
    mean_opp_score: float

    @property
    def win_rate(self) -> float:
        return self.wins / self.games if self.games else 0.0


def play_contest(matrix: Sequence[Sequence[float]], rng: random.Random) -> ContestRecord:
    session = PairingSession(matrix)

    while session.phase is Phase.DEFENDER_SELECT:
        ours = session.recommend_defenders().defender_analyses[0].player
        theirs = rng.choice(session.opp_remaining)
        session.set_defenders(ours, theirs)
        session.advance()

        our_pair = session.recommend_attackers()[0].attackers
        their_pair = rng.sample(session.opp_attacker_pool, 2)
        session.set_attackers(our_pair, their_pair)
        session.advance()

        # each defender takes the attacker best for its own side
        session.choose()

    session.lock_final()

    own = session.total_expected()
    return ContestRecord(
        own_score=own,
        opp_score=MAX_SCORE * len(session.pairings) - own,
        pairings=list(session.pairings),
    )


def run_simulation(n_games: int = SIM_GAMES, seed: Optional[int] = SIM_SEED) -> SimulationSummary:
    rng = random.Random(seed)
    wins = ties = losses = 0
    own_total = opp_total = 0.0

    for g in range(n_games):
        record = play_contest(balanced_matrix(rng), rng)
        own_total += record.own_score
        opp_total += record.opp_score
        if record.own_score > record.opp_score:
            wins += 1
        elif record.own_score == record.opp_score:
            ties += 1
        else:
            losses += 1
        logger.debug(f"game {g + 1}: {record.own_score}-{record.opp_score}")

    summary = SimulationSummary(
        games=n_games,
        wins=wins,
        ties=ties,
        losses=losses,
        mean_own_score=own_total / n_games if n_games else 0.0,
        mean_opp_score=opp_total / n_games if n_games else 0.0,
    )
    logger.info(f"{wins} wins, {ties} ties, {losses} losses over {n_games} games")
    return summary


def main(argv: Optional[List[str]] = None) -> SimulationSummary:
    parser = argparse.ArgumentParser(description="Recommended strategy vs a random opponent")
    parser.add_argument("--games", type=int, default=SIM_GAMES)
    parser.add_argument("--seed", type=int, default=SIM_SEED)
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    summary = run_simulation(args.games, args.seed)

    print(f"Games:      {summary.games}")
    print(f"W / T / L:  {summary.wins} / {summary.ties} / {summary.losses}")
    print(f"Win rate:   {summary.win_rate * 100:.1f}%")
    print(f"Mean score: {summary.mean_own_score:.1f} vs {summary.mean_opp_score:.1f}")
    return summary


if __name__ == "__main__":
    main()
