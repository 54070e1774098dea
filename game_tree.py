# game_tree.py
# Older single-perspective search: only our defender choice is modelled, the
# opponent always answers with its two worst-for-us attackers. Kept for
# comparison with the simultaneous-choice solver in solver.py.
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from defender import defend_against, worst_matchups


@dataclass(frozen=True)
class TreePairing:
    own: int
    opp: int
    score: float


@dataclass(frozen=True)
class GameResult:
    total_score: float
    pairings: List[TreePairing] = field(default_factory=list)


def evaluate_game_tree(
    matrix: Sequence[Sequence[float]],
    own_remaining: Sequence[int],
    opp_remaining: Sequence[int],
) -> GameResult:
    if len(own_remaining) == 1:
        score = matrix[own_remaining[0]][opp_remaining[0]]
        return GameResult(score, [TreePairing(own_remaining[0], opp_remaining[0], score)])

    best = GameResult(float("-inf"))
    for d in own_remaining:
        sent = worst_matchups(matrix, d, opp_remaining)
        score, chosen = defend_against(matrix, d, sent)

        rest = evaluate_game_tree(
            matrix,
            [p for p in own_remaining if p != d],
            [p for p in opp_remaining if p != chosen],
        )
        total = score + rest.total_score
        if total > best.total_score:
            best = GameResult(total, [TreePairing(d, chosen, score)] + rest.pairings)
    return best


def optimal_defender(
    matrix: Sequence[Sequence[float]],
    own_remaining: Sequence[int],
    opp_remaining: Sequence[int],
) -> Tuple[int, float]:
    """(defender, expected total) from the tree search."""
    result = evaluate_game_tree(matrix, own_remaining, opp_remaining)
    if not result.pairings:
        return own_remaining[0], 0
    return result.pairings[0].own, result.total_score
