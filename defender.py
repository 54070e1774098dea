# defender.py
# When we nominate a defender the opponent sends the two members who score
# worst for us, and we pick the better of those two. So the score we can
# guarantee is the second-lowest entry of the defender's row.
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple


@dataclass(frozen=True)
class DefenderOption:
    player: int
    defender_score: float
    worst_matchups: Tuple[int, int]  # opposing members who would be sent


def defender_score(matrix: Sequence[Sequence[float]], member: int, opposing_available: Sequence[int]) -> float:
    if len(opposing_available) < 2:
        # forced last round: nothing to choose between
        return matrix[member][opposing_available[0]]
    scores = sorted(matrix[member][j] for j in opposing_available)
    return scores[1]


def worst_matchups(
    matrix: Sequence[Sequence[float]],
    member: int,
    opposing_available: Sequence[int],
) -> Tuple[int, int]:
    """Two lowest-scoring opponents for `member`, ascending; ties keep input order."""
    if len(opposing_available) < 2:
        return opposing_available[0], opposing_available[0]
    ranked = sorted(opposing_available, key=lambda j: matrix[member][j])
    return ranked[0], ranked[1]


def defend_against(matrix: Sequence[Sequence[float]], member: int, sent: Tuple[int, int]) -> Tuple[float, int]:
    """(score, chosen) for our defender picking the better of two attackers; ties take the first."""
    a, b = sent
    sa = matrix[member][a]
    sb = matrix[member][b]
    if sa >= sb:
        return sa, a
    return sb, b


def analyze_defender_options(
    matrix: Sequence[Sequence[float]],
    available_players: Sequence[int],
    opposing_available: Sequence[int],
) -> List[DefenderOption]:
    options = [
        DefenderOption(
            player=p,
            defender_score=defender_score(matrix, p, opposing_available),
            worst_matchups=worst_matchups(matrix, p, opposing_available),
        )
        for p in available_players
    ]
    options.sort(key=lambda o: o.defender_score, reverse=True)
    return options
