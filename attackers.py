# attackers.py
# We send two attackers at the opposing defender, who then picks the one it
# would rather face (the lower score for us). A pair is worth the minimum of
# its two scores.
from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from defender import worst_matchups


@dataclass(frozen=True)
class AttackerPair:
    attackers: Tuple[int, int]
    expected_score: float
    forced: int   # the one the defender chooses to face
    refused: int  # goes back to our pool


def face_off(matrix: Sequence[Sequence[float]], pair: Tuple[int, int], opposing_defender: int) -> Tuple[float, int, int]:
    """(score, forced, refused) once the opposing defender has chosen; ties force the first member."""
    a, b = pair
    sa = matrix[a][opposing_defender]
    sb = matrix[b][opposing_defender]
    if sa <= sb:
        return sa, a, b
    return sb, b, a


def analyze_attacker_pairs(
    matrix: Sequence[Sequence[float]],
    opposing_defender: int,
    available_own: Sequence[int],
) -> List[AttackerPair]:
    out: List[AttackerPair] = []
    for pair in itertools.combinations(available_own, 2):
        score, forced, refused = face_off(matrix, pair, opposing_defender)
        out.append(AttackerPair(attackers=pair, expected_score=score, forced=forced, refused=refused))
    # stable: equal scores keep generation order
    out.sort(key=lambda p: p.expected_score, reverse=True)
    return out


def best_attacker_pair(
    matrix: Sequence[Sequence[float]],
    opposing_defender: int,
    available_own: Sequence[int],
) -> Optional[AttackerPair]:
    pairs = analyze_attacker_pairs(matrix, opposing_defender, available_own)
    return pairs[0] if pairs else None


# =========================
# Pair pickers used by the game-tree code
# =========================
# Both have the signature (matrix, target, candidates) -> (a, b) so they can be
# handed to the exchange resolver and the opponent analysis alike.

def best_pair_against(matrix: Sequence[Sequence[float]], target: int, candidates: Sequence[int]) -> Tuple[int, int]:
    """Our pair maximizing min(score) against `target`; first pair wins ties."""
    if len(candidates) <= 2:
        return candidates[0], candidates[-1]

    best = (candidates[0], candidates[1])
    best_min = float("-inf")
    for a, b in itertools.combinations(candidates, 2):
        v = min(matrix[a][target], matrix[b][target])
        if v > best_min:
            best_min = v
            best = (a, b)
    return best


def opposing_pair_against(matrix: Sequence[Sequence[float]], target: int, candidates: Sequence[int]) -> Tuple[int, int]:
    """Their pair against our defender `target`: the two who score lowest for us."""
    if len(candidates) <= 2:
        return candidates[0], candidates[-1]
    return worst_matchups(matrix, target, candidates)
