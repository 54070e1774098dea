# solver.py
from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from attackers import best_pair_against, face_off, opposing_pair_against
from config import MAX_SCORE, PAIRINGS_PER_ROUND
from defender import defend_against, defender_score, worst_matchups

logger = logging.getLogger(__name__)

Matrix = Sequence[Sequence[float]]
PairPicker = Callable[[Matrix, int, Sequence[int]], Tuple[int, int]]


# =========================
# Result records
# =========================

@dataclass(frozen=True)
class Strategy:
    kind: str  # "pure" or "mixed"
    choice: Optional[int] = None
    probabilities: Dict[int, float] = field(default_factory=dict)


@dataclass(frozen=True)
class Equilibrium:
    value: float
    own: Strategy
    opp: Strategy
    is_pure: bool


@dataclass(frozen=True)
class ExchangeResult:
    own_defender_score: float
    own_attacker_score: float
    total_score: float
    own_paired: Tuple[int, int]  # (our attacker that got faced, our defender)
    opp_paired: Tuple[int, int]  # (their attacker our defender chose, their defender)


@dataclass(frozen=True)
class DefenderAnalysis:
    player: int
    defender_score: float  # second-lowest score, the one-round intuition
    worst_matchups: Tuple[int, int]
    game_value: float  # row minimum of the payoff matrix
    is_optimal: bool
    worst_case_value: float
    best_case_value: float


@dataclass(frozen=True)
class DefenderPhaseResult:
    game_value: float
    payoff_matrix: List[List[float]]
    defender_analyses: List[DefenderAnalysis]
    equilibrium: Equilibrium


@dataclass(frozen=True)
class AttackerAnalysis:
    attackers: Tuple[int, int]
    expected_score: float
    forced: int
    refused: int
    total_expected_value: float
    is_optimal: bool = False


@dataclass(frozen=True)
class OpponentAttackerAnalysis:
    attackers: Tuple[int, int]  # opposing member indices
    expected_score_for_us: float
    expected_score_for_opp: float
    total_expected_value_for_opp: float
    forced: int  # the one our defender chooses to face
    is_optimal: bool = False


# =========================
# Zero-sum game solver
# =========================
# Pure strategies only. A saddle point is a cell that is the minimum of its row
# and the maximum of its column. Without one we report the maximin row and flag
# the result as not pure; the opposing choice is then only a placeholder.

def find_saddle_point(payoff: Matrix) -> Optional[Tuple[int, int, float]]:
    n = len(payoff)
    if n == 0 or not payoff[0]:
        return None

    for i in range(n):
        row = payoff[i]
        row_min = min(row)
        col = list(row).index(row_min)
        if all(payoff[k][col] <= row_min for k in range(n)):
            return i, col, row_min
    return None


def solve_zero_sum_game(payoff: Matrix, own_choices: Sequence[int], opp_choices: Sequence[int]) -> Equilibrium:
    if len(payoff) == 0:
        return Equilibrium(value=0, own=Strategy("pure"), opp=Strategy("pure"), is_pure=True)

    saddle = find_saddle_point(payoff)
    if saddle is not None:
        row, col, value = saddle
        return Equilibrium(
            value=value,
            own=Strategy("pure", own_choices[row]),
            opp=Strategy("pure", opp_choices[col]),
            is_pure=True,
        )

    row_minima = [min(row) for row in payoff]
    maximin = max(row_minima)
    row = row_minima.index(maximin)
    logger.debug(f"no saddle point in {len(payoff)}x{len(payoff[0])} payoff, maximin {maximin} at row {row}")

    return Equilibrium(
        value=maximin,
        own=Strategy("pure", own_choices[row]),
        opp=Strategy("pure", opp_choices[0]),
        is_pure=False,
    )


# =========================
# One exchange round
# =========================

def resolve_attacker_exchange(
    matrix: Matrix,
    own_defender: int,
    opp_defender: int,
    own_attackers: Sequence[int],
    opp_attackers: Sequence[int],
    own_pair: PairPicker = best_pair_against,
    opp_pair: PairPicker = opposing_pair_against,
) -> ExchangeResult:
    """
    Both defenders are known; each side sends its best pair and each defender
    takes the attacker it prefers.
    """
    sent_at_us = opp_pair(matrix, own_defender, opp_attackers)
    sent_by_us = own_pair(matrix, opp_defender, own_attackers)

    def_score, opp_chosen = defend_against(matrix, own_defender, sent_at_us)
    att_score, own_chosen, _ = face_off(matrix, sent_by_us, opp_defender)

    return ExchangeResult(
        own_defender_score=def_score,
        own_attacker_score=att_score,
        total_score=def_score + att_score,
        own_paired=(own_chosen, own_defender),
        opp_paired=(opp_chosen, opp_defender),
    )


# =========================
# Payoff matrix for simultaneous defender choice
# =========================

def build_defender_payoff_matrix(
    matrix: Matrix,
    own_remaining: Sequence[int],
    opp_remaining: Sequence[int],
) -> List[List[float]]:
    """
    payoff[i][j] = our total for the rest of the contest when we nominate
    own_remaining[i] and they nominate opp_remaining[j], both sides optimal after.
    """
    n = len(own_remaining)
    if n == 1:
        return [[matrix[own_remaining[0]][opp_remaining[0]]]]

    payoff = [[0 for _ in range(len(opp_remaining))] for __ in range(n)]
    for i, d_own in enumerate(own_remaining):
        for j, d_opp in enumerate(opp_remaining):
            own_att = [p for p in own_remaining if p != d_own]
            opp_att = [p for p in opp_remaining if p != d_opp]

            if not own_att or not opp_att:
                payoff[i][j] = matrix[d_own][d_opp]
                continue

            ex = resolve_attacker_exchange(matrix, d_own, d_opp, own_att, opp_att)
            own_left = [p for p in own_att if p not in ex.own_paired]
            opp_left = [p for p in opp_att if p not in ex.opp_paired]

            payoff[i][j] = ex.total_score + _sub_position_value(matrix, own_left, opp_left)

    logger.debug(f"payoff matrix built for own={list(own_remaining)} opp={list(opp_remaining)}")
    return payoff


def _sub_position_value(matrix: Matrix, own_left: Sequence[int], opp_left: Sequence[int]) -> float:
    if len(own_left) == 1:
        return matrix[own_left[0]][opp_left[0]]
    if not own_left:
        return 0
    sub = build_defender_payoff_matrix(matrix, own_left, opp_left)
    return solve_zero_sum_game(sub, own_left, opp_left).value


# =========================
# Round orchestration
# =========================

def analyze_defender_phase(
    matrix: Matrix,
    own_remaining: Sequence[int],
    opp_remaining: Sequence[int],
) -> DefenderPhaseResult:
    if len(own_remaining) == 1:
        # last round: forced pairing
        own, opp = own_remaining[0], opp_remaining[0]
        score = matrix[own][opp]
        return DefenderPhaseResult(
            game_value=score,
            payoff_matrix=[[score]],
            defender_analyses=[
                DefenderAnalysis(
                    player=own,
                    defender_score=score,
                    worst_matchups=(opp, opp),
                    game_value=score,
                    is_optimal=True,
                    worst_case_value=score,
                    best_case_value=score,
                )
            ],
            equilibrium=Equilibrium(score, Strategy("pure", own), Strategy("pure", opp), True),
        )

    payoff = build_defender_payoff_matrix(matrix, own_remaining, opp_remaining)
    eq = solve_zero_sum_game(payoff, own_remaining, opp_remaining)

    analyses: List[DefenderAnalysis] = []
    for i, p in enumerate(own_remaining):
        row = payoff[i]
        if eq.own.kind == "pure":
            is_optimal = eq.own.choice == p
        else:
            is_optimal = eq.own.probabilities.get(p, 0.0) > 0
        analyses.append(DefenderAnalysis(
            player=p,
            defender_score=defender_score(matrix, p, opp_remaining),
            worst_matchups=worst_matchups(matrix, p, opp_remaining),
            game_value=min(row),
            is_optimal=is_optimal,
            worst_case_value=min(row),
            best_case_value=max(row),
        ))

    analyses.sort(key=lambda a: a.game_value, reverse=True)
    return DefenderPhaseResult(game_value=eq.value, payoff_matrix=payoff, defender_analyses=analyses, equilibrium=eq)


def analyze_attacker_phase(
    matrix: Matrix,
    own_defender: int,
    opp_defender: int,
    own_available: Sequence[int],
    opp_available: Sequence[int],
) -> List[AttackerAnalysis]:
    """
    Rank every pair we could send at `opp_defender`, valuing each by this
    round plus every later round. The available lists exclude both defenders.
    """
    if len(own_available) < 2:
        return []

    # their reply to our defender does not depend on our pair
    sent_at_us = worst_matchups(matrix, own_defender, opp_available)
    def_score, opp_chosen = defend_against(matrix, own_defender, sent_at_us)
    opp_left = [p for p in opp_available if p != opp_chosen]

    out: List[AttackerAnalysis] = []
    for pair in itertools.combinations(own_available, 2):
        score, forced, refused = face_off(matrix, pair, opp_defender)
        own_left = [p for p in own_available if p != forced]

        if len(own_left) == 1:
            future = matrix[own_left[0]][opp_left[0]]
        else:
            future = analyze_defender_phase(matrix, own_left, opp_left).game_value

        out.append(AttackerAnalysis(
            attackers=pair,
            expected_score=score,
            forced=forced,
            refused=refused,
            total_expected_value=score + def_score + future,
        ))

    out.sort(key=lambda a: a.total_expected_value, reverse=True)
    if out:
        best = out[0].total_expected_value
        out = [replace(a, is_optimal=a.total_expected_value == best) for a in out]
    return out


def analyze_opponent_attacker_phase(
    matrix: Matrix,
    own_defender: int,
    opp_defender: int,
    own_available: Sequence[int],
    opp_available: Sequence[int],
    own_pair: PairPicker = best_pair_against,
) -> List[OpponentAttackerAnalysis]:
    """
    Same ranking as analyze_attacker_phase, for the pairs they could send at us.

    Our defender takes the better of the two they send: `forced` and
    `expected_score_for_us` describe that pick, and the opponent total counts
    this round plus every pairing still to come.
    """
    if len(opp_available) < 2:
        return []

    sent_by_us = own_pair(matrix, opp_defender, own_available)
    att_score, own_chosen, _ = face_off(matrix, sent_by_us, opp_defender)
    own_left = [p for p in own_available if p != own_chosen]

    out: List[OpponentAttackerAnalysis] = []
    for pair in itertools.combinations(opp_available, 2):
        def_score, opp_chosen = defend_against(matrix, own_defender, pair)
        opp_left = [p for p in opp_available if p != opp_chosen]

        if len(own_left) == 1:
            future = matrix[own_left[0]][opp_left[0]]
        elif not own_left:
            future = 0
        else:
            future = analyze_defender_phase(matrix, own_left, opp_left).game_value

        total_for_us = def_score + att_score + future
        pairings_left = PAIRINGS_PER_ROUND + len(own_left)

        out.append(OpponentAttackerAnalysis(
            attackers=pair,
            expected_score_for_us=def_score,
            expected_score_for_opp=MAX_SCORE - def_score,
            total_expected_value_for_opp=MAX_SCORE * pairings_left - total_for_us,
            forced=opp_chosen,
        ))

    out.sort(key=lambda a: a.total_expected_value_for_opp, reverse=True)
    if out:
        best = out[0].total_expected_value_for_opp
        out = [replace(a, is_optimal=a.total_expected_value_for_opp == best) for a in out]
    return out
