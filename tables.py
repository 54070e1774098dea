# tables.py
# DataFrame views of the analysis records for whatever front end shows them.
from __future__ import annotations

from typing import List, Optional, Sequence

import pandas as pd

from session import LockedPairing
from solver import AttackerAnalysis, DefenderAnalysis, OpponentAttackerAnalysis


def _name(idx: int, names: Optional[Sequence[str]], prefix: str) -> str:
    if names is None:
        return f"{prefix}{idx+1}"
    return str(names[idx])


def pair_label(pair: Sequence[int], names: Optional[Sequence[str]], prefix: str) -> str:
    return f"{_name(pair[0], names, prefix)} & {_name(pair[1], names, prefix)}"


def payoff_frame(
    payoff: Sequence[Sequence[float]],
    own_choices: Sequence[int],
    opp_choices: Sequence[int],
    own_names: Optional[Sequence[str]] = None,
    opp_names: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    return pd.DataFrame(
        [list(row) for row in payoff],
        index=[_name(i, own_names, "A") for i in own_choices],
        columns=[_name(j, opp_names, "B") for j in opp_choices],
    )


def defender_table(
    analyses: List[DefenderAnalysis],
    own_names: Optional[Sequence[str]] = None,
    opp_names: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    rows = [
        {
            "Defender": _name(a.player, own_names, "A"),
            "Defender score": a.defender_score,
            "Likely attackers": pair_label(a.worst_matchups, opp_names, "B"),
            "Game value": a.game_value,
            "Worst case": a.worst_case_value,
            "Best case": a.best_case_value,
            "Optimal": a.is_optimal,
        }
        for a in analyses
    ]
    return pd.DataFrame(rows)


def attacker_table(analyses: List[AttackerAnalysis], own_names: Optional[Sequence[str]] = None) -> pd.DataFrame:
    rows = [
        {
            "Attackers": pair_label(a.attackers, own_names, "A"),
            "Expected": a.expected_score,
            "Forced": _name(a.forced, own_names, "A"),
            "Refused": _name(a.refused, own_names, "A"),
            "Total": a.total_expected_value,
            "Optimal": a.is_optimal,
        }
        for a in analyses
    ]
    return pd.DataFrame(rows)


def opponent_attacker_table(
    analyses: List[OpponentAttackerAnalysis],
    opp_names: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    rows = [
        {
            "Attackers": pair_label(a.attackers, opp_names, "B"),
            "Ours": a.expected_score_for_us,
            "Theirs": a.expected_score_for_opp,
            "Faced": _name(a.forced, opp_names, "B"),
            "Their total": a.total_expected_value_for_opp,
            "Optimal": a.is_optimal,
        }
        for a in analyses
    ]
    return pd.DataFrame(rows)


def pairings_table(
    pairings: List[LockedPairing],
    own_names: Optional[Sequence[str]] = None,
    opp_names: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    rows = [
        {
            "Round": p.round,
            "Ours": _name(p.own, own_names, "A"),
            "Theirs": _name(p.opp, opp_names, "B"),
            "Expected": p.expected_score,
        }
        for p in pairings
    ]
    return pd.DataFrame(rows, columns=["Round", "Ours", "Theirs", "Expected"])
