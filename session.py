# session.py
# In-memory walk through one contest:
#   defender-select -> defender-reveal -> attacker-select -> attacker-reveal
#   -> defender-choose, once per exchange round, then the forced final pairing.
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from attackers import face_off
from defender import defend_against
from matrix import validate_matrix
from solver import (
    AttackerAnalysis,
    DefenderPhaseResult,
    OpponentAttackerAnalysis,
    analyze_attacker_phase,
    analyze_defender_phase,
    analyze_opponent_attacker_phase,
)

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    DEFENDER_SELECT = "defender-select"
    DEFENDER_REVEAL = "defender-reveal"
    ATTACKER_SELECT = "attacker-select"
    ATTACKER_REVEAL = "attacker-reveal"
    DEFENDER_CHOOSE = "defender-choose"
    FINAL_PAIRING = "final-pairing"
    SUMMARY = "summary"


@dataclass(frozen=True)
class LockedPairing:
    own: int
    opp: int
    expected_score: float
    round: int


@dataclass
class RoundSelection:
    own_defender: Optional[int] = None
    opp_defender: Optional[int] = None
    own_attackers: Optional[Tuple[int, int]] = None
    opp_attackers: Optional[Tuple[int, int]] = None


class PairingSession:
    def __init__(
        self,
        matrix: Sequence[Sequence[float]],
        own_players: Optional[Sequence[str]] = None,
        opp_players: Optional[Sequence[str]] = None,
    ):
        self.matrix = validate_matrix(matrix)
        n = len(self.matrix)
        if own_players is not None and len(own_players) != n:
            raise ValueError(f"Need {n} names for our roster.")
        if opp_players is not None and len(opp_players) != n:
            raise ValueError(f"Need {n} names for the opposing roster.")

        self.own_players = list(own_players) if own_players is not None else [f"A{i+1}" for i in range(n)]
        self.opp_players = list(opp_players) if opp_players is not None else [f"B{i+1}" for i in range(n)]

        self.own_remaining: List[int] = list(range(n))
        self.opp_remaining: List[int] = list(range(n))
        self.pairings: List[LockedPairing] = []
        self.round = 1
        self.selections: Dict[int, RoundSelection] = {1: RoundSelection()}
        self.phase = Phase.DEFENDER_SELECT

    # -------------------------
    # State helpers
    # -------------------------

    @property
    def current(self) -> RoundSelection:
        return self.selections[self.round]

    @property
    def is_complete(self) -> bool:
        return self.phase is Phase.SUMMARY

    @property
    def own_attacker_pool(self) -> List[int]:
        return [p for p in self.own_remaining if p != self.current.own_defender]

    @property
    def opp_attacker_pool(self) -> List[int]:
        return [p for p in self.opp_remaining if p != self.current.opp_defender]

    def expected_score(self, own: int, opp: int) -> float:
        return self.matrix[own][opp]

    def total_expected(self) -> float:
        return sum(p.expected_score for p in self.pairings)

    def _require(self, phase: Phase, action: str) -> None:
        if self.phase is not phase:
            raise ValueError(f"Cannot {action} during {self.phase.value}.")

    # -------------------------
    # Recommendations
    # -------------------------

    def recommend_defenders(self) -> DefenderPhaseResult:
        self._require(Phase.DEFENDER_SELECT, "recommend defenders")
        return analyze_defender_phase(self.matrix, self.own_remaining, self.opp_remaining)

    def recommend_attackers(self) -> List[AttackerAnalysis]:
        self._require(Phase.ATTACKER_SELECT, "recommend attackers")
        sel = self.current
        return analyze_attacker_phase(
            self.matrix, sel.own_defender, sel.opp_defender, self.own_attacker_pool, self.opp_attacker_pool
        )

    def opponent_attackers(self) -> List[OpponentAttackerAnalysis]:
        self._require(Phase.ATTACKER_SELECT, "rank opposing attackers")
        sel = self.current
        return analyze_opponent_attacker_phase(
            self.matrix, sel.own_defender, sel.opp_defender, self.own_attacker_pool, self.opp_attacker_pool
        )

    # -------------------------
    # Transitions
    # -------------------------

    def set_defenders(self, own: int, opp: int) -> None:
        self._require(Phase.DEFENDER_SELECT, "nominate defenders")
        if own not in self.own_remaining:
            raise ValueError(f"Our member {own} is not available.")
        if opp not in self.opp_remaining:
            raise ValueError(f"Their member {opp} is not available.")
        self.current.own_defender = own
        self.current.opp_defender = opp
        self.phase = Phase.DEFENDER_REVEAL

    def set_attackers(self, own_pair: Sequence[int], opp_pair: Sequence[int]) -> None:
        self._require(Phase.ATTACKER_SELECT, "send attackers")
        self.current.own_attackers = _check_pair(own_pair, self.own_attacker_pool, "our")
        self.current.opp_attackers = _check_pair(opp_pair, self.opp_attacker_pool, "their")
        self.phase = Phase.ATTACKER_REVEAL

    def advance(self) -> None:
        if self.phase is Phase.DEFENDER_REVEAL:
            self.phase = Phase.ATTACKER_SELECT
        elif self.phase is Phase.ATTACKER_REVEAL:
            self.phase = Phase.DEFENDER_CHOOSE
        else:
            raise ValueError(f"Nothing to reveal during {self.phase.value}.")

    def choose(self, own_faces: Optional[int] = None, opp_faces: Optional[int] = None) -> Tuple[LockedPairing, LockedPairing]:
        """
        Lock this round's two pairings.

        own_faces: which of their attackers our defender takes on.
        opp_faces: which of our attackers their defender takes on.
        Either left out defaults to that side's best choice.
        """
        self._require(Phase.DEFENDER_CHOOSE, "choose matchups")
        sel = self.current

        if own_faces is None:
            _, own_faces = defend_against(self.matrix, sel.own_defender, sel.opp_attackers)
        elif own_faces not in sel.opp_attackers:
            raise ValueError(f"Their member {own_faces} was not sent at our defender.")

        if opp_faces is None:
            _, opp_faces, _ = face_off(self.matrix, sel.own_attackers, sel.opp_defender)
        elif opp_faces not in sel.own_attackers:
            raise ValueError(f"Our member {opp_faces} was not sent at their defender.")

        first = self._lock(sel.own_defender, own_faces)
        second = self._lock(opp_faces, sel.opp_defender)

        if not self.own_remaining:
            self.phase = Phase.SUMMARY
            return first, second

        self.round += 1
        self.selections[self.round] = RoundSelection()
        self.phase = Phase.FINAL_PAIRING if len(self.own_remaining) == 1 else Phase.DEFENDER_SELECT
        return first, second

    def lock_final(self) -> LockedPairing:
        self._require(Phase.FINAL_PAIRING, "lock the final pairing")
        pairing = self._lock(self.own_remaining[0], self.opp_remaining[0])
        self.phase = Phase.SUMMARY
        return pairing

    def _lock(self, own: int, opp: int) -> LockedPairing:
        pairing = LockedPairing(own=own, opp=opp, expected_score=self.matrix[own][opp], round=self.round)
        self.own_remaining.remove(own)
        self.opp_remaining.remove(opp)
        self.pairings.append(pairing)
        logger.info(
            f"Round {pairing.round}: {self.own_players[own]} vs {self.opp_players[opp]} "
            f"locked (expected {pairing.expected_score})"
        )
        return pairing


def _check_pair(pair: Sequence[int], pool: Sequence[int], side: str) -> Tuple[int, int]:
    if len(pair) != 2 or pair[0] == pair[1]:
        raise ValueError(f"Need two different attackers for {side} side.")
    for p in pair:
        if p not in pool:
            raise ValueError(f"Attacker {p} is not available for {side} side.")
    return pair[0], pair[1]
