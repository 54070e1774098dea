from math import comb

import pytest

from attackers import (
    analyze_attacker_pairs,
    best_attacker_pair,
    best_pair_against,
    face_off,
    opposing_pair_against,
)


def test_pair_expected_is_the_minimum(scores):
    # scores[1][0] = 14, scores[2][0] = 7
    pairs = analyze_attacker_pairs(scores, 0, [1, 2])
    assert len(pairs) == 1
    p = pairs[0]
    assert p.attackers == (1, 2)
    assert p.expected_score == 7
    assert p.forced == 2
    assert p.refused == 1


@pytest.mark.parametrize("n", [0, 1, 2, 3, 4, 5])
def test_pair_count(scores, n):
    pairs = analyze_attacker_pairs(scores, 0, list(range(n)))
    assert len(pairs) == (comb(n, 2) if n >= 2 else 0)


def test_pairs_sorted_descending(scores):
    pairs = analyze_attacker_pairs(scores, 1, [0, 1, 2, 3, 4])
    values = [p.expected_score for p in pairs]
    assert values == sorted(values, reverse=True)
    # column 1: 8, 10, 12, 6, 15 -> best pair is (2, 4) with min 12
    assert pairs[0].attackers == (2, 4)
    assert pairs[0].expected_score == 12
    assert pairs[0].forced == 2


def test_tie_forces_first_member(even):
    pairs = analyze_attacker_pairs(even, 0, [3, 1])
    assert pairs[0].forced == 3
    assert pairs[0].refused == 1


def test_ties_keep_generation_order(even):
    pairs = analyze_attacker_pairs(even, 0, [0, 1, 2])
    assert [p.attackers for p in pairs] == [(0, 1), (0, 2), (1, 2)]


def test_best_attacker_pair(scores):
    best = best_attacker_pair(scores, 1, [0, 1, 2, 3, 4])
    assert best is not None
    assert best.attackers == (2, 4)
    assert best_attacker_pair(scores, 1, [3]) is None


def test_face_off(scores):
    assert face_off(scores, (2, 4), 1) == (12, 2, 4)
    assert face_off(scores, (4, 2), 1) == (12, 2, 4)


def test_best_pair_against_maximizes_minimum(scores):
    assert best_pair_against(scores, 1, [1, 2, 3, 4]) == (2, 4)


def test_best_pair_against_short_pools(scores):
    assert best_pair_against(scores, 1, [3, 0]) == (3, 0)
    assert best_pair_against(scores, 1, [3]) == (3, 3)


def test_best_pair_against_first_wins_ties(even):
    assert best_pair_against(even, 0, [4, 2, 1]) == (4, 2)


def test_opposing_pair_against(scores):
    # row 0 over [0, 2, 3, 4]: 10, 15, 12, 6
    assert opposing_pair_against(scores, 0, [0, 2, 3, 4]) == (4, 0)
    assert opposing_pair_against(scores, 0, [2, 4]) == (2, 4)
    assert opposing_pair_against(scores, 0, [2]) == (2, 2)
