import logging

import pytest

from session import PairingSession, Phase


def _play_round_one(session):
    session.set_defenders(0, 1)
    session.advance()
    session.set_attackers((2, 4), (4, 0))
    session.advance()
    return session.choose()


def test_full_walkthrough(scores):
    s = PairingSession(scores)
    assert s.phase is Phase.DEFENDER_SELECT

    first, second = _play_round_one(s)
    # our 0 takes their 0 over their 4 (10 > 6); their 1 faces our 2 (12 < 15)
    assert (first.own, first.opp, first.expected_score) == (0, 0, 10)
    assert (second.own, second.opp, second.expected_score) == (2, 1, 12)
    assert s.round == 2
    assert s.phase is Phase.DEFENDER_SELECT
    assert s.own_remaining == [1, 3, 4]
    assert s.opp_remaining == [2, 3, 4]

    s.set_defenders(3, 2)
    s.advance()
    assert s.own_attacker_pool == [1, 4]
    assert s.opp_attacker_pool == [3, 4]
    s.set_attackers((1, 4), (3, 4))
    s.advance()
    s.choose(own_faces=4, opp_faces=1)
    assert s.phase is Phase.FINAL_PAIRING

    final = s.lock_final()
    assert (final.own, final.opp, final.expected_score) == (4, 3, 14)
    assert s.is_complete
    assert [p.round for p in s.pairings] == [1, 1, 2, 2, 3]
    assert s.total_expected() == 10 + 12 + 9 + 9 + 14


def test_every_member_paired_once(scores):
    s = PairingSession(scores)
    while s.phase is Phase.DEFENDER_SELECT:
        best = s.recommend_defenders().defender_analyses[0].player
        s.set_defenders(best, s.opp_remaining[-1])
        s.advance()
        s.set_attackers(s.recommend_attackers()[0].attackers, s.opp_attacker_pool[:2])
        s.advance()
        s.choose()
    s.lock_final()

    assert len(s.pairings) == 5
    assert sorted(p.own for p in s.pairings) == [0, 1, 2, 3, 4]
    assert sorted(p.opp for p in s.pairings) == [0, 1, 2, 3, 4]
    assert s.total_expected() == sum(scores[p.own][p.opp] for p in s.pairings)


def test_recommendations_follow_phase(scores):
    s = PairingSession(scores)
    assert len(s.recommend_defenders().defender_analyses) == 5
    with pytest.raises(ValueError):
        s.recommend_attackers()

    s.set_defenders(0, 1)
    with pytest.raises(ValueError):
        s.recommend_defenders()
    s.advance()
    assert len(s.recommend_attackers()) == 6
    assert len(s.opponent_attackers()) == 6


def test_out_of_phase_actions(scores):
    s = PairingSession(scores)
    with pytest.raises(ValueError):
        s.set_attackers((1, 2), (0, 2))
    with pytest.raises(ValueError):
        s.choose()
    with pytest.raises(ValueError):
        s.advance()
    with pytest.raises(ValueError):
        s.lock_final()


def test_unavailable_defender(scores):
    s = PairingSession(scores)
    _play_round_one(s)
    with pytest.raises(ValueError):
        s.set_defenders(0, 3)  # our 0 is already paired
    with pytest.raises(ValueError):
        s.set_defenders(1, 1)  # their 1 is already paired


@pytest.mark.parametrize("own_pair,opp_pair", [
    ((0, 2), (4, 0)),  # our defender sent as attacker
    ((2, 2), (4, 0)),
    ((2, 4), (1, 0)),  # their defender sent as attacker
    ((2, 4, 3), (4, 0)),
])
def test_bad_attacker_pairs(scores, own_pair, opp_pair):
    s = PairingSession(scores)
    s.set_defenders(0, 1)
    s.advance()
    with pytest.raises(ValueError):
        s.set_attackers(own_pair, opp_pair)
    assert s.phase is Phase.ATTACKER_SELECT


def test_choose_rejects_unsent(scores):
    s = PairingSession(scores)
    s.set_defenders(0, 1)
    s.advance()
    s.set_attackers((2, 4), (4, 0))
    s.advance()
    with pytest.raises(ValueError):
        s.choose(own_faces=3)
    with pytest.raises(ValueError):
        s.choose(opp_faces=1)


def test_expected_score_lookup(scores):
    s = PairingSession(scores)
    assert s.expected_score(4, 1) == 15


def test_session_validates_matrix(scores):
    bad = [list(row) for row in scores]
    bad[2][3] = 25
    with pytest.raises(ValueError, match="within 0-20"):
        PairingSession(bad)
    with pytest.raises(ValueError, match="names"):
        PairingSession(scores, own_players=["only one"])


@pytest.mark.parametrize("size", [1, 3, 4])
def test_session_needs_full_roster(size):
    board = [[10] * size for _ in range(size)]
    with pytest.raises(ValueError, match="exactly 5 rows"):
        PairingSession(board)


def test_lock_is_logged(scores, caplog):
    caplog.set_level(logging.INFO, logger="session")
    s = PairingSession(scores, own_players=["Ann", "Bo", "Cy", "Di", "Ed"])
    _play_round_one(s)
    assert "Ann vs B1 locked" in caplog.text
