"""
Store tests for the SQLAlchemy repository (SQLite in memory)
"""
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from models.match import Move, MatchResult
from core.exceptions import DuplicatePairing, StoreUnavailable
from services.match_repository import SqlAlchemyMatchRepository
from services import match_service


@pytest.fixture
def players(sql_repo):
    return sql_repo.add_participants(["Carol", "alice", "Bob", "Alice"])


def _record(player1, player2, result=MatchResult.TIE, winner=None):
    return {
        "player1_id": player1.id,
        "player1_name": player1.name,
        "player1_choice": Move.ROCK,
        "player2_id": player2.id,
        "player2_name": player2.name,
        "player2_choice": Move.ROCK,
        "result": result,
        "winner_id": winner.id if winner else None,
        "winner_name": winner.name if winner else None,
    }


def test_participants_ordered_by_name(sql_repo, players):
    names = [p.name for p in sql_repo.fetch_participants()]
    assert names == ["Alice", "Bob", "Carol", "alice"]


def test_new_participants_not_eliminated(players):
    assert all(p.eliminated is False and p.eliminated_at is None for p in players)
    assert all(p.id is not None for p in players)


def test_insert_and_exists_in_both_orders(sql_repo, players):
    carol, alice = players[0], players[1]

    match_id = sql_repo.insert_match(_record(carol, alice))

    assert match_id is not None
    assert sql_repo.exists_match(carol.id, alice.id) is True
    assert sql_repo.exists_match(alice.id, carol.id) is True
    assert sql_repo.exists_match(carol.id, players[2].id) is False


def test_pair_key_stored_unordered(sql_repo, players):
    carol, alice = players[0], players[1]
    match = sql_repo.get_match(sql_repo.insert_match(_record(alice, carol)))

    assert (match.pair_low_id, match.pair_high_id) == (min(carol.id, alice.id), max(carol.id, alice.id))
    assert match.created_at is not None


def test_unique_pair_enforced_by_store(sql_repo, players):
    """A write that slips past the guard is still rejected by the unique constraint"""
    carol, alice = players[0], players[1]
    sql_repo.insert_match(_record(carol, alice))

    with pytest.raises(DuplicatePairing):
        sql_repo.insert_match(_record(alice, carol))

    assert len(sql_repo.fetch_matches()) == 1


def test_session_usable_after_rejected_insert(sql_repo, players):
    carol, alice, bob = players[0], players[1], players[2]
    sql_repo.insert_match(_record(carol, alice))
    with pytest.raises(DuplicatePairing):
        sql_repo.insert_match(_record(carol, alice))

    sql_repo.insert_match(_record(carol, bob))

    assert len(sql_repo.fetch_matches()) == 2


def test_delete_match(sql_repo, players):
    match_id = sql_repo.insert_match(_record(players[0], players[1]))

    assert sql_repo.delete_match(match_id) is True
    assert sql_repo.get_match(match_id) is None
    assert sql_repo.delete_match(match_id) is False


def test_participant_matches(sql_repo, players):
    carol, alice, bob, other_alice = players
    sql_repo.insert_match(_record(carol, alice))
    sql_repo.insert_match(_record(bob, carol))
    sql_repo.insert_match(_record(bob, other_alice))

    ids = {m.id for m in sql_repo.participant_matches(carol.id)}

    assert len(ids) == 2
    assert all(m.involves(carol.id) for m in sql_repo.participant_matches(carol.id))


def fail_next_commit(monkeypatch, session):
    """Make the session's next commit fail as if the database went away"""
    original = session.commit

    def commit():
        monkeypatch.setattr(session, "commit", original)
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(session, "commit", commit)


def test_insert_flags_loser(sql_repo, players):
    carol, alice = players[0], players[1]

    match = sql_repo.get_match(
        sql_repo.insert_match(_record(carol, alice, MatchResult.WIN, winner=carol), loser_id=alice.id)
    )

    loser = sql_repo.get_participant(alice.id)
    assert loser.eliminated is True
    assert loser.eliminated_at == match.created_at
    assert sql_repo.get_participant(carol.id).eliminated is False


def test_insert_keeps_first_elimination(sql_repo, players):
    carol, alice, bob = players[0], players[1], players[2]
    first = sql_repo.get_match(
        sql_repo.insert_match(_record(carol, alice, MatchResult.WIN, winner=carol), loser_id=alice.id)
    )

    sql_repo.insert_match(_record(bob, alice, MatchResult.WIN, winner=bob), loser_id=alice.id)

    assert sql_repo.get_participant(alice.id).eliminated_at == first.created_at


def test_failed_commit_writes_neither_match_nor_flag(sql_repo, db_session, players, monkeypatch):
    carol, alice = players[0], players[1]
    fail_next_commit(monkeypatch, db_session)

    with pytest.raises(StoreUnavailable):
        sql_repo.insert_match(_record(carol, alice, MatchResult.WIN, winner=carol), loser_id=alice.id)

    assert sql_repo.fetch_matches() == []
    assert sql_repo.get_participant(alice.id).eliminated is False

    sql_repo.insert_match(_record(carol, alice, MatchResult.WIN, winner=carol), loser_id=alice.id)
    assert len(sql_repo.fetch_matches()) == 1


def test_delete_resyncs_loser(sql_repo, players):
    carol, alice, bob = players[0], players[1], players[2]
    first_id = sql_repo.insert_match(_record(carol, alice, MatchResult.WIN, winner=carol), loser_id=alice.id)
    second = sql_repo.get_match(
        sql_repo.insert_match(_record(bob, alice, MatchResult.WIN, winner=bob), loser_id=alice.id)
    )

    sql_repo.delete_match(first_id)
    assert sql_repo.get_participant(alice.id).eliminated_at == second.created_at

    sql_repo.delete_match(second.id)
    loser = sql_repo.get_participant(alice.id)
    assert loser.eliminated is False
    assert loser.eliminated_at is None


def test_failed_delete_keeps_match_and_flag(sql_repo, db_session, players, monkeypatch):
    carol, alice = players[0], players[1]
    match_id = sql_repo.insert_match(_record(carol, alice, MatchResult.WIN, winner=carol), loser_id=alice.id)
    fail_next_commit(monkeypatch, db_session)

    with pytest.raises(StoreUnavailable):
        sql_repo.delete_match(match_id)

    assert sql_repo.get_match(match_id) is not None
    assert sql_repo.get_participant(alice.id).eliminated is True


def test_other_integrity_errors_are_not_rematches(sql_repo, players):
    """A self-pairing row trips the distinct-players check, not the pair constraint"""
    carol = players[0]

    with pytest.raises(StoreUnavailable) as exc_info:
        sql_repo.insert_match(_record(carol, carol))

    assert not isinstance(exc_info.value, DuplicatePairing)
    assert exc_info.value.status_code == 503
    assert sql_repo.fetch_matches() == []


def test_store_errors_become_store_unavailable():
    db = MagicMock()
    db.query.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
    repository = SqlAlchemyMatchRepository(db)

    with pytest.raises(StoreUnavailable) as exc_info:
        repository.fetch_matches()

    assert exc_info.value.status_code == 503
    assert isinstance(exc_info.value.__cause__, OperationalError)
    db.rollback.assert_called_once()


class TestFullFlow:
    """Record matches through the service against a real session"""

    def test_record_and_derive(self, sql_repo, players):
        carol, alice, bob, _ = players

        match_service.record_match(sql_repo, alice.id, "rock", bob.id, "scissors")
        match_service.record_match(sql_repo, carol.id, "paper", bob.id, "paper")
        match_service.record_match(sql_repo, alice.id, "scissors", carol.id, "paper")

        bracket = match_service.build_bracket(sql_repo)

        assert [e.name for e in bracket.elimination_rounds[0]] == ["Bob"]
        assert [e.name for e in bracket.elimination_rounds[1]] == ["Carol"]
        assert [e.name for e in bracket.survivors] == ["Alice", "alice"]
        assert sql_repo.get_participant(bob.id).eliminated is True
        assert sql_repo.get_participant(alice.id).eliminated is False

    def test_rematch_rejected(self, sql_repo, players):
        carol, alice = players[0], players[1]
        match_service.record_match(sql_repo, carol.id, "rock", alice.id, "paper")

        with pytest.raises(DuplicatePairing):
            match_service.record_match(sql_repo, alice.id, "rock", carol.id, "paper")

        assert len(sql_repo.fetch_matches()) == 1
