"""
Builders for transient participants and matches, and an in-memory repository.
"""
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from models.participant import Participant
from models.match import MatchRecord
from core.exceptions import StoreUnavailable
from services.match_repository import MatchRepository
from services.outcome_engine import resolve, PLAYER1, PLAYER2

START = datetime(2025, 9, 1, 9, 0, tzinfo=timezone.utc)


def make_participant(participant_id: int, name: str) -> Participant:
    return Participant(id=participant_id, name=name, eliminated=False, created_at=START)


def make_match(match_id, player1, move1, player2, move2, minute=0) -> MatchRecord:
    """Build a transient match record with the result derived from the moves"""
    outcome = resolve(move1, move2)
    winner = {PLAYER1: player1, PLAYER2: player2}.get(outcome.winner)
    return MatchRecord(
        id=match_id,
        player1_id=player1.id,
        player1_name=player1.name,
        player1_choice=move1,
        player2_id=player2.id,
        player2_name=player2.name,
        player2_choice=move2,
        result=outcome.result,
        winner_id=winner.id if winner else None,
        winner_name=winner.name if winner else None,
        created_at=START + timedelta(minutes=minute),
    )


class InMemoryRepository(MatchRepository):
    """Repository kept in plain lists; records store calls and can simulate outages"""

    def __init__(self):
        self.participants = {}
        self.matches: List[MatchRecord] = []
        self.calls: List[str] = []
        self.failing = set()
        self._next_participant_id = 1
        self._next_match_id = 1

    def _call(self, operation: str):
        self.calls.append(operation)
        if operation in self.failing:
            raise StoreUnavailable(operation)

    def fetch_participants(self):
        self._call("fetch_participants")
        return sorted(self.participants.values(), key=lambda p: (p.name, p.id))

    def fetch_matches(self):
        self._call("fetch_matches")
        return list(self.matches)

    def insert_match(self, record: dict, loser_id=None) -> int:
        self._call("insert_match")
        match = MatchRecord(
            id=self._next_match_id,
            created_at=START + timedelta(minutes=self._next_match_id),
            **record
        )
        self._next_match_id += 1
        self.matches.append(match)
        loser = self.participants.get(loser_id)
        if loser and not loser.eliminated:
            loser.eliminated = True
            loser.eliminated_at = match.created_at
        return match.id

    def exists_match(self, participant_a_id: int, participant_b_id: int) -> bool:
        self._call("exists_match")
        pair = {participant_a_id, participant_b_id}
        return any({m.player1_id, m.player2_id} == pair for m in self.matches)

    def get_participant(self, participant_id: int) -> Optional[Participant]:
        self._call("get_participant")
        return self.participants.get(participant_id)

    def add_participants(self, names):
        self._call("add_participants")
        created = []
        for name in names:
            participant = make_participant(self._next_participant_id, name)
            self.participants[participant.id] = participant
            self._next_participant_id += 1
            created.append(participant)
        return created

    def get_match(self, match_id: int):
        self._call("get_match")
        return next((m for m in self.matches if m.id == match_id), None)

    def delete_match(self, match_id: int) -> bool:
        self._call("delete_match")
        match = next((m for m in self.matches if m.id == match_id), None)
        if match is None:
            return False
        self.matches.remove(match)
        if match.loser_id in self.participants:
            self._resync_elimination(self.participants[match.loser_id])
        return True

    def _resync_elimination(self, participant):
        losses = [
            m for m in self.matches
            if m.involves(participant.id) and not m.is_tie and m.winner_id != participant.id
        ]
        first_loss = min(losses, key=lambda m: m.created_at, default=None)
        participant.eliminated = first_loss is not None
        participant.eliminated_at = first_loss.created_at if first_loss else None

    def participant_matches(self, participant_id: int):
        self._call("participant_matches")
        own = [m for m in self.matches if m.involves(participant_id)]
        return sorted(own, key=lambda m: m.created_at, reverse=True)

