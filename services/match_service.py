from typing import List, Union
import logging

from models.match import Move, MatchRecord
from models.participant import Participant
from core.exceptions import ParticipantNotFound, MatchNotFound
from services.match_repository import MatchRepository
from services.outcome_engine import resolve, to_move, validate_pairing, ensure_not_played, PLAYER1, PLAYER2
from services.bracket_deriver import Bracket, derive_bracket, sort_chronologically
from services.roster_import import parse_roster

logger = logging.getLogger(__name__)


def _require_participant(repository: MatchRepository, participant_id: int) -> Participant:
    participant = repository.get_participant(participant_id)
    if not participant:
        raise ParticipantNotFound(participant_id)
    return participant


def record_match(
    repository: MatchRepository,
    player1_id: int,
    player1_choice: Union[Move, str],
    player2_id: int,
    player2_choice: Union[Move, str],
) -> MatchRecord:
    """
    Validate, resolve and persist one match.

    Order matters: self-pairing is rejected before touching the store, the
    rematch guard runs before the outcome is computed, and nothing is written
    unless every check passes.
    """
    validate_pairing(player1_id, player2_id)
    player1_choice = to_move(player1_choice)
    player2_choice = to_move(player2_choice)

    player1 = _require_participant(repository, player1_id)
    player2 = _require_participant(repository, player2_id)

    ensure_not_played(repository, player1, player2)

    outcome = resolve(player1_choice, player2_choice)
    winner = {PLAYER1: player1, PLAYER2: player2}.get(outcome.winner)
    loser = None
    if winner:
        loser = player2 if winner is player1 else player1

    # The loser's elimination flag is written together with the match
    match_id = repository.insert_match({
        "player1_id": player1.id,
        "player1_name": player1.name,
        "player1_choice": player1_choice,
        "player2_id": player2.id,
        "player2_name": player2.name,
        "player2_choice": player2_choice,
        "result": outcome.result,
        "winner_id": winner.id if winner else None,
        "winner_name": winner.name if winner else None,
    }, loser_id=loser.id if loser else None)
    match = repository.get_match(match_id)

    if not winner:
        logger.info(f"Match {match_id}: {player1.name} and {player2.name} tied with {player1_choice.value}")
        return match

    logger.info(f"Match {match_id}: {winner.name} beat {loser.name} ({player1_choice.value} vs {player2_choice.value})")
    return match


def delete_match(repository: MatchRepository, match_id: int):
    match = repository.get_match(match_id)
    if not match:
        raise MatchNotFound(match_id)

    description = f"{match.player1_name} vs {match.player2_name}"
    repository.delete_match(match_id)
    logger.info(f"Deleted match {match_id} ({description})")


def list_matches(repository: MatchRepository) -> List[MatchRecord]:
    """All matches, newest first"""
    return list(reversed(sort_chronologically(repository.fetch_matches())))


def participant_history(repository: MatchRepository, participant_id: int) -> List[MatchRecord]:
    _require_participant(repository, participant_id)
    return repository.participant_matches(participant_id)


def import_roster(repository: MatchRepository, text: str) -> List[Participant]:
    names = parse_roster(text)
    participants = repository.add_participants(names)
    logger.info(f"Imported {len(participants)} participants")
    return participants


def build_bracket(repository: MatchRepository) -> Bracket:
    """Fetch the roster and the match log and derive the elimination tree; no writes"""
    return derive_bracket(repository.fetch_participants(), repository.fetch_matches())
