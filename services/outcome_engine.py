"""
Rock-paper-scissors outcome rules and the pairing guards that gate a match submission.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Union

from models.match import Move, MatchResult
from core.exceptions import InvalidMove, InvalidPairing, DuplicatePairing

logger = logging.getLogger(__name__)

PLAYER1 = "player1"
PLAYER2 = "player2"

# Each move beats exactly the move it maps to
BEATS = {
    Move.ROCK: Move.SCISSORS,
    Move.SCISSORS: Move.PAPER,
    Move.PAPER: Move.ROCK,
}


@dataclass(frozen=True)
class Outcome:
    result: MatchResult
    winner: Optional[str] = None  # PLAYER1, PLAYER2 or None on tie

    @property
    def is_tie(self) -> bool:
        return self.result == MatchResult.TIE


def to_move(value: Union[Move, str]) -> Move:
    """Coerce a move value ('rock', Move.ROCK, ...) into a Move"""
    if isinstance(value, Move):
        return value
    try:
        return Move(value)
    except ValueError:
        raise InvalidMove(value)


def resolve(move1: Union[Move, str], move2: Union[Move, str]) -> Outcome:
    """
    Decide a single round.

    Identical moves tie; otherwise the player whose move beats the other's wins.
    """
    move1 = to_move(move1)
    move2 = to_move(move2)

    if move1 == move2:
        return Outcome(MatchResult.TIE)

    if BEATS[move1] == move2:
        return Outcome(MatchResult.WIN, PLAYER1)
    return Outcome(MatchResult.WIN, PLAYER2)


def validate_pairing(player1_id: int, player2_id: int):
    """Reject a participant being paired with themselves"""
    if player1_id == player2_id:
        raise InvalidPairing(player1_id)


def ensure_not_played(repository, player1, player2):
    """
    Duplicate-pairing guard: one lookup on the unordered pair before the write.
    The store's unique constraint on the pair catches anything that slips past between check and insert.
    """
    if repository.exists_match(player1.id, player2.id):
        logger.warning(f"Rejected rematch between {player1.name} ({player1.id}) and {player2.name} ({player2.id})")
        raise DuplicatePairing(player1.name, player2.name)
