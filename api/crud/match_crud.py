from sqlalchemy.orm import Session
from sqlalchemy import and_, or_
from typing import List, Optional
from models.match import MatchRecord, MatchResult
from models.participant import Participant, utcnow


def pair_key(player_a_id: int, player_b_id: int):
    """Unordered pair as (low, high)"""
    return min(player_a_id, player_b_id), max(player_a_id, player_b_id)


def _commit(db: Session):
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise


def create_match(db: Session, match_data: dict, loser_id: Optional[int] = None) -> MatchRecord:
    """
    Insert a match record. The loser, if given and not yet eliminated, is flagged
    in the same transaction so the match and the flag are written together.
    """
    low_id, high_id = pair_key(match_data["player1_id"], match_data["player2_id"])
    db_match = MatchRecord(**match_data, pair_low_id=low_id, pair_high_id=high_id, created_at=utcnow())
    db.add(db_match)

    if loser_id is not None:
        loser = db.query(Participant).filter(Participant.id == loser_id).first()
        if loser and not loser.eliminated:
            loser.eliminated = True
            loser.eliminated_at = db_match.created_at

    _commit(db)
    db.refresh(db_match)
    return db_match


def get_match(db: Session, match_id: int) -> Optional[MatchRecord]:
    return db.query(MatchRecord).filter(MatchRecord.id == match_id).first()


def get_matches(db: Session) -> List[MatchRecord]:
    """All matches in insertion order"""
    return db.query(MatchRecord).order_by(MatchRecord.id).all()


def match_exists(db: Session, player_a_id: int, player_b_id: int) -> bool:
    """Check both orientations of the pair"""
    return db.query(MatchRecord.id).filter(
        or_(
            and_(MatchRecord.player1_id == player_a_id, MatchRecord.player2_id == player_b_id),
            and_(MatchRecord.player1_id == player_b_id, MatchRecord.player2_id == player_a_id),
        )
    ).first() is not None


def get_participant_matches(db: Session, participant_id: int) -> List[MatchRecord]:
    return db.query(MatchRecord).filter(
        or_(
            MatchRecord.player1_id == participant_id,
            MatchRecord.player2_id == participant_id,
        )
    ).order_by(MatchRecord.created_at.desc(), MatchRecord.id.desc()).all()


def _first_loss(db: Session, participant_id: int) -> Optional[MatchRecord]:
    return db.query(MatchRecord).filter(
        MatchRecord.result == MatchResult.WIN,
        MatchRecord.winner_id != participant_id,
        or_(
            MatchRecord.player1_id == participant_id,
            MatchRecord.player2_id == participant_id,
        )
    ).order_by(MatchRecord.created_at, MatchRecord.id).first()


def _resync_elimination(db: Session, participant_id: int):
    """Recompute the elimination flag from the participant's remaining losses"""
    participant = db.query(Participant).filter(Participant.id == participant_id).first()
    if not participant:
        return

    first_loss = _first_loss(db, participant_id)
    participant.eliminated = first_loss is not None
    participant.eliminated_at = first_loss.created_at if first_loss else None


def delete_match(db: Session, match_id: int) -> bool:
    """Delete a match and re-sync its loser's elimination flag in one transaction"""
    match = get_match(db, match_id)
    if not match:
        return False

    loser_id = match.loser_id
    db.delete(match)
    if loser_id is not None:
        db.flush()
        _resync_elimination(db, loser_id)

    _commit(db)
    return True
