from sqlalchemy.orm import Session
from typing import List, Optional
from models.participant import Participant


def create_participants(db: Session, names: List[str]) -> List[Participant]:
    """Create the whole roster in one transaction"""
    participants = [Participant(name=name) for name in names]
    db.add_all(participants)
    db.commit()
    for participant in participants:
        db.refresh(participant)
    return participants


def get_participant(db: Session, participant_id: int) -> Optional[Participant]:
    return db.query(Participant).filter(Participant.id == participant_id).first()


def get_participants(db: Session) -> List[Participant]:
    # id breaks ties between equal names so the order is stable
    return db.query(Participant).order_by(Participant.name, Participant.id).all()
