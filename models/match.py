from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.types import Enum as SQLEnum
from db import Base
from models.participant import utcnow
import enum


class Move(str, enum.Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"


class MatchResult(str, enum.Enum):
    WIN = "win"
    TIE = "tie"


def _enum_values(obj):
    return [e.value for e in obj]


class MatchRecord(Base):
    __tablename__ = "matches"

    id = Column(Integer, primary_key=True, index=True)

    player1_id = Column(Integer, ForeignKey("participants.id"), nullable=False, index=True)
    player1_name = Column(String, nullable=False)  # Ім'я на момент запису матчу
    player1_choice = Column(SQLEnum(Move, values_callable=_enum_values), nullable=False)

    player2_id = Column(Integer, ForeignKey("participants.id"), nullable=False, index=True)
    player2_name = Column(String, nullable=False)
    player2_choice = Column(SQLEnum(Move, values_callable=_enum_values), nullable=False)

    # Derived from the two moves, never set directly
    result = Column(SQLEnum(MatchResult, values_callable=_enum_values), nullable=False)
    winner_id = Column(Integer, ForeignKey("participants.id"), nullable=True)
    winner_name = Column(String, nullable=True)

    # Unordered pair key: min/max of the two participant ids
    pair_low_id = Column(Integer, nullable=False)
    pair_high_id = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    # Constraints
    __table_args__ = (
        UniqueConstraint('pair_low_id', 'pair_high_id', name='unique_match_pair'),
        CheckConstraint('player1_id <> player2_id', name='check_distinct_players'),
    )

    @property
    def is_tie(self) -> bool:
        return self.result == MatchResult.TIE

    @property
    def loser_id(self):
        if self.is_tie:
            return None
        return self.player2_id if self.winner_id == self.player1_id else self.player1_id

    def involves(self, participant_id: int) -> bool:
        return participant_id in (self.player1_id, self.player2_id)

    def __repr__(self) -> str:
        return (
            f"<MatchRecord id={self.id} {self.player1_name}({self.player1_choice}) "
            f"vs {self.player2_name}({self.player2_choice}) result={self.result}>"
        )
