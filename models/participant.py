from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, Boolean
from db import Base


def utcnow():
    return datetime.now(timezone.utc)


class Participant(Base):
    __tablename__ = "participants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)

    # Set by the first recorded loss, cleared when that loss is deleted
    eliminated = Column(Boolean, default=False, nullable=False)
    eliminated_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Participant id={self.id} name={self.name!r}>"
