from fastapi import Depends
from sqlalchemy.orm import Session

from db import get_db
from services.match_repository import MatchRepository, SqlAlchemyMatchRepository

__all__ = ["get_db", "get_repository"]


def get_repository(db: Session = Depends(get_db)) -> MatchRepository:
    return SqlAlchemyMatchRepository(db)
