from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import List, Optional
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from models.participant import Participant
from models.match import MatchRecord
from api.crud import participant_crud, match_crud
from core.exceptions import StoreUnavailable, DuplicatePairing

logger = logging.getLogger(__name__)


class MatchRepository(ABC):
    """Abstract access to the roster and the match log"""

    @abstractmethod
    def fetch_participants(self) -> List[Participant]:
        """All participants ordered by name"""
        pass

    @abstractmethod
    def fetch_matches(self) -> List[MatchRecord]:
        """All match records, in no particular order"""
        pass

    @abstractmethod
    def insert_match(self, record: dict, loser_id: Optional[int] = None) -> int:
        """
        Persist a new match record and return its assigned id.
        When loser_id is given and that participant is not yet eliminated, the
        flag is set in the same write; either both land or neither does.
        """
        pass

    @abstractmethod
    def exists_match(self, participant_a_id: int, participant_b_id: int) -> bool:
        """Whether the unordered pair already has a recorded match"""
        pass

    @abstractmethod
    def get_participant(self, participant_id: int) -> Optional[Participant]:
        pass

    @abstractmethod
    def add_participants(self, names: List[str]) -> List[Participant]:
        pass

    @abstractmethod
    def get_match(self, match_id: int) -> Optional[MatchRecord]:
        pass

    @abstractmethod
    def delete_match(self, match_id: int) -> bool:
        """Delete a match and re-sync its loser's elimination flag in the same write"""
        pass

    @abstractmethod
    def participant_matches(self, participant_id: int) -> List[MatchRecord]:
        """Matches involving the participant, newest first"""
        pass


class SqlAlchemyMatchRepository(MatchRepository):
    """Repository over a SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _store_call(self, operation: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Store call '{operation}' failed: {e}")
            raise StoreUnavailable(operation) from e

    def fetch_participants(self) -> List[Participant]:
        with self._store_call("fetch participants"):
            return participant_crud.get_participants(self.db)

    def fetch_matches(self) -> List[MatchRecord]:
        with self._store_call("fetch matches"):
            return match_crud.get_matches(self.db)

    def insert_match(self, record: dict, loser_id: Optional[int] = None) -> int:
        try:
            with self._store_call("insert match"):
                return match_crud.create_match(self.db, record, loser_id).id
        except StoreUnavailable as e:
            # Only the pair constraint means a rematch: another writer recorded
            # this pair after our guard check
            rematch = isinstance(e.__cause__, IntegrityError) and self.exists_match(
                record["player1_id"], record["player2_id"]
            )
            if rematch:
                raise DuplicatePairing(record["player1_name"], record["player2_name"]) from e.__cause__
            raise

    def exists_match(self, participant_a_id: int, participant_b_id: int) -> bool:
        with self._store_call("check existing match"):
            return match_crud.match_exists(self.db, participant_a_id, participant_b_id)

    def get_participant(self, participant_id: int) -> Optional[Participant]:
        with self._store_call("fetch participant"):
            return participant_crud.get_participant(self.db, participant_id)

    def add_participants(self, names: List[str]) -> List[Participant]:
        with self._store_call("add participants"):
            return participant_crud.create_participants(self.db, names)

    def get_match(self, match_id: int) -> Optional[MatchRecord]:
        with self._store_call("fetch match"):
            return match_crud.get_match(self.db, match_id)

    def delete_match(self, match_id: int) -> bool:
        with self._store_call("delete match"):
            return match_crud.delete_match(self.db, match_id)

    def participant_matches(self, participant_id: int) -> List[MatchRecord]:
        with self._store_call("fetch participant matches"):
            return match_crud.get_participant_matches(self.db, participant_id)
