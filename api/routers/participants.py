from fastapi import APIRouter, Depends, Query, status
from typing import List
from api.deps.db import get_repository
from schemas.participant import RosterImport, Participant
from schemas.match import Match
from services.match_repository import MatchRepository
from services import match_service
from services.roster_import import search_participants

router = APIRouter(prefix="/participants", tags=["Participants"])


@router.post("/import", response_model=List[Participant], status_code=status.HTTP_201_CREATED)
async def import_participants(
    roster_data: RosterImport,
    repository: MatchRepository = Depends(get_repository)
):
    """Import a roster: one name per line (or comma separated)"""
    return match_service.import_roster(repository, roster_data.roster)


@router.get("", response_model=List[Participant])
async def get_participants(repository: MatchRepository = Depends(get_repository)):
    """Get all participants ordered by name"""
    return repository.fetch_participants()


@router.get("/search", response_model=List[Participant])
async def search(
    q: str = Query("", max_length=100),
    active_only: bool = Query(False),
    repository: MatchRepository = Depends(get_repository)
):
    """Search participants by name (case-insensitive), optionally only those not yet eliminated"""
    return search_participants(repository.fetch_participants(), q, active_only=active_only)


@router.get("/{participant_id}/matches", response_model=List[Match])
async def get_participant_matches(
    participant_id: int,
    repository: MatchRepository = Depends(get_repository)
):
    """Get all matches of a participant, newest first"""
    return match_service.participant_history(repository, participant_id)
