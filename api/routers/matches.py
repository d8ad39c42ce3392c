from fastapi import APIRouter, Depends, status
from typing import List
from api.deps.db import get_repository
from core.exceptions import MatchNotFound
from schemas.match import MatchCreate, Match, MatchDeleted
from services.match_repository import MatchRepository
from services import match_service

router = APIRouter(prefix="/matches", tags=["Matches"])


@router.post("", response_model=Match, status_code=status.HTTP_201_CREATED)
async def create_match(
    match_data: MatchCreate,
    repository: MatchRepository = Depends(get_repository)
):
    """Record a match; the result is computed from the two moves"""
    return match_service.record_match(
        repository,
        match_data.player1_id,
        match_data.player1_choice,
        match_data.player2_id,
        match_data.player2_choice,
    )


@router.get("", response_model=List[Match])
async def get_matches(repository: MatchRepository = Depends(get_repository)):
    """Get all matches, newest first"""
    return match_service.list_matches(repository)


@router.get("/{match_id}", response_model=Match)
async def get_match(
    match_id: int,
    repository: MatchRepository = Depends(get_repository)
):
    match = repository.get_match(match_id)
    if not match:
        raise MatchNotFound(match_id)
    return match


@router.delete("/{match_id}", response_model=MatchDeleted)
async def delete_match(
    match_id: int,
    repository: MatchRepository = Depends(get_repository)
):
    """Delete a match record"""
    match_service.delete_match(repository, match_id)
    return MatchDeleted(match_id=match_id, message="Match deleted")
