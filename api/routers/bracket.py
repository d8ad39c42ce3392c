from fastapi import APIRouter, Depends
from api.deps.db import get_repository
from schemas.bracket import Bracket, BracketChart
from services.match_repository import MatchRepository
from services import match_service
from services.bracket_layout import build_chart

router = APIRouter(prefix="/bracket", tags=["Bracket"])


@router.get("", response_model=Bracket)
async def get_bracket(repository: MatchRepository = Depends(get_repository)):
    """Elimination rounds, survivors and loser -> winner edges derived from the match log"""
    return match_service.build_bracket(repository)


@router.get("/chart", response_model=BracketChart)
async def get_bracket_chart(repository: MatchRepository = Depends(get_repository)):
    """Flow-chart layout of the elimination tree"""
    return build_chart(match_service.build_bracket(repository))
