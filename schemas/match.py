from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from models.match import Move, MatchResult


class MatchCreate(BaseModel):
    player1_id: int
    player1_choice: Move
    player2_id: int
    player2_choice: Move


class Match(BaseModel):
    id: int
    player1_id: int
    player1_name: str
    player1_choice: Move
    player2_id: int
    player2_name: str
    player2_choice: Move
    result: MatchResult
    winner_id: Optional[int] = None
    winner_name: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class MatchDeleted(BaseModel):
    match_id: int
    message: str
