from pydantic import BaseModel
from typing import Optional, List, Dict
from models.match import Move


class EliminationEntry(BaseModel):
    participant_id: int
    name: str
    round: Optional[int] = None
    wins: int
    losses: int
    ties: int
    eliminated_by_match_id: Optional[int] = None
    eliminated_by: Optional[str] = None

    class Config:
        from_attributes = True


class EliminationEdge(BaseModel):
    loser_id: int
    winner_id: int
    match_id: Optional[int] = None
    loser_move: Move
    winner_move: Move
    position: int
    player1_move: Move
    player2_move: Move

    class Config:
        from_attributes = True


class TieLink(BaseModel):
    player1_id: int
    player2_id: int
    match_id: Optional[int] = None
    move: Move
    position: int

    class Config:
        from_attributes = True


class Bracket(BaseModel):
    elimination_rounds: Dict[int, List[EliminationEntry]]
    survivors: List[EliminationEntry]
    edges: List[EliminationEdge]
    tie_links: List[TieLink]

    class Config:
        from_attributes = True


class ChartNode(BaseModel):
    id: int
    label: str
    kind: str  # "survivor" | "eliminated"
    x: float
    y: float
    wins: int
    losses: int
    ties: int
    record: str
    round: Optional[int] = None  # 1-based for display
    lost_to: Optional[str] = None


class ChartEdge(BaseModel):
    id: str
    kind: str  # "elimination" | "tie"
    source: int
    target: int
    match_id: Optional[int] = None
    moves: List[Move]


class BracketChart(BaseModel):
    nodes: List[ChartNode]
    edges: List[ChartEdge]
