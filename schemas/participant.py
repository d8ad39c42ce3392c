from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime


class RosterImport(BaseModel):
    roster: str = Field(..., description="Participant names separated by new lines or commas")

    @validator('roster')
    def validate_roster_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Roster must contain at least one name")
        return v


class Participant(BaseModel):
    id: int
    name: str
    eliminated: bool = False
    eliminated_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True
