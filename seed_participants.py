"""
Seed the roster from a text file (one name per line, or comma separated)
Run with: python3 seed_participants.py roster.txt
"""
import sys

from db import SessionLocal
from services.match_repository import SqlAlchemyMatchRepository
from services import match_service


def seed_participants(path: str):
    with open(path, encoding="utf-8") as roster_file:
        text = roster_file.read()

    db = SessionLocal()
    try:
        participants = match_service.import_roster(SqlAlchemyMatchRepository(db), text)
        print(f"✅ Imported {len(participants)} participants")
        for participant in participants:
            print(f"   - {participant.id}: {participant.name}")
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python3 seed_participants.py <roster.txt>")
        sys.exit(1)
    seed_participants(sys.argv[1])
