#!/usr/bin/env python3

from db import SessionLocal
from models.match import MatchRecord
from models.participant import Participant

def reset_database():
    """Reset database - keep the roster but clear all match data"""
    db = SessionLocal()
    try:
        deleted = db.query(MatchRecord).delete()
        db.query(Participant).update({
            Participant.eliminated: False,
            Participant.eliminated_at: None,
        })
        db.commit()

        print(f"Matches deleted: {deleted}")
        print(f"Participants count: {db.query(Participant).count()}")
        print("✅ Database reset complete!")
        print("📊 Roster preserved, all matches cleared")

    except Exception as e:
        db.rollback()
        print(f"❌ Error resetting database: {e}")
    finally:
        db.close()

if __name__ == "__main__":
    print("🔄 Resetting database...")
    print("⚠️  This will delete ALL matches but keep participants")

    confirm = input("Continue? (y/N): ")
    if confirm.lower() == 'y':
        reset_database()
    else:
        print("❌ Reset cancelled")
