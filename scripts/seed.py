"""Seed the database with example badges for one student.

Usage:
    python scripts/seed.py                            # defaults
    python scripts/seed.py --student-id 42 --count 3
"""

import argparse
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlmodel import Session

from skillbadges.database import get_sync_session
from skillbadges.schemas import BadgeCreate
from skillbadges.store import SqlBadgeStore

EXAMPLE_BADGES = [
    ("Python Basics", "Variables, control flow and functions.", True),
    ("SQL Fundamentals", "Selects, joins and aggregates.", True),
    ("REST APIs", "Designing and consuming HTTP JSON services.", False),
    ("Testing", "Unit tests with pytest.", False),
    ("Git Workflow", None, False),
]


def seed(session: Session, student_id: int, count: int) -> int:
    """Insert up to ``count`` example badges. Returns how many were added."""
    store = SqlBadgeStore(session)
    store.ensure_schema()

    if store.list_badges(student_id):
        print(f"Student {student_id} already has badges. Skipping.")
        return 0

    added = 0
    for name, description, verified in EXAMPLE_BADGES[:count]:
        store.create(
            BadgeCreate(
                student_id=student_id,
                badge_name=name,
                badge_description=description,
                verified=verified,
            )
        )
        added += 1

    print(f"Seeded: {added} badges for student {student_id}")
    return added


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed SkillBadges database")
    parser.add_argument("--student-id", type=int, default=1, help="Student to award badges to")
    parser.add_argument("--count", type=int, default=len(EXAMPLE_BADGES), help="Number of badges")
    args = parser.parse_args()
    with get_sync_session() as session:
        seed(session, args.student_id, args.count)
