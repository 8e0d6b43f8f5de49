"""Skill badge API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from ..database import get_session
from ..errors import ValidationError
from ..protocols import BadgeStore
from ..schemas import (
    BadgeCreate,
    BadgeDeletedResponse,
    BadgeListResponse,
    BadgeResponse,
    BadgeUpdate,
    BadgeVerify,
    MessageResponse,
)
from ..store import SqlBadgeStore

router = APIRouter(tags=["badges"])


def get_badge_store(session: Session = Depends(get_session)) -> BadgeStore:
    """Dependency wiring the request session into the SQL store."""
    return SqlBadgeStore(session)


def _parse_student_filter(raw: Optional[str]) -> Optional[int]:
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError("student_id must be an integer") from None


@router.get("/create-skill-badges-table", response_model=MessageResponse)
def create_skill_badges_table(store: BadgeStore = Depends(get_badge_store)):
    """Create the skill_badges table, trigger and index if missing."""
    store.ensure_schema()
    return MessageResponse(message="skill_badges table created (or already exists)")


@router.post("/badges", response_model=BadgeResponse, status_code=status.HTTP_201_CREATED)
def create_badge(
    badge_data: BadgeCreate,
    store: BadgeStore = Depends(get_badge_store),
):
    """Create a new badge."""
    return BadgeResponse(data=store.create(badge_data))


@router.get("/badges", response_model=BadgeListResponse)
def list_badges(
    student_id: Optional[str] = Query(None),
    store: BadgeStore = Depends(get_badge_store),
):
    """List badges, newest first, optionally for one student.

    An empty ``student_id`` means no filter.
    """
    return BadgeListResponse(data=store.list_badges(_parse_student_filter(student_id)))


@router.get("/badges/{badge_id}", response_model=BadgeResponse)
def get_badge(
    badge_id: int,
    store: BadgeStore = Depends(get_badge_store),
):
    """Get a specific badge by ID."""
    return BadgeResponse(data=store.get(badge_id))


@router.get("/students/{student_id}/badges", response_model=BadgeListResponse)
def list_student_badges(
    student_id: int,
    store: BadgeStore = Depends(get_badge_store),
):
    """List one student's badges, newest first."""
    return BadgeListResponse(data=store.list_badges(student_id))


@router.put("/badges/{badge_id}", response_model=BadgeResponse)
def update_badge(
    badge_id: int,
    badge_update: Optional[BadgeUpdate] = None,
    store: BadgeStore = Depends(get_badge_store),
):
    """Partially update a badge. Only fields present in the body change."""
    changes = badge_update.model_dump(exclude_unset=True) if badge_update else {}
    return BadgeResponse(data=store.update(badge_id, changes))


@router.patch("/badges/{badge_id}/verify", response_model=BadgeResponse)
def verify_badge(
    badge_id: int,
    verify_data: Optional[BadgeVerify] = None,
    store: BadgeStore = Depends(get_badge_store),
):
    """Set ``verified`` to the given boolean, or toggle it when omitted."""
    verified = verify_data.verified if verify_data else None
    return BadgeResponse(data=store.set_verified(badge_id, verified))


@router.delete("/badges/{badge_id}", response_model=BadgeDeletedResponse)
def delete_badge(
    badge_id: int,
    store: BadgeStore = Depends(get_badge_store),
):
    """Delete a badge and return its last values."""
    return BadgeDeletedResponse(message="Badge deleted", data=store.delete(badge_id))
