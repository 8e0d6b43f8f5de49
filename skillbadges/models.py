"""SQLModel database models for SkillBadges."""

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, Boolean, DateTime, Index, Integer, Text, false, func
from sqlmodel import Column, Field, SQLModel

TABLE_NAME = "skill_badges"
STUDENT_INDEX_NAME = "idx_skill_badges_student_id"
UPDATED_AT_TRIGGER_NAME = "trg_skill_badges_updated_at"


class SkillBadge(SQLModel, table=True):
    """Skill badge awarded to a student.

    Timestamps are filled by the database: ``created_at`` once on insert,
    ``updated_at`` on insert and again on every UPDATE.
    """

    __tablename__ = TABLE_NAME
    __table_args__ = (Index(STUDENT_INDEX_NAME, "student_id"),)

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            BigInteger().with_variant(Integer, "sqlite"),
            primary_key=True,
            autoincrement=True,
        ),
    )
    student_id: int = Field(sa_column=Column(BigInteger, nullable=False))
    badge_name: str = Field(max_length=255, nullable=False)
    badge_description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    verified: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, server_default=false()),
    )
    created_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=False, server_default=func.now()),
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True),
            nullable=False,
            server_default=func.now(),
            onupdate=func.now(),
        ),
    )
