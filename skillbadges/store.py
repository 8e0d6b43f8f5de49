"""SQL badge store: each operation is a single parameterized statement."""

import logging
from typing import Any, Callable, List, Mapping, Optional, Sequence

from sqlalchemy import delete, insert, not_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from .errors import NotFoundError, StorageError, ValidationError
from .models import STUDENT_INDEX_NAME, TABLE_NAME, UPDATED_AT_TRIGGER_NAME, SkillBadge
from .schemas import Badge, BadgeCreate

logger = logging.getLogger(__name__)

# Order matters: it fixes the SET clause and its parameter binding.
UPDATABLE_FIELDS = ("badge_name", "badge_description", "verified", "student_id")

badges = SkillBadge.__table__

_POSTGRES_TRIGGER_DDL: Sequence[str] = (
    """
    CREATE OR REPLACE FUNCTION update_updated_at_column()
    RETURNS TRIGGER AS $$
    BEGIN
        NEW.updated_at = NOW();
        RETURN NEW;
    END;
    $$ LANGUAGE plpgsql
    """,
    f"""
    DO $$
    BEGIN
      IF NOT EXISTS (
        SELECT 1 FROM pg_trigger WHERE tgname = '{UPDATED_AT_TRIGGER_NAME}'
      ) THEN
        CREATE TRIGGER {UPDATED_AT_TRIGGER_NAME}
        BEFORE UPDATE ON {TABLE_NAME}
        FOR EACH ROW
        EXECUTE FUNCTION update_updated_at_column();
      END IF;
    END;
    $$
    """,
)

# SQLite has no BEFORE-row assignment, so re-stamp after the fact. The WHEN
# guard skips rows whose statement already moved updated_at.
_SQLITE_TRIGGER_DDL: Sequence[str] = (
    f"""
    CREATE TRIGGER IF NOT EXISTS {UPDATED_AT_TRIGGER_NAME}
    AFTER UPDATE ON {TABLE_NAME}
    FOR EACH ROW
    WHEN NEW.updated_at IS OLD.updated_at
    BEGIN
        UPDATE {TABLE_NAME} SET updated_at = CURRENT_TIMESTAMP WHERE id = NEW.id;
    END
    """,
)


def _trigger_ddl(dialect_name: str) -> Sequence[str]:
    if dialect_name == "postgresql":
        return _POSTGRES_TRIGGER_DDL
    if dialect_name == "sqlite":
        return _SQLITE_TRIGGER_DDL
    logger.debug("No updated_at trigger for dialect %s; relying on onupdate", dialect_name)
    return ()


def _describe(exc: SQLAlchemyError) -> str:
    """Driver-level message without SQLAlchemy's statement dump."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class SqlBadgeStore:
    """Badge operations over an injected SQLModel session.

    The store never owns the engine; callers hand it a session scoped to
    one request (or one script run).
    """

    def __init__(self, session: Session):
        self.session = session

    def ensure_schema(self) -> None:
        """Create the table, its student index and the updated_at trigger.

        Idempotent. Everything runs in one transaction, so a failing
        statement leaves the rest unapplied.
        """
        try:
            conn = self.session.connection()
            badges.create(conn, checkfirst=True)
            for index in badges.indexes:
                index.create(conn, checkfirst=True)
            for ddl in _trigger_ddl(conn.dialect.name):
                conn.exec_driver_sql(ddl)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(f"Error creating {TABLE_NAME} table", error=_describe(e)) from e
        logger.info("Ensured %s table, %s and %s", TABLE_NAME, STUDENT_INDEX_NAME, UPDATED_AT_TRIGGER_NAME)

    def create(self, payload: BadgeCreate) -> Badge:
        if not payload.student_id or not payload.badge_name:
            raise ValidationError("student_id and badge_name are required")

        stmt = (
            insert(badges)
            .values(
                student_id=payload.student_id,
                badge_name=payload.badge_name,
                badge_description=payload.badge_description or None,
                verified=bool(payload.verified),
            )
            .returning(*badges.c)
        )
        badge = self._one(stmt)
        logger.info("Created badge %s for student %s", badge.id, badge.student_id)
        return badge

    def list_badges(self, student_id: Optional[int] = None) -> List[Badge]:
        """Newest first; ``id`` breaks ties between equal timestamps."""
        stmt = select(badges).order_by(badges.c.created_at.desc(), badges.c.id.desc())
        if student_id is not None:
            stmt = stmt.where(badges.c.student_id == student_id)
        rows = self._run(stmt, lambda result: result.mappings().all())
        return [Badge.model_validate(dict(row)) for row in rows]

    def get(self, badge_id: int) -> Badge:
        return self._one(select(badges).where(badges.c.id == badge_id))

    def update(self, badge_id: int, changes: Mapping[str, Any]) -> Badge:
        """Apply the allowed fields present in ``changes``, ignoring the rest."""
        assignments = [
            (badges.c[field], changes[field]) for field in UPDATABLE_FIELDS if field in changes
        ]
        if not assignments:
            raise ValidationError("No fields provided to update")

        stmt = (
            update(badges)
            .where(badges.c.id == badge_id)
            .ordered_values(*assignments)
            .returning(*badges.c)
        )
        return self._one(stmt)

    def set_verified(self, badge_id: int, verified: Any = None) -> Badge:
        """Set ``verified`` when given a bool, otherwise flip it in SQL."""
        value = verified if isinstance(verified, bool) else not_(badges.c.verified)
        stmt = (
            update(badges)
            .where(badges.c.id == badge_id)
            .values(verified=value)
            .returning(*badges.c)
        )
        return self._one(stmt)

    def delete(self, badge_id: int) -> Badge:
        stmt = delete(badges).where(badges.c.id == badge_id).returning(*badges.c)
        badge = self._one(stmt)
        logger.info("Deleted badge %s", badge_id)
        return badge

    # ─── helpers ───

    def _run(self, stmt, fetch: Callable[[Any], Any]) -> Any:
        try:
            fetched = fetch(self.session.exec(stmt))
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError("Database error", error=_describe(e)) from e
        return fetched

    def _one(self, stmt) -> Badge:
        row = self._run(stmt, lambda result: result.mappings().first())
        if row is None:
            raise NotFoundError()
        return Badge.model_validate(dict(row))
