"""Engine and session handling for the skill_badges store."""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.engine import Engine, make_url
from sqlmodel import Session, create_engine
from sqlmodel.pool import StaticPool

from .config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """SQLite shares one connection across threads; other backends pool and ping."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=echo,
        )
    return create_engine(url, echo=echo, pool_pre_ping=True)


engine = build_engine(settings.database_url, echo=settings.debug)
logger.debug("Database engine ready: %s", engine.url.render_as_string(hide_password=True))


def get_session() -> Iterator[Session]:
    """Per-request session; FastAPI closes it after the response."""
    with Session(engine) as session:
        yield session


@contextmanager
def get_sync_session() -> Iterator[Session]:
    with Session(engine) as session:
        yield session
