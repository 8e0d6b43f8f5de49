"""Centralized protocols for pluggable backends."""

from typing import Any, List, Mapping, Optional, Protocol, runtime_checkable

from .schemas import Badge, BadgeCreate


@runtime_checkable
class BadgeStore(Protocol):
    """Protocol for badge storage backends (e.g. the SQL store)."""

    def ensure_schema(self) -> None: ...

    def create(self, payload: BadgeCreate) -> Badge: ...

    def list_badges(self, student_id: Optional[int] = None) -> List[Badge]: ...

    def get(self, badge_id: int) -> Badge: ...

    def update(self, badge_id: int, changes: Mapping[str, Any]) -> Badge: ...

    def set_verified(self, badge_id: int, verified: Any = None) -> Badge: ...

    def delete(self, badge_id: int) -> Badge: ...
