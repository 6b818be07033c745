"""Feed item model definition."""

import logging
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select

from ..db import Database, feeds

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class FeedItem:
    """Read-only snapshot of one feed entry posted under an event."""
    id: int
    event_id: int
    title: str
    content: Optional[str] = None
    image_url: Optional[str] = None
    is_active: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def find_all_by_event_id(cls, db: Database, event_id: int) -> List['FeedItem']:
        """Get the live feed items of an event, oldest first."""
        stmt = (
            select(feeds)
            .where(feeds.c.event_id == event_id)
            .where(func.coalesce(feeds.c.is_active, 1) != 0)
            .order_by(feeds.c.id)
        )
        with db.connect() as conn:
            rows = conn.execute(stmt).all()
        logger.debug(f"Loaded {len(rows)} feed items for event {event_id}")
        return [cls(**row._mapping) for row in rows]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
