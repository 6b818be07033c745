"""Division model definition."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import func, select

from ..db import Database, divisions

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class Division:
    """
    Read-only snapshot of the group that owns events.
    
    Fields:
        id: Unique identifier
        name: Display name of the division
        description: Free-text description (optional)
        is_active: 0 when the division has been soft-deleted
        created_at: When the division was created in the store
        updated_at: When the division row was last written
    """
    id: int
    name: str
    description: Optional[str] = None
    is_active: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def find(cls, db: Database, division_id: int, include_inactive: bool = False) -> Optional['Division']:
        """Get a single division by id, or None."""
        stmt = select(divisions).where(divisions.c.id == division_id)
        if not include_inactive:
            stmt = stmt.where(func.coalesce(divisions.c.is_active, 1) != 0)
        with db.connect() as conn:
            row = conn.execute(stmt).first()
        if row is None:
            logger.debug(f"Division {division_id} not found")
            return None
        return cls(**row._mapping)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'is_active': self.is_active,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }
