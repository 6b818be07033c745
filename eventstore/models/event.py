"""Event model definition.

An `EventRecord` is a mutable, identity-bearing view of one row of the
`events` table. Every loaded record carries two associations: the owning
`Division` and the list of `FeedItem`s posted under the event. Both are
snapshots taken when the record is loaded or resynchronized.

Writes never trust the in-memory values: after `save()` or `delete()` the
record re-reads its own row so timestamps, defaults and associations reflect
what the store actually holds.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.engine import Row
from sqlalchemy.sql import Select

from ..db import Database, advance_timestamp, events, store_now
from .division import Division
from .feed import FeedItem

logger = logging.getLogger(__name__)

# Columns written by save(); id and the timestamps belong to the store
MUTABLE_FIELDS = (
    'title',
    'description',
    'division_id',
    'image_url',
    'start_date',
    'end_date',
    'is_public',
    'is_active',
)

REQUIRED_FIELDS = ('title', 'description')


class ValidationError(ValueError):
    """Raised when input data lacks a required event field."""
    pass


class Outcome(Enum):
    """Result of a mutation or resynchronization.

    Only ``Outcome.OK`` is truthy, so results can be used as booleans.
    """
    OK = 'ok'
    NOT_PERSISTED = 'not_persisted'
    STALE_REFERENCE = 'stale_reference'

    def __bool__(self) -> bool:
        return self is Outcome.OK


def _live():
    """Filter matching rows that have not been soft-deleted."""
    return func.coalesce(events.c.is_active, 1) != 0


@dataclass
class EventRecord:
    """
    Event stored in the `events` table.

    Fields:
        title: Event title
        description: Event description
        id: Primary key, None until the first save()
        division_id: Id of the owning division (optional)
        image_url: URL of the event's image (optional)
        start_date: When the event starts, as stored (optional)
        end_date: When the event ends, as stored (optional)
        is_public: 1 if the event is publicly visible, 0 if not (optional)
        is_active: 0 once the event has been soft-deleted
        created_at: Set by the store on insert
        updated_at: Set by the store on every write
        division: Loaded owning division, None without division_id or when it is soft-deleted
        feed: Loaded feed items, None until the event has an id
    """
    title: str
    description: str
    id: Optional[int] = None
    division_id: Optional[int] = None
    image_url: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_public: Optional[int] = None
    is_active: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    division: Optional[Division] = field(default=None, repr=False, compare=False)
    feed: Optional[List[FeedItem]] = field(default=None, repr=False, compare=False)
    db: Optional[Database] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_input(cls, db: Database, data: Mapping[str, Any]) -> 'EventRecord':
        """
        Build an unsaved event from caller-supplied data.

        Only the writable fields are taken from data; anything else, including
        id and timestamps, is ignored. Values are not checked beyond the
        presence of title and description.

        Args:
            db: Database the event will be saved to
            data: Mapping of field name to value

        Returns:
            A new EventRecord with id None. Its division is resolved when
            division_id is given; its feed is not loaded.

        Raises:
            ValidationError: If title or description is missing
        """
        missing = [name for name in REQUIRED_FIELDS if data.get(name) is None]
        if missing:
            raise ValidationError(f"Missing required event fields: {', '.join(missing)}")

        record = cls(db=db, **{name: data.get(name) for name in MUTABLE_FIELDS})
        record._load_associations()
        return record

    @classmethod
    def find_by_id(cls, db: Database, event_id: int, include_inactive: bool = False) -> Optional['EventRecord']:
        """Get a single event by id, or None if it does not exist or is soft-deleted."""
        stmt = select(events).where(events.c.id == event_id)
        if not include_inactive:
            stmt = stmt.where(_live())

        with db.connect() as conn:
            row = conn.execute(stmt).first()

        if row is None:
            logger.debug(f"Event {event_id} not found")
            return None
        return cls._from_row(db, row)

    @classmethod
    def find_all(cls, db: Database, include_inactive: bool = False) -> List['EventRecord']:
        """Get every event, ordered by id."""
        stmt = select(events)
        if not include_inactive:
            stmt = stmt.where(_live())
        return cls._find_many(db, stmt)

    @classmethod
    def find_all_by_group(cls, db: Database, division_id: int, include_inactive: bool = False) -> List['EventRecord']:
        """Get every event owned by a division, ordered by id."""
        stmt = select(events).where(events.c.division_id == division_id)
        if not include_inactive:
            stmt = stmt.where(_live())
        return cls._find_many(db, stmt)

    @classmethod
    def _find_many(cls, db: Database, stmt: Select) -> List['EventRecord']:
        with db.connect() as conn:
            rows = conn.execute(stmt.order_by(events.c.id)).all()
        # Associations are loaded after the connection is released
        return [cls._from_row(db, row) for row in rows]

    @classmethod
    def _from_row(cls, db: Database, row: Row) -> 'EventRecord':
        record = cls(db=db, **row._mapping)
        record._load_associations()
        return record

    def _load_associations(self) -> None:
        if self.division_id is not None:
            self.division = Division.find(self.db, self.division_id)
        else:
            self.division = None
        if self.id is not None:
            self.feed = FeedItem.find_all_by_event_id(self.db, self.id)

    def save(self) -> Outcome:
        """
        Insert or update this event, then reload it from the store.

        An event without id is inserted and receives the generated id. An
        event with id has all writable fields updated. The store clock sets
        the timestamps in both cases.

        Returns:
            Outcome.OK, or Outcome.STALE_REFERENCE if the row was removed
            out of band before it could be read back

        Raises:
            StoreFault: If the statement fails
        """
        values = {name: getattr(self, name) for name in MUTABLE_FIELDS}

        if self.id is None:
            if values['is_active'] is None:
                # Let the column default mark new events as active
                del values['is_active']
            stmt = insert(events).values(**values, created_at=store_now(), updated_at=store_now())
            with self.db.connect() as conn:
                result = conn.execute(stmt)
                self.id = result.inserted_primary_key[0]
            logger.info(f"Inserted event {self.id}: {self.title}")
        else:
            stmt = (
                update(events)
                .where(events.c.id == self.id)
                .values(**values, updated_at=advance_timestamp(events.c.updated_at))
            )
            with self.db.connect() as conn:
                conn.execute(stmt)
            logger.info(f"Updated event {self.id}: {self.title}")

        return self.resynchronize()

    def delete(self) -> Outcome:
        """
        Soft-delete this event by setting is_active to 0, then reload it.

        The row is never removed. An event that was never saved is left
        alone and Outcome.NOT_PERSISTED is returned.
        """
        if self.id is None:
            logger.warning(f"Cannot delete unsaved event: {self.title}")
            return Outcome.NOT_PERSISTED

        stmt = (
            update(events)
            .where(events.c.id == self.id)
            .values(is_active=0, updated_at=advance_timestamp(events.c.updated_at))
        )
        with self.db.connect() as conn:
            conn.execute(stmt)
        logger.info(f"Soft-deleted event {self.id}")

        return self.resynchronize()

    def resynchronize(self) -> Outcome:
        """
        Reload every field and both associations from the store.

        Soft-deleted rows are read as well. If the row is gone the in-memory
        fields are left as they are.
        """
        if self.id is None:
            return Outcome.NOT_PERSISTED

        with self.db.connect() as conn:
            row = conn.execute(select(events).where(events.c.id == self.id)).first()

        if row is None:
            logger.warning(f"Event {self.id} no longer exists in the store")
            return Outcome.STALE_REFERENCE

        for name, value in row._mapping.items():
            setattr(self, name, value)
        self._load_associations()
        return Outcome.OK

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, including the loaded associations."""
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'division_id': self.division_id,
            'image_url': self.image_url,
            'start_date': self.start_date,
            'end_date': self.end_date,
            'is_public': self.is_public,
            'is_active': self.is_active,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
            'division': self.division.to_dict() if self.division else None,
            'feed': [item.to_dict() for item in self.feed] if self.feed is not None else None
        }

    def __str__(self) -> str:
        """String representation."""
        return f"EventRecord(id={self.id}, title={self.title}, division_id={self.division_id}, is_active={self.is_active})"
