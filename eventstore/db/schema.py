"""Table definitions for the events store.

The tables are declared with SQLAlchemy Core so records can issue plain
parameterized statements against them without an ORM session.
"""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.expression import FunctionElement

metadata = MetaData()


class store_now(FunctionElement):
    """Current time according to the database clock."""
    type = DateTime()
    inherit_cache = True


@compiles(store_now)
def _default_store_now(element, compiler, **kw):
    return "CURRENT_TIMESTAMP"


@compiles(store_now, 'sqlite')
def _sqlite_store_now(element, compiler, **kw):
    # CURRENT_TIMESTAMP only has second resolution on SQLite
    return "strftime('%Y-%m-%d %H:%M:%f000', 'now')"


class advance_timestamp(FunctionElement):
    """Store time, or one millisecond past the column's value if that is later.

    Used for updated_at so every write strictly advances it, even when two
    writes land within the clock's resolution.
    """
    type = DateTime()
    inherit_cache = True


@compiles(advance_timestamp)
def _default_advance_timestamp(element, compiler, **kw):
    return compiler.process(store_now(), **kw)


@compiles(advance_timestamp, 'postgresql')
def _postgresql_advance_timestamp(element, compiler, **kw):
    column = compiler.process(element.clauses, **kw)
    now = compiler.process(store_now(), **kw)
    return f"GREATEST({now}, {column} + INTERVAL '1 millisecond')"


@compiles(advance_timestamp, 'sqlite')
def _sqlite_advance_timestamp(element, compiler, **kw):
    column = compiler.process(element.clauses, **kw)
    now = compiler.process(store_now(), **kw)
    return (
        f"CASE WHEN {column} IS NULL OR {now} > {column} THEN {now} "
        f"ELSE strftime('%Y-%m-%d %H:%M:%f000', {column}, '+0.001 seconds') END"
    )


divisions = Table(
    'divisions',
    metadata,
    Column('id', Integer, primary_key=True, autoincrement=True),
    Column('name', String(255), nullable=False),
    Column('description', Text, nullable=True),
    Column('is_active', Integer, nullable=True, server_default=text('1')),
    Column('created_at', DateTime, server_default=text('CURRENT_TIMESTAMP')),
    Column('updated_at', DateTime, server_default=text('CURRENT_TIMESTAMP')),
)

events = Table(
    'events',
    metadata,
    Column('id', Integer, primary_key=True, autoincrement=True),
    Column('title', Text, nullable=False),
    Column('description', Text, nullable=False),
    Column('division_id', Integer, ForeignKey('divisions.id'), nullable=True, index=True),
    Column('image_url', Text, nullable=True),
    Column('start_date', String(32), nullable=True),
    Column('end_date', String(32), nullable=True),
    Column('is_public', Integer, nullable=True),
    Column('is_active', Integer, nullable=True, server_default=text('1')),
    Column('created_at', DateTime),
    Column('updated_at', DateTime),
)

feeds = Table(
    'feeds',
    metadata,
    Column('id', Integer, primary_key=True, autoincrement=True),
    Column('event_id', Integer, ForeignKey('events.id'), nullable=False, index=True),
    Column('title', String(255), nullable=False),
    Column('content', Text, nullable=True),
    Column('image_url', Text, nullable=True),
    Column('is_active', Integer, nullable=True, server_default=text('1')),
    Column('created_at', DateTime, server_default=text('CURRENT_TIMESTAMP')),
    Column('updated_at', DateTime, server_default=text('CURRENT_TIMESTAMP')),
)
