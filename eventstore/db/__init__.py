"""Database package initialization.

This module exposes the public interface of the database package.
"""

from .db_core import (
    Database,
    DatabaseConfig,
    DatabaseError,
    ConnectionError,
    StoreFault,
)
from .schema import metadata, events, divisions, feeds, store_now, advance_timestamp

__all__ = [
    # Core database classes
    'Database',
    'DatabaseConfig',
    
    # Exceptions
    'DatabaseError',
    'ConnectionError',
    'StoreFault',
    
    # Schema
    'metadata',
    'events',
    'divisions',
    'feeds',
    'store_now',
    'advance_timestamp',
]
