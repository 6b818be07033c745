"""Models package initialization."""

from .division import Division
from .feed import FeedItem
from .event import EventRecord, Outcome, ValidationError

__all__ = ['Division', 'FeedItem', 'EventRecord', 'Outcome', 'ValidationError']
