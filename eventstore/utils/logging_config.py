"""Logging configuration for the application."""

import logging
import sys

from ..config.environment import LOG_LEVEL

def setup_logging(level: int = LOG_LEVEL):
    """Configure logging for the application."""
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)
    
    # SQLAlchemy echoes every statement at INFO
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    
    loggers = [
        'eventstore.db.db_core',
        'eventstore.models.event',
        'eventstore.models.division',
        'eventstore.models.feed',
    ]
    
    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        # Don't add handler here since it's already handled by root logger
    
    return console_handler
