"""Environment configuration module.

This module MUST be imported before any other eventstore module that reads
environment variables. It loads the .env file once and derives the settings
used by the database and logging setup.

Variables:
    ENVIRONMENT: 'development' (SQLite file) or 'production' (DATABASE_URL)
    SQL_ECHO: 'true' to echo every SQL statement
    LOG_LEVEL: level name passed to setup_logging, INFO by default

Usage:
    from eventstore.config.environment import IS_PRODUCTION_ENVIRONMENT

Note:
    In production, environment variables should be set directly in the
    platform's environment configuration rather than through a .env file.
"""

import os
import logging
from dotenv import load_dotenv

load_dotenv()

env_setting = os.environ.get('ENVIRONMENT', '').lower()
IS_PRODUCTION_ENVIRONMENT = env_setting == 'production'

if env_setting not in ['development', 'production']:
    logging.warning(
        f"Environment setting '{env_setting}' is invalid or not specified. "
        "Expected 'development' or 'production'. Defaulting to development environment."
    )

SQL_ECHO = os.environ.get('SQL_ECHO', 'false').lower() == 'true'
LOG_LEVEL = logging.getLevelName(os.environ.get('LOG_LEVEL', 'INFO').upper())
if not isinstance(LOG_LEVEL, int):
    LOG_LEVEL = logging.INFO

__all__ = ['IS_PRODUCTION_ENVIRONMENT', 'SQL_ECHO', 'LOG_LEVEL']
