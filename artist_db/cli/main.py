"""
CLI main application module.

This module contains the main application entry point for the artist
database command line tool.
"""

import logging
import sys
from typing import List, Optional

import psycopg

from ..constants import (
    EXIT_CONFIG_ERROR,
    EXIT_DATABASE_ERROR,
    EXIT_INTERRUPTED,
    EXIT_UNEXPECTED_ERROR,
)

from ..config import ConfigError, Env

from ..database import (
    Context,
    classify_database_error,
    create_database,
    create_tables,
    destroy_tables,
)

from ..errors import DatabaseError
from ..models import DatabaseConfig

from .parser import (
    COMMAND_CREATE_TABLES,
    COMMAND_DESTROY_TABLES,
    COMMAND_READY,
    create_argument_parser,
)

from ..utils import setup_logging

logger = logging.getLogger(__name__)


def run_command(command: str, db_config: DatabaseConfig) -> None:
    """
    Execute a single CLI command.

    Args:
        command: One of the parser's command choices
        db_config: Validated database configuration
    """
    if command == COMMAND_CREATE_TABLES:
        create_tables(db_config.url)
    elif command == COMMAND_DESTROY_TABLES:
        destroy_tables(db_config.url)
    elif command == COMMAND_READY:
        with create_database(db_config) as db:
            db.ready(Context.with_timeout(db_config.connection_timeout))
        logger.info("Database is ready")
    else:
        raise ValueError(f"Unknown command: {command}")


def main(argv: Optional[List[str]] = None):
    """Main entry point for the script."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    try:
        env = Env.load(cli_args=args)
        if env.VERBOSE:
            logging.getLogger().setLevel(logging.DEBUG)
        logger.debug(f"Configuration: {env.mask()}")
        db_config = env.to_database_config()
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(EXIT_CONFIG_ERROR)

    try:
        run_command(args.command, db_config)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user (Ctrl+C)")
        sys.exit(EXIT_INTERRUPTED)
    except (DatabaseError, psycopg.Error) as e:
        logger.error(f"Database error ({classify_database_error(e)}) running {args.command}: {e}")
        sys.exit(EXIT_DATABASE_ERROR)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        sys.exit(EXIT_UNEXPECTED_ERROR)
