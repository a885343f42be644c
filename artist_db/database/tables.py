"""
Schema management module.

The schema is a single Alembic revision shipped with the package. Creating
the tables upgrades to head and destroying them downgrades to base; both
are no-ops when the database is already there.
"""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy.exc import SQLAlchemyError

from ..errors import StorageError
from .config import to_sqlalchemy_url

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).parent / "migrations"

ENTITY_SCHEMA = "schema"


def build_alembic_config(conn_string: str) -> Config:
    """
    Build an Alembic configuration for the packaged migrations.

    Args:
        conn_string: libpq database URL

    Returns:
        Alembic Config pointing at the migrations and the database
    """
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    # ConfigParser interpolation, a literal % must be doubled
    config.set_main_option("sqlalchemy.url", to_sqlalchemy_url(conn_string).replace("%", "%%"))
    return config


def create_tables(conn_string: str) -> None:
    """
    Create all tables by running the migrations forward.

    Raises:
        StorageError: If the migrations could not be applied
    """
    logger.info("Creating database tables")
    try:
        command.upgrade(build_alembic_config(conn_string), "head")
    except SQLAlchemyError as e:
        logger.error(f"Running migrations failed: {str(e)}")
        raise StorageError(ENTITY_SCHEMA, "create", f"running migrations failed: {e}") from e
    logger.info("Database tables created successfully")


def destroy_tables(conn_string: str) -> None:
    """
    Drop all tables by running the migrations backwards.

    Raises:
        StorageError: If the migrations could not be reverted
    """
    logger.info("Destroying database tables")
    try:
        command.downgrade(build_alembic_config(conn_string), "base")
    except SQLAlchemyError as e:
        logger.error(f"Reverting migrations failed: {str(e)}")
        raise StorageError(ENTITY_SCHEMA, "destroy", f"reverting migrations failed: {e}") from e
    logger.info("Database tables destroyed successfully")
