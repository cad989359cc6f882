"""
PostgreSQL helpers: SQL quoting for statements passed to psql, and a
connection check through Psycopg 3.
"""

import logging
import re
from typing import Optional

import psycopg

module_logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def quote_identifier(name: str) -> str:
    """
    Validate a role or database name for use in a psql statement.

    Raises:
        ValueError: If the name is not a plain SQL identifier.
    """
    if not _IDENTIFIER_RE.match(name or ""):
        raise ValueError(
            f"'{name}' is not a valid PostgreSQL identifier "
            "(letters, digits and underscores, not starting with a digit)."
        )
    return name


def quote_literal(value: str) -> str:
    """Quote a string literal, doubling embedded single quotes."""
    return "'" + value.replace("'", "''") + "'"


def check_database_connection(
    host: str,
    port: int,
    dbname: str,
    user: str,
    password: str,
    connect_timeout: int = 10,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Connect with the given credentials and run 'SELECT 1'.

    Returns:
        True if the query succeeded, False otherwise.
    """
    logger_to_use = current_logger if current_logger else module_logger
    try:
        with psycopg.connect(
            host=host,
            port=port,
            dbname=dbname,
            user=user,
            password=password,
            connect_timeout=connect_timeout,
        ) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1")
                cur.fetchone()
        logger_to_use.info(
            f"Connected to database {dbname} on {host}:{port} as {user}."
        )
        return True
    except psycopg.OperationalError as e:
        logger_to_use.error(
            f"Could not connect to database {dbname} on {host}:{port}: {e}"
        )
    except psycopg.Error as e:
        logger_to_use.error(f"Database check on {host}:{port} failed: {e}")
    return False
