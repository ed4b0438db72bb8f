# telemetry/store.py
# Parameterized statement execution against MySQL

import logging
import threading
from typing import Optional, Sequence

import mysql.connector
from mysql.connector import pooling

from telemetry.config import DatabaseConfig
from telemetry.errors import PersistenceError
from telemetry.statements import Statement

logger = logging.getLogger(__name__)


class TelemetryStore:
    """
    One store per process, built from an explicit DatabaseConfig.
    The connection pool is opened on first use so importing the app
    never needs a reachable database.
    """

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._lock = threading.Lock()

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._lock:
            if self._pool is None:
                if not self.config.is_configured:
                    raise PersistenceError(
                        "Database is not configured",
                        detail="Set DATABASE_URL or DB_HOST/DB_NAME",
                    )
                try:
                    self._pool = pooling.MySQLConnectionPool(**self.config.pool_kwargs())
                except mysql.connector.Error as err:
                    raise PersistenceError("Database connection failed", detail=str(err)) from err
            return self._pool

    def _get_connection(self):
        pool = self._get_pool()
        try:
            return pool.get_connection()
        except mysql.connector.Error as err:
            raise PersistenceError("Database connection failed", detail=str(err)) from err

    def execute(self, statement: Statement) -> int:
        """Execute a single statement and commit it"""
        return self.execute_atomically([statement])

    def execute_atomically(self, statements: Sequence[Statement]) -> int:
        """
        Run every statement inside one transaction.
        Either all rows are committed or the transaction is rolled back
        and PersistenceError is raised. Returns the number of statements run.
        """
        conn = self._get_connection()
        cursor = None
        try:
            cursor = conn.cursor()
            conn.start_transaction()
            for statement in statements:
                cursor.execute(statement.sql, statement.params)
            conn.commit()
            logger.info("Committed transaction of %d statement(s)", len(statements))
            return len(statements)
        except mysql.connector.Error as err:
            logger.error("Rolling back transaction of %d statement(s): %s", len(statements), err)
            try:
                conn.rollback()
            except mysql.connector.Error as rollback_err:
                logger.error("Rollback failed: %s", rollback_err)
            raise PersistenceError("Database error", detail=str(err)) from err
        finally:
            if cursor is not None:
                cursor.close()
            conn.close()

