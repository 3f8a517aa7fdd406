import sqlite3
import logging
from typing import Any, Iterator, Optional

from .exceptions import ConnectionError, StatementError


'''
The adapter is the only place that talks to sqlite3, every Model sharing an Engine goes through the same adapter

Non-query statements are committed as soon as they run, there is no transaction spanning more than one statement
'''

class SQLiteAdapter:
    def __init__(self, con: sqlite3.Connection, logger: Optional[logging.Logger] = None) -> None:
        self.con = con
        self.logger = logger
        try:
            cur = con.cursor()
            cur.execute("PRAGMA foreign_keys = ON")
            # Forces sqlite to read the header so a corrupt file fails here and not on first use
            cur.execute("SELECT name FROM sqlite_master LIMIT 1")
            cur.close()
        except sqlite3.Error as e:
            if self.logger is not None:
                self.logger.error(f"Error opening database: {str(e)}")
            raise ConnectionError(f"Failed to open database: {e}") from e

    @classmethod
    def open(cls, path: str, logger: Optional[logging.Logger] = None) -> "SQLiteAdapter":
        """Open or create the database at path"""
        if logger is not None:
            logger.info(f"Opening database: {path}")

        try:
            con = sqlite3.connect(path)
        except sqlite3.Error as e:
            if logger is not None:
                logger.error(f"Error opening database '{path}': {str(e)}")
            raise ConnectionError(f"Failed to open database '{path}': {e}") from e

        try:
            return cls(con, logger)
        except ConnectionError:
            con.close()
            raise

    @property
    def closed(self) -> bool:
        return self.con is None

    def close(self) -> None:
        if self.con is None:
            return
        try:
            self.con.close()
        except sqlite3.Error as e:
            raise ConnectionError(f"Failed to close database: {e}") from e
        finally:
            self.con = None
        if self.logger is not None:
            self.logger.info("Closed database connection")

    # Wrapper methods

    def _cursor(self, query: str) -> sqlite3.Cursor:
        if self.con is None:
            raise StatementError(query, "Database connection is closed")
        return self.con.cursor()

    def execute(self, query: str, params: tuple = ()) -> None:
        """Execute a non-query statement and commit it"""
        if self.logger is not None:
            self.logger.info(f"Executing query: {query} with params: {params}")

        cur = self._cursor(query)
        try:
            cur.execute(query, params)
            self.con.commit()
        except sqlite3.Error as e:
            self.con.rollback()
            if self.logger is not None:
                self.logger.error(f"Error executing query '{query}' with params {params}: {str(e)}")
            raise StatementError(query, str(e)) from e
        finally:
            cur.close()

    def query_rows(self, query: str, params: tuple = ()) -> Iterator[dict[str, Any]]:
        """
        Run a SELECT and yield each result as a column name -> value dict.
        NULL columns are left out of the dict. The iterator is lazy and can only be consumed once.
        """
        if self.logger is not None:
            self.logger.info(f"Querying: {query} with params: {params}")

        cur = self._cursor(query)
        try:
            # sqlite can fail on any row, not only when the statement starts
            cur.execute(query, params)
            columns = [d[0] for d in cur.description]
            for values in cur:
                yield {k: v for k, v in zip(columns, values) if v is not None}
        except sqlite3.Error as e:
            if self.logger is not None:
                self.logger.error(f"Error querying '{query}' with params {params}: {str(e)}")
            raise StatementError(query, str(e)) from e
        finally:
            cur.close()

    def fetch_one(self, query: str, params: tuple = ()) -> tuple | None:
        """Fetch a single result with logging"""
        if self.logger is not None:
            self.logger.info(f"Fetching query: {query} with params: {params}")

        cur = self._cursor(query)
        try:
            cur.execute(query, params)
            result = cur.fetchone()
        except sqlite3.Error as e:
            if self.logger is not None:
                self.logger.error(f"Error fetching query '{query}' with params {params}: {str(e)}")
            raise StatementError(query, str(e)) from e
        finally:
            cur.close()

        if self.logger is not None:
            self.logger.debug(f"Fetch result: {result}")
        return result

    def introspect_columns(self, table_name: str) -> list[tuple[str, str]]:
        """Return (name, declared type) of every column in the order sqlite reports them"""
        query = f"PRAGMA table_info({table_name})"
        if self.logger is not None:
            self.logger.info(f"Fetching query: {query}")

        cur = self._cursor(query)
        try:
            cur.execute(query)
            # row format: cid, name, type, notnull, dflt_value, pk
            return [(row[1], row[2]) for row in cur.fetchall()]
        except sqlite3.Error as e:
            if self.logger is not None:
                self.logger.error(f"Error fetching query '{query}': {str(e)}")
            raise StatementError(query, str(e)) from e
        finally:
            cur.close()
