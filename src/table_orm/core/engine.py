import sqlite3
import logging
from typing import Any, Callable, Optional

from colorama import Fore, Style

from .adapter import SQLiteAdapter
from .exceptions import SchemaRequiredError, UnsupportedDatabase
from .model import Model
from .util import create_statement, format_schema


Factory = Callable[..., Model]


class Engine:
    def __init__(self, con, logger: Optional[logging.Logger] = None, parameterized: bool = False) -> None:
        self.db = None
        self.logger = None
        self.parameterized = parameterized
        self._factories: dict[str, Factory] = {}

        # Validate logger type if provided
        if logger is not None:
            if not isinstance(logger, logging.Logger):
                raise TypeError(
                    f"Logger must be an instance of logging.Logger, "
                    f"got {type(logger).__name__}"
                )
            self.logger = logger

            if logger.isEnabledFor(logging.INFO):
                logger.info(f"Initializing ORM Engine with connection type: {type(con).__name__}")

        # Match connection to database
        if isinstance(con, sqlite3.Connection):
            self.db = SQLiteAdapter(con, logger)
        else:
            error_msg = (
                f"Unsupported database connection type: {type(con).__name__}. "
                f"Supported types are: sqlite3.Connection"
            )
            if logger and logger.isEnabledFor(logging.ERROR):
                logger.error(f"Engine initialization failed: {error_msg}")
            raise UnsupportedDatabase(error_msg)

    @classmethod
    def open(cls, path: str, logger: Optional[logging.Logger] = None, parameterized: bool = False) -> "Engine":
        """Open or create the database at path, raises ConnectionError if sqlite can't open it"""
        if logger is not None and not isinstance(logger, logging.Logger):
            raise TypeError(
                f"Logger must be an instance of logging.Logger, "
                f"got {type(logger).__name__}"
            )
        # The Engine's own adapter takes over the checked connection
        return cls(SQLiteAdapter.open(path, logger).con, logger, parameterized)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def closed(self) -> bool:
        return self.db.closed

    def close(self) -> None:
        """Close the connection and forget every table, calling it again does nothing"""
        if self.db.closed:
            return
        self._factories.clear()
        self.db.close()

    # Table registration

    def table(self, name: str, schema: Optional[str] = None) -> Factory:
        """
        Return the Model factory for a table.

        A table seen for the first time needs a schema, it is created if missing.
        For a known table the schema is optional, if given it is compared against the live table
        and a warning is printed when they differ. The table itself is never altered.
        """
        if name not in self._factories:
            if schema is None:
                if self.logger:
                    self.logger.error(f"Engine.table() called without a schema for new table: {name}")
                raise SchemaRequiredError(name)

            self.db.execute(create_statement(name, schema))
            self._factories[name] = self._make_factory(name)

            if self.logger and self.logger.isEnabledFor(logging.DEBUG):
                self.logger.debug(f"Registered table: {name}")

        elif schema is not None:
            existing = format_schema(self.db.introspect_columns(name))
            if existing != schema:
                self._warn(f"Schema for table '{name}' differs from the provided schema.")

        return self._factories[name]

    def tables(self) -> list[str]:
        """Names of every registered table, in registration order"""
        return list(self._factories)

    def _make_factory(self, name: str) -> Factory:
        db = self.db
        parameterized = self.parameterized

        def factory(*rows: dict[str, Any]) -> Model:
            return Model(db, name, *rows, parameterized=parameterized)

        factory.table_name = name
        return factory

    def _warn(self, message: str) -> None:
        print(f"{Style.BRIGHT}{Fore.YELLOW}[!] Warning: {message}{Style.RESET_ALL}")
        if self.logger:
            self.logger.warning(message)
