import logging
from dataclasses import dataclass
from typing import Any, Iterator

from .adapter import SQLiteAdapter
from .util import get_pairs, quote, insert_statement, delete_statement, select_statement, probe_statement


@dataclass
class RowStatus:
    """A row paired with whether its values were found in the table"""
    row: dict[str, Any]
    synced: bool

    def __str__(self):
        return f"{self.row} (Synced: {str(self.synced).lower()})"


class Model:
    """
    An ordered list of rows bound to one table.

    Models are built by the factory returned from Engine.table() and share the Engine's adapter,
    they never own or close it. Rows are plain dicts and are not checked against the table's columns.
    """

    def __init__(self, db: SQLiteAdapter, table_name: str, *rows: dict[str, Any], parameterized: bool = False) -> None:
        self.db = db
        self.table_name = table_name
        self.rows: list[dict[str, Any]] = list(rows)
        self.parameterized = parameterized

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> dict[str, Any]:
        return self.rows[index]

    def __repr__(self):
        return f"<Model table={self.table_name} rows={len(self.rows)}>"

    def _debug(self, message: str) -> None:
        logger: logging.Logger = self.db.logger
        if logger and logger.isEnabledFor(logging.DEBUG):
            logger.debug(message)

    def _select(self, expr: str) -> list[dict[str, Any]]:
        return list(self.db.query_rows(select_statement(self.table_name, expr)))

    def _exists(self, column: str, value: Any) -> bool:
        query, params = probe_statement(self.table_name, column, value, self.parameterized)
        return self.db.fetch_one(query, params) is not None

    # Persistence

    def save(self) -> "Model":
        """
        Insert every row, one statement per row, in order.

        Values are interpolated inside single quotes without escaping, so a value holding a quote
        produces a malformed statement and a StatementError. Rows inserted before a failing one stay inserted.
        """
        self._debug(f"Model.save() called for table: {self.table_name}, rows: {len(self.rows)}")
        for row in self.rows:
            query, params = insert_statement(self.table_name, row, self.parameterized)
            self.db.execute(query, params)
        return self

    def delete(self) -> "Model":
        """
        Delete every row from the table, matching on all of its columns.
        The rows are kept in memory so a later save() puts them back.
        """
        self._debug(f"Model.delete() called for table: {self.table_name}, rows: {len(self.rows)}")
        for row in self.rows:
            query, params = delete_statement(self.table_name, row, self.parameterized)
            self.db.execute(query, params)
        return self

    # Querying

    def where(self, expr: str) -> "Model":
        """Replace the held rows with the rows matching expr"""
        self.rows = self._select(expr)
        self._debug(f"Model.where() loaded {len(self.rows)} rows from table: {self.table_name}")
        return self

    def add_where(self, expr: str) -> "Model":
        """Append the rows matching expr to the held rows, duplicates included"""
        found = self._select(expr)
        self.rows.extend(found)
        self._debug(f"Model.add_where() added {len(found)} rows to table: {self.table_name}")
        return self

    def first(self) -> "Model":
        if self.rows:
            return Model(self.db, self.table_name, self.rows[0], parameterized=self.parameterized)
        return Model(self.db, self.table_name, parameterized=self.parameterized)

    # Sync checks

    def sync_status(self) -> list[RowStatus]:
        """
        Report for each row whether it is synced with the table.

        NOTE: a row counts as synced when each of its values exists somewhere in its column,
        not when one stored row matches all of them at once.
        """
        statuses = []
        for row in self.rows:
            synced = all(self._exists(k, v) for k, v in get_pairs(row))
            statuses.append(RowStatus(row, synced))
        return statuses

    def __str__(self):
        lines = []
        for row in self.rows:
            values = []
            synced = True
            # Stops at the first value that can't be found, the rest of the row isn't shown
            for k, v in get_pairs(row):
                if not self._exists(k, v):
                    synced = False
                    break
                values.append(f"{k}={quote(v)}")
            lines.append(f"{{{', '.join(values)}}} (Synced: {str(synced).lower()})")
        return "\n".join(lines)
