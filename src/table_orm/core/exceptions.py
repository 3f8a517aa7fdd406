class ORMError(Exception):
    """Base class for every error raised by table_orm"""


class ConnectionError(ORMError):
    """The database could not be opened or closed"""


class SchemaRequiredError(ORMError):
    """A table was requested for the first time without a schema"""

    def __init__(self, table_name: str) -> None:
        self.table_name = table_name
        super().__init__(f"Schema required for new table '{table_name}'")


class StatementError(ORMError):
    """The engine rejected a statement, either at exec or at query time"""

    def __init__(self, statement: str, message: str) -> None:
        self.statement = statement
        super().__init__(f"{message} (statement: {statement})")


class UnsupportedDatabase(ORMError):
    """The connection handed to the Engine is not a sqlite3 connection"""
