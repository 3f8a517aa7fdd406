from .adapter import SQLiteAdapter
from .engine import Engine
from .exceptions import ORMError, ConnectionError, SchemaRequiredError, StatementError, UnsupportedDatabase
from .model import Model, RowStatus

__all__ = [
    'SQLiteAdapter',
    'Engine',
    'Model',
    'RowStatus',
    'ORMError',
    'ConnectionError',
    'SchemaRequiredError',
    'StatementError',
    'UnsupportedDatabase'
]
