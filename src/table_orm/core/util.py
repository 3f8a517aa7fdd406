from typing import Any


# Returns the (column, value) pairs of a row that end up in a statement; NULL columns are skipped
def get_pairs(row: dict[str, Any]) -> list[tuple[str, Any]]:
    return [(k, v) for k, v in row.items() if v is not None]

# Wraps a value in single quotes, embedded quotes are NOT escaped
def quote(value: Any) -> str:
    return f"'{value}'"


def insert_statement(table_name: str, row: dict[str, Any], parameterized: bool = False) -> tuple[str, tuple]:
    """
    Build an INSERT for a single row.
    Returns: (query_string, parameter_tuple), the tuple is empty unless parameterized
    """
    pairs = get_pairs(row)
    columns = ', '.join([k for k, _ in pairs])

    if parameterized:
        placeholders = ', '.join(['?'] * len(pairs))
        return f"INSERT INTO {table_name} ({columns}) VALUES ({placeholders})", tuple(v for _, v in pairs)

    values = ', '.join([quote(v) for _, v in pairs])
    return f"INSERT INTO {table_name} ({columns}) VALUES ({values})", ()


def delete_statement(table_name: str, row: dict[str, Any], parameterized: bool = False) -> tuple[str, tuple]:
    """
    Build a DELETE matching every non-NULL column of a row.
    Returns: (query_string, parameter_tuple)
    """
    pairs = get_pairs(row)

    if parameterized:
        conditions = ' AND '.join([f"{k}=?" for k, _ in pairs])
        return f"DELETE FROM {table_name} WHERE {conditions}", tuple(v for _, v in pairs)

    conditions = ' AND '.join([f"{k}={quote(v)}" for k, v in pairs])
    return f"DELETE FROM {table_name} WHERE {conditions}", ()


def select_statement(table_name: str, expr: str) -> str:
    # expr goes in as written
    return f"SELECT * FROM {table_name} WHERE {expr}"


def probe_statement(table_name: str, column: str, value: Any, parameterized: bool = False) -> tuple[str, tuple]:
    """Build the single-column existence probe used for sync checks"""
    if parameterized:
        return f"SELECT {column} FROM {table_name} WHERE {column}=?", (value,)
    return f"SELECT {column} FROM {table_name} WHERE {column}={quote(value)}", ()


def create_statement(table_name: str, schema: str) -> str:
    return f"CREATE TABLE IF NOT EXISTS {table_name} ({schema})"


# Formats PRAGMA table_info output the same way a schema literal is written: "col1 type1, col2 type2"
def format_schema(columns: list[tuple[str, str]]) -> str:
    return ', '.join([f"{name} {type_}" for name, type_ in columns])
