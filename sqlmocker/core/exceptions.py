"""Exceptions raised by the schema parser and statement generator."""


class SQLMockerError(Exception):
    """Base class for all SQLMocker errors."""


class MalformedDDLError(SQLMockerError, ValueError):
    """Raised when a CREATE TABLE string cannot be turned into a table."""

    def __init__(self, message: str, ddl: str = ""):
        self.ddl = ddl
        if ddl:
            message = f"{message} (in: {ddl!r})"
        super().__init__(message)
