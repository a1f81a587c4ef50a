class StorageError(Exception):
    """Base class for every error raised by the storage layer."""


class CorruptStorageError(StorageError):
    """A table file exists but does not hold the expected JSON document."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Corrupt data file {path}: {reason}")


class InvalidQueryError(StorageError, ValueError):
    """The caller passed a query the repository contract does not allow."""


class DuplicateKeyError(StorageError):
    """A create would break a unique field other than the generated id."""

    def __init__(self, table: str, field: str, value):
        self.table = table
        self.field = field
        self.value = value
        super().__init__(f"{table}.{field} already contains {value!r}")
