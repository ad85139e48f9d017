class LedgerError(RuntimeError):
    """Base error for ledger operations."""
    pass


class RecordNotFoundError(LedgerError):
    """Raised when a record id is not present in its collection."""

    def __init__(self, collection: str, record_id: str) -> None:
        super().__init__(f"{collection} record '{record_id}' not found")
        self.collection = collection
        self.record_id = record_id


class ValidationError(LedgerError):
    """Raised when a draft fails validation. `errors` maps field name to message."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in errors.items()))
        self.errors = dict(errors)


class DuplicateRecordError(LedgerError):
    """Raised when a unique key (e.g. user email) already exists."""
    pass


class AuthenticationError(LedgerError):
    """Raised for bad credentials or a missing/expired session."""
    pass


class InvalidQueryError(LedgerError):
    """Raised for an unknown timeframe, sort or filter value."""
    pass


class CorruptCollectionError(LedgerError):
    """Raised when a stored collection is not a readable JSON array."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Stored collection '{key}' is unreadable: {reason}")
        self.key = key
        self.reason = reason
