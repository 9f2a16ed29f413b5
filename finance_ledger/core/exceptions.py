class LedgerError(Exception):
    """Base class for errors reported by the ledger engine."""

    error_type = "LedgerError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """Malformed input: non-positive amount, missing account, self-transfer..."""

    error_type = "ValidationError"


class NotFoundError(LedgerError):
    """Entity absent or owned by someone else. Both cases look the same to the caller."""

    error_type = "NotFoundError"


class ConsistencyError(LedgerError):
    """Stored balances or budget totals drifted from the transaction log."""

    error_type = "ConsistencyError"

    def __init__(self, message: str, drifts=None):
        super().__init__(message)
        self.drifts = list(drifts or [])


class StorageError(LedgerError):
    """The database failed while applying a multi-write operation."""

    error_type = "StorageError"
