class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DuplicateYearError(ValidationError):
    """Raised when a year is created twice."""

    def __init__(self, year: int):
        super().__init__(f"Jahr {year} existiert bereits")
        self.year = year


class NotFoundError(DomainError):
    """Raised when an operation targets a record that does not exist."""


class SnapshotError(Exception):
    """Base exception for the snapshot/sync/backup layer.

    These never reach the interactive caller except through import results.
    """


class SnapshotUnavailableError(SnapshotError):
    """Raised when the SQLite snapshot engine cannot be used."""


class SnapshotSchemaError(SnapshotError):
    """Raised when a snapshot file does not carry the expected tables."""


class SnapshotValidationError(SnapshotError):
    """Raised when a snapshot row does not match the Year/Month/Day shape."""


class SyncError(SnapshotError):
    """Raised when mirror or rebuild fails."""


class BackupError(SnapshotError):
    """Raised when the snapshot bytes cannot be stored."""
