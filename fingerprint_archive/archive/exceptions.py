"""Custom exceptions for remote archive access."""


class ArchiveError(Exception):
    """Base exception for archive-related failures."""


class ArchiveConnectionError(ArchiveError):
    """Raised when the archive server cannot be reached or rejects the login."""


class TransferError(ArchiveError):
    """Raised when listing, uploading, downloading or deleting a file fails."""
