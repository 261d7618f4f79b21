"""Error kinds surfaced by the fingerprint services."""

from __future__ import annotations


class FingerprintArchiveError(Exception):
    """Base exception for fingerprint service failures."""

    code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, object]:
        return {"code": self.code, "message": self.message}


class NotFoundError(FingerprintArchiveError):
    """Raised when a person, fingerprint type or comparison set is missing."""

    code = 404


class ConflictError(FingerprintArchiveError):
    """Raised when a write violates a unique constraint."""

    code = 400


class TransferFailure(FingerprintArchiveError):
    """Raised when an archive upload, download or delete fails."""

    code = 502


class UnexpectedError(FingerprintArchiveError):
    """Raised for any other fault; the message never carries internal detail."""

    code = 500

    def __init__(self, message: str = "Unexpected error") -> None:
        super().__init__(message)
