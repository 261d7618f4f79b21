"""Remote archive integrations for fingerprint images."""

from .exceptions import ArchiveConnectionError, ArchiveError, TransferError
from .ftp import (
    Archive,
    ArchiveConnection,
    FtpArchive,
    FtpArchiveConnection,
    RemoteFile,
    archive_session,
    connect_alongside,
)

__all__ = [
    "Archive",
    "ArchiveConnection",
    "ArchiveConnectionError",
    "ArchiveError",
    "FtpArchive",
    "FtpArchiveConnection",
    "RemoteFile",
    "TransferError",
    "archive_session",
    "connect_alongside",
]
