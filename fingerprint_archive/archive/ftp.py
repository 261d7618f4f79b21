"""FTP-backed archive for fingerprint image files."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import dataclass
from io import BytesIO
from typing import Callable, Final, Iterator, Protocol, TypeVar
import ftplib
import logging
import posixpath

from fingerprint_archive.config import AppSettings

from .exceptions import ArchiveConnectionError, TransferError


LOGGER = logging.getLogger("fingerprint_archive.archive")
MISSING_OR_EXISTS_CODES: Final[tuple[str, ...]] = ("550", "521")
T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class RemoteFile:
    """One entry of a remote directory listing."""

    name: str
    path: str


class ArchiveConnection(Protocol):
    def list_files(self, directory: str) -> list[RemoteFile]: ...

    def upload(self, data: bytes, directory: str, path: str) -> None: ...

    def download(self, path: str) -> bytes: ...

    def remove(self, path: str) -> None: ...

    def close(self) -> None: ...


class Archive(Protocol):
    def connect(self) -> ArchiveConnection: ...


class FtpArchiveConnection:
    """Open FTP control connection; not safe to share between threads."""

    def __init__(self, ftp: ftplib.FTP) -> None:
        self._ftp: ftplib.FTP | None = ftp

    @property
    def ftp(self) -> ftplib.FTP:
        if self._ftp is None:
            raise TransferError("Archive connection is closed.")
        return self._ftp

    def list_files(self, directory: str) -> list[RemoteFile]:
        """List plain file names in ``directory``; a missing directory is empty."""
        directory = directory.rstrip("/")
        try:
            names = self.ftp.nlst(directory)
        except ftplib.error_perm as exc:
            if str(exc).startswith(MISSING_OR_EXISTS_CODES):
                return []
            raise TransferError(f"Listing {directory} failed: {exc}") from exc
        except ftplib.all_errors as exc:
            raise TransferError(f"Listing {directory} failed: {exc}") from exc

        files = []
        for entry in names:
            name = posixpath.basename(entry.rstrip("/"))
            if name in {"", ".", ".."}:
                continue
            files.append(RemoteFile(name=name, path=posixpath.join(directory, name)))
        return files

    def upload(self, data: bytes, directory: str, path: str) -> None:
        self._ensure_directory(directory)
        try:
            self.ftp.storbinary(f"STOR {path}", BytesIO(data))
        except ftplib.all_errors as exc:
            raise TransferError(f"Upload to {path} failed: {exc}") from exc

    def download(self, path: str) -> bytes:
        buffer = BytesIO()
        try:
            self.ftp.retrbinary(f"RETR {path}", buffer.write)
        except ftplib.all_errors as exc:
            raise TransferError(f"Download of {path} failed: {exc}") from exc
        return buffer.getvalue()

    def remove(self, path: str) -> None:
        try:
            self.ftp.delete(path)
        except ftplib.all_errors as exc:
            raise TransferError(f"Delete of {path} failed: {exc}") from exc

    def close(self) -> None:
        if self._ftp is None:
            return
        ftp, self._ftp = self._ftp, None
        try:
            ftp.quit()
        except ftplib.all_errors as exc:
            LOGGER.debug("FTP QUIT failed, closing socket: %s", exc)
            ftp.close()

    def _ensure_directory(self, directory: str) -> None:
        current = ""
        for part in [segment for segment in directory.split("/") if segment]:
            current = f"{current}/{part}" if current else part
            try:
                self.ftp.mkd(current)
            except ftplib.error_perm as exc:
                if not str(exc).startswith(MISSING_OR_EXISTS_CODES):
                    raise TransferError(f"Creating {current} failed: {exc}") from exc
            except ftplib.all_errors as exc:
                raise TransferError(f"Creating {current} failed: {exc}") from exc


class FtpArchive:
    """Factory for FTP archive connections built from app settings."""

    def __init__(
        self,
        settings: AppSettings,
        ftp_factory: Callable[..., ftplib.FTP] | None = None,
    ) -> None:
        self.settings = settings
        if ftp_factory is None:
            ftp_factory = ftplib.FTP_TLS if settings.ftp_secure else ftplib.FTP
        self._ftp_factory = ftp_factory

    def connect(self) -> FtpArchiveConnection:
        ftp = self._ftp_factory(timeout=self.settings.ftp_timeout_seconds)
        try:
            ftp.connect(self.settings.ftp_host, self.settings.ftp_port)
            ftp.login(self.settings.ftp_user, self.settings.ftp_password)
            if isinstance(ftp, ftplib.FTP_TLS):
                ftp.prot_p()
        except ftplib.all_errors as exc:
            ftp.close()
            raise ArchiveConnectionError(
                f"Could not connect to {self.settings.ftp_host}:{self.settings.ftp_port}: {exc}"
            ) from exc
        LOGGER.debug("Connected to %s:%s", self.settings.ftp_host, self.settings.ftp_port)
        return FtpArchiveConnection(ftp)


@contextmanager
def archive_session(archive: Archive) -> Iterator[ArchiveConnection]:
    """Open a connection and close it on every exit path."""
    connection = archive.connect()
    try:
        yield connection
    finally:
        connection.close()


@contextmanager
def connect_alongside(
    archive: Archive,
    func: Callable[[], T],
) -> Iterator[tuple[T, ArchiveConnection]]:
    """Open an archive connection while ``func`` runs on the calling thread.

    Yields ``(func(), connection)``. If ``func`` raises, a connection that
    did open is closed before the error propagates.
    """
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="archive-connect") as pool:
        pending = pool.submit(archive.connect)
        try:
            result = func()
        except BaseException:
            _close_when_ready(pending)
            raise
        connection = pending.result()

    try:
        yield result, connection
    finally:
        connection.close()


def _close_when_ready(pending: Future[ArchiveConnection]) -> None:
    try:
        connection = pending.result()
    except Exception as exc:
        LOGGER.debug("Archive connection failed while lookup was aborting: %s", exc)
        return
    connection.close()
