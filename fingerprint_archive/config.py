"""Runtime configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
import os


@dataclass(frozen=True)
class AppSettings:
    """Environment-backed settings for the web app and scripts."""

    database_url: str
    ftp_host: str
    ftp_port: int
    ftp_user: str
    ftp_password: str
    ftp_secure: bool
    ftp_timeout_seconds: float
    archive_root: str
    log_level: str


DEFAULT_DATABASE_URL = "postgresql+psycopg://persons:persons@pg:5432/persons"
DEFAULT_ARCHIVE_ROOT = "Person/Fingerprints"


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise RuntimeError(f"Invalid integer for {name}: {value}") from exc


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise RuntimeError(f"Invalid float for {name}: {value}") from exc


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise RuntimeError(f"Invalid boolean for {name}: {value}")


def load_settings() -> AppSettings:
    """Load all app settings from the environment."""
    return AppSettings(
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        ftp_host=os.getenv("FTP_HOST", "ftp"),
        ftp_port=_env_int("FTP_PORT", 21),
        ftp_user=os.getenv("FTP_USER", "anonymous"),
        ftp_password=os.getenv("FTP_PASSWORD", ""),
        ftp_secure=_env_bool("FTP_SECURE", False),
        ftp_timeout_seconds=_env_float("FTP_TIMEOUT_SECONDS", 30.0),
        archive_root=os.getenv("ARCHIVE_ROOT", DEFAULT_ARCHIVE_ROOT).strip("/"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
