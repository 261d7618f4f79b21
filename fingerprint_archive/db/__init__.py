"""Database package."""

from .base import Base
from .models import FingerprintType, Person, PersonFingerprint
from .repository import QualityRecordStore, find_fingerprint_type, find_person, list_fingerprint_types
from .session import get_engine, get_session, get_session_factory

__all__ = [
    "Base",
    "FingerprintType",
    "Person",
    "PersonFingerprint",
    "QualityRecordStore",
    "find_fingerprint_type",
    "find_person",
    "get_engine",
    "get_session",
    "get_session_factory",
    "list_fingerprint_types",
]
