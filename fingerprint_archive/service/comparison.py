"""Read paths over stored fingerprints."""

from __future__ import annotations

from dataclasses import dataclass
import base64
import logging

from sqlalchemy.orm import Session

from fingerprint_archive.archive import Archive, ArchiveConnectionError, ArchiveError, archive_session
from fingerprint_archive.db.repository import find_person, list_fingerprint_types
from fingerprint_archive.errors import NotFoundError, TransferFailure


LOGGER = logging.getLogger("fingerprint_archive.comparison")


@dataclass(frozen=True, slots=True)
class ComparisonItem:
    id: int
    quality: int
    fingerprint_type: dict[str, object]
    image_base64: str


def get_comparison_set(session: Session, archive: Archive, person_id: int) -> list[ComparisonItem]:
    """Download every stored fingerprint of a person.

    All or nothing: the first failed download aborts the call with
    ``TransferFailure``, as does an unreachable archive. The archive
    connection is closed either way.
    """
    person = find_person(session, person_id)
    if not person.fingerprints:
        raise NotFoundError(f"Person with ID {person_id} has no registered fingerprints")

    items: list[ComparisonItem] = []
    try:
        with archive_session(archive) as connection:
            for fingerprint in person.fingerprints:
                LOGGER.debug("Downloading fingerprint id=%s from %s", fingerprint.id, fingerprint.path)
                try:
                    image = connection.download(fingerprint.path)
                except ArchiveError as exc:
                    LOGGER.error("Failed to download file at path %s: %s", fingerprint.path, exc)
                    raise TransferFailure(f"Failed to download file at path: {fingerprint.path}") from exc
                fingerprint_type = fingerprint.fingerprint_type
                items.append(
                    ComparisonItem(
                        id=fingerprint.id,
                        quality=fingerprint.quality,
                        fingerprint_type={
                            "id": fingerprint_type.id,
                            "name": fingerprint_type.name,
                            "short_name": fingerprint_type.short_name,
                        },
                        image_base64=base64.b64encode(image).decode("ascii"),
                    )
                )
    except ArchiveConnectionError as exc:
        LOGGER.error("Could not connect to archive: %s", exc)
        raise TransferFailure(f"Could not connect to archive: {exc}") from exc
    return items


def list_registered_fingerprints(session: Session, person_id: int) -> list[dict[str, object]]:
    """Fingerprint types for which the person has a stored record."""
    person = find_person(session, person_id)
    return [
        {"id": fingerprint.fingerprint_type.id, "name": fingerprint.fingerprint_type.name}
        for fingerprint in person.fingerprints
    ]


def list_fingerprint_catalogue(session: Session) -> list[dict[str, object]]:
    """All known fingerprint types as ``{id, name}`` pairs."""
    return [{"id": row.id, "name": row.name} for row in list_fingerprint_types(session)]
