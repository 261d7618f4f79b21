"""Batch fingerprint submission flow."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Sequence
import base64
import logging

from sqlalchemy.orm import Session

from fingerprint_archive.archive import Archive, ArchiveConnection, ArchiveConnectionError, connect_alongside
from fingerprint_archive.db.models import FingerprintType, Person
from fingerprint_archive.db.repository import QualityRecordStore, find_fingerprint_type, find_person
from fingerprint_archive.errors import TransferFailure

from .retention import RetentionDecision, decide_retention, fingerprint_directory, record_attempt


LOGGER = logging.getLogger("fingerprint_archive.submission")
SUCCESS_MESSAGE = "Las huellas: {names} se han registrado correctamente."
NONE_SUCCEEDED_MESSAGE = "No se registró ninguna huella correctamente."


@dataclass(frozen=True, slots=True)
class ScanSubmission:
    """One scan of an incoming batch, image still base64 encoded."""

    fingerprint_type_id: int
    quality: int
    image_base64: str


@dataclass(slots=True)
class BatchReport:
    success: list[str] = field(default_factory=list)
    error: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class SubmissionResult:
    message: str
    results: BatchReport

    def to_payload(self) -> dict[str, object]:
        return {
            "message": self.message,
            "results": {
                "success": list(self.results.success),
                "error": list(self.results.error),
            },
        }


def submit_fingerprints(
    session: Session,
    archive: Archive,
    person_id: int,
    scans: Sequence[ScanSubmission],
    archive_root: str,
) -> SubmissionResult:
    """Store a batch of scans for one person.

    The person lookup overlaps with opening the archive connection, which is
    then shared by every scan and closed once at the end. Scans run in order;
    a failing scan is reported under ``error`` and the rest still run.
    Unknown persons or fingerprint types abort the whole batch before any
    scan is processed. An unreachable archive raises ``TransferFailure``.
    """
    store = QualityRecordStore(session)
    report = BatchReport()

    try:
        with connect_alongside(archive, lambda: find_person(session, person_id)) as (person, connection):
            directory = fingerprint_directory(archive_root, person.id)
            fingerprint_types = {
                type_id: find_fingerprint_type(session, type_id)
                for type_id in dict.fromkeys(scan.fingerprint_type_id for scan in scans)
            }

            for scan in scans:
                fingerprint_type = fingerprint_types[scan.fingerprint_type_id]
                try:
                    decision = _submit_scan(store, connection, person, fingerprint_type, scan, directory)
                except Exception as exc:
                    session.rollback()
                    LOGGER.exception(
                        "Fingerprint %s for person id=%s failed: %s",
                        fingerprint_type.short_name,
                        person_id,
                        exc,
                    )
                    report.error.append(fingerprint_type.name)
                else:
                    LOGGER.info(
                        "Fingerprint %s for person id=%s quality=%s action=%s",
                        fingerprint_type.short_name,
                        person_id,
                        scan.quality,
                        decision.action,
                    )
                    report.success.append(fingerprint_type.name)
    except ArchiveConnectionError as exc:
        LOGGER.error("Could not connect to archive: %s", exc)
        raise TransferFailure(f"Could not connect to archive: {exc}") from exc

    if report.success:
        message = SUCCESS_MESSAGE.format(names=", ".join(report.success))
    else:
        message = NONE_SUCCEEDED_MESSAGE
    return SubmissionResult(message=message, results=report)


def _submit_scan(
    store: QualityRecordStore,
    connection: ArchiveConnection,
    person: Person,
    fingerprint_type: FingerprintType,
    scan: ScanSubmission,
    directory: str,
) -> RetentionDecision:
    image = base64.b64decode(scan.image_base64, validate=True)
    record = store.find(person.id, fingerprint_type.id)

    def list_variants() -> list[str]:
        return [remote_file.name for remote_file in connection.list_files(directory)]

    if record is None:
        decision = decide_retention(None, scan.quality, fingerprint_type.short_name, directory, list_variants)
        store.create(person, fingerprint_type, scan.quality, decision.upload_path)
    else:
        previous_attempts = record.attempts
        record_attempt(record, scan.quality, datetime.now(timezone.utc))
        store.save(record)
        decision = decide_retention(
            previous_attempts, scan.quality, fingerprint_type.short_name, directory, list_variants
        )

    if decision.remove_path is not None:
        connection.remove(decision.remove_path)
    if decision.upload_path is not None:
        connection.upload(image, directory, decision.upload_path)
    return decision
