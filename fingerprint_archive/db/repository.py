"""Person lookups and the quality record store."""

from __future__ import annotations

from datetime import datetime, timezone
import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from fingerprint_archive.errors import ConflictError, NotFoundError, UnexpectedError

from .models import FingerprintType, Person, PersonFingerprint


LOGGER = logging.getLogger("fingerprint_archive.db")


def find_person(session: Session, term: str | int) -> Person:
    """Find a person by numeric id or identity card, with fingerprints loaded."""
    term = str(term).strip()
    conditions = [Person.identity_card == term]
    if term.isdigit():
        conditions.append(Person.id == int(term))

    person = session.execute(
        select(Person)
        .where(or_(*conditions))
        .options(selectinload(Person.fingerprints))
        .limit(1)
    ).scalar_one_or_none()
    if person is None:
        raise NotFoundError(f"Person with {term} not found")
    return person


def find_fingerprint_type(session: Session, type_id: int) -> FingerprintType:
    """Load a fingerprint type by id or raise ``NotFoundError``."""
    fingerprint_type = session.get(FingerprintType, type_id)
    if fingerprint_type is None:
        raise NotFoundError(f"Fingerprint type with ID {type_id} not found")
    return fingerprint_type


def list_fingerprint_types(session: Session) -> list[FingerprintType]:
    return list(session.execute(select(FingerprintType).order_by(FingerprintType.id)).scalars())


class QualityRecordStore:
    """Durable store of per (person, fingerprint type) quality records.

    Every ``save`` commits, so a record survives failures of later scans in
    the same batch.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(self, person_id: int, fingerprint_type_id: int) -> PersonFingerprint | None:
        return self.session.execute(
            select(PersonFingerprint).where(
                PersonFingerprint.person_id == person_id,
                PersonFingerprint.fingerprint_type_id == fingerprint_type_id,
            )
        ).scalar_one_or_none()

    def create(
        self,
        person: Person,
        fingerprint_type: FingerprintType,
        quality: int,
        path: str,
    ) -> PersonFingerprint:
        now = datetime.now(timezone.utc)
        record = PersonFingerprint(
            person=person,
            fingerprint_type=fingerprint_type,
            quality=quality,
            attempts=1,
            path=path,
            created_at=now,
            updated_at=now,
        )
        return self.save(record)

    def save(self, record: PersonFingerprint) -> PersonFingerprint:
        self.session.add(record)
        try:
            self.session.flush()
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConflictError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            LOGGER.error("Quality record write failed: %s", exc)
            raise UnexpectedError() from exc
        return record
