"""Database models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class Person(Base):
    """Person whose fingerprints are archived; owned by the persons service."""

    __tablename__ = "persons"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    identity_card: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    fingerprints: Mapped[list[PersonFingerprint]] = relationship(
        back_populates="person",
        order_by="PersonFingerprint.id",
    )


class FingerprintType(Base):
    """Anatomical finger; ``short_name`` is used to build archive file names."""

    __tablename__ = "fingerprint_types"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    short_name: Mapped[str] = mapped_column(String(10), nullable=False, unique=True)


class PersonFingerprint(Base):
    """Best known quality and attempt counter for one person and finger."""

    __tablename__ = "person_fingerprints"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    person_id: Mapped[int] = mapped_column(ForeignKey("persons.id"), nullable=False, index=True)
    fingerprint_type_id: Mapped[int] = mapped_column(
        ForeignKey("fingerprint_types.id"), nullable=False
    )
    quality: Mapped[int] = mapped_column(Integer, nullable=False)
    attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    path: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    person: Mapped[Person] = relationship(back_populates="fingerprints")
    fingerprint_type: Mapped[FingerprintType] = relationship(lazy="joined")

    __table_args__ = (
        UniqueConstraint("person_id", "fingerprint_type_id", name="uq_person_fingerprints_person_type"),
    )
