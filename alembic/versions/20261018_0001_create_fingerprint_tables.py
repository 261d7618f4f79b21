"""create fingerprint tables

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None

FINGERPRINT_TYPES = [
    (1, "Pulgar derecho", "PD"),
    (2, "Índice derecho", "ID"),
    (3, "Medio derecho", "MD"),
    (4, "Anular derecho", "AD"),
    (5, "Meñique derecho", "MeD"),
    (6, "Pulgar izquierdo", "PI"),
    (7, "Índice izquierdo", "II"),
    (8, "Medio izquierdo", "MI"),
    (9, "Anular izquierdo", "AI"),
    (10, "Meñique izquierdo", "MeI"),
]


def upgrade() -> None:
    op.create_table(
        "persons",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("identity_card", sa.String(length=30), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("identity_card", name="uq_persons_identity_card"),
    )

    fingerprint_types = op.create_table(
        "fingerprint_types",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("short_name", sa.String(length=10), nullable=False),
        sa.UniqueConstraint("short_name", name="uq_fingerprint_types_short_name"),
    )
    op.bulk_insert(
        fingerprint_types,
        [{"id": type_id, "name": name, "short_name": short_name} for type_id, name, short_name in FINGERPRINT_TYPES],
    )

    op.create_table(
        "person_fingerprints",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("person_id", sa.Integer(), sa.ForeignKey("persons.id"), nullable=False),
        sa.Column("fingerprint_type_id", sa.Integer(), sa.ForeignKey("fingerprint_types.id"), nullable=False),
        sa.Column("quality", sa.Integer(), nullable=False),
        sa.Column("attempts", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("path", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint(
            "person_id", "fingerprint_type_id", name="uq_person_fingerprints_person_type"
        ),
    )
    op.create_index("ix_person_fingerprints_person_id", "person_fingerprints", ["person_id"])


def downgrade() -> None:
    op.drop_index("ix_person_fingerprints_person_id", table_name="person_fingerprints")
    op.drop_table("person_fingerprints")
    op.drop_table("fingerprint_types")
    op.drop_table("persons")
