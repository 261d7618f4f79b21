"""FastAPI app exposing fingerprint submission and comparison."""

from __future__ import annotations

from typing import Iterator
import logging

from fastapi import Depends, FastAPI, Path, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from fingerprint_archive.archive import Archive, FtpArchive
from fingerprint_archive.config import load_settings
from fingerprint_archive.db.session import get_session
from fingerprint_archive.errors import FingerprintArchiveError, UnexpectedError
from fingerprint_archive.service import (
    ScanSubmission,
    get_comparison_set,
    list_fingerprint_catalogue,
    list_registered_fingerprints,
    submit_fingerprints,
)


settings = load_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
LOGGER = logging.getLogger("fingerprint_archive.web")
app = FastAPI(title="Fingerprint Archive Service")


class FingerprintIn(BaseModel):
    fingerprint_type_id: int = Field(ge=1)
    quality: int = Field(ge=0)
    wsq: str = Field(min_length=1, description="Base64-encoded WSQ image.")


class FingerprintBatchIn(BaseModel):
    fingerprints: list[FingerprintIn] = Field(min_length=1)


def get_db() -> Iterator[Session]:
    """FastAPI dependency for DB session."""
    with get_session() as session:
        yield session


def get_archive() -> Archive:
    return FtpArchive(settings)


@app.exception_handler(FingerprintArchiveError)
def handle_service_error(request: Request, exc: FingerprintArchiveError) -> JSONResponse:
    return JSONResponse(status_code=exc.code, content=exc.to_payload())


@app.exception_handler(Exception)
def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    error = UnexpectedError()
    return JSONResponse(status_code=error.code, content=error.to_payload())


@app.post("/api/persons/{person_id}/fingerprints")
def create_person_fingerprints(
    payload: FingerprintBatchIn,
    person_id: int = Path(ge=1),
    db: Session = Depends(get_db),
    archive: Archive = Depends(get_archive),
) -> JSONResponse:
    scans = [
        ScanSubmission(
            fingerprint_type_id=item.fingerprint_type_id,
            quality=item.quality,
            image_base64=item.wsq,
        )
        for item in payload.fingerprints
    ]
    result = submit_fingerprints(
        session=db,
        archive=archive,
        person_id=person_id,
        scans=scans,
        archive_root=settings.archive_root,
    )
    return JSONResponse(result.to_payload())


@app.get("/api/persons/{person_id}/fingerprints")
def registered_fingerprints(
    person_id: int = Path(ge=1),
    db: Session = Depends(get_db),
) -> JSONResponse:
    return JSONResponse({"fingerprints": list_registered_fingerprints(db, person_id)})


@app.get("/api/persons/{person_id}/fingerprints/comparison")
def fingerprint_comparison(
    person_id: int = Path(ge=1),
    db: Session = Depends(get_db),
    archive: Archive = Depends(get_archive),
) -> JSONResponse:
    items = get_comparison_set(db, archive, person_id)
    return JSONResponse(
        [
            {
                "id": item.id,
                "quality": item.quality,
                "fingerprintType": item.fingerprint_type,
                "wsqBase64": item.image_base64,
            }
            for item in items
        ]
    )


@app.get("/api/fingerprint-types")
def fingerprint_types(db: Session = Depends(get_db)) -> JSONResponse:
    return JSONResponse({"fingerprint_types": list_fingerprint_catalogue(db)})


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}
