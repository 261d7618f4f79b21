"""Fingerprint variant retention rules."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Final, Iterable
import re

from fingerprint_archive.db.models import PersonFingerprint


EVICTION_THRESHOLD: Final[int] = 3
FILE_EXTENSION: Final[str] = ".wsq"
QUALITY_PATTERN: Final[re.Pattern[str]] = re.compile(r"\d+")


class RetentionAction(str, Enum):
    UPLOAD = "upload"
    REPLACE = "replace"
    SKIP = "skip"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class RetentionDecision:
    """Remote operations to perform for one scan."""

    action: RetentionAction
    upload_path: str | None = None
    remove_path: str | None = None


def fingerprint_directory(archive_root: str, person_id: int) -> str:
    """Archive directory of one person, with a trailing slash."""
    return f"{archive_root.strip('/')}/{person_id}/"


def initial_path(directory: str, short_name: str) -> str:
    """Path of the first file stored for a finger."""
    return f"{directory}{short_name}{FILE_EXTENSION}"


def variant_path(directory: str, short_name: str, quality: int) -> str:
    """Path of a later scan, keyed by its quality."""
    return f"{directory}{short_name}_{quality}{FILE_EXTENSION}"


def parse_variant_quality(file_name: str) -> int | None:
    """Return the first run of digits in ``file_name``, if any."""
    match = QUALITY_PATTERN.search(file_name)
    if match is None:
        return None
    return int(match.group(0))


def decide_retention(
    previous_attempts: int | None,
    new_quality: int,
    short_name: str,
    directory: str,
    list_variants: Callable[[], Iterable[str]],
) -> RetentionDecision:
    """Decide where a new scan goes and which stored variant, if any, it evicts.

    ``previous_attempts`` is the attempt count before this submission, or
    ``None`` when no record exists yet. ``list_variants`` returns the file
    names currently in ``directory`` and is only called once eviction
    applies.
    """
    if previous_attempts is None:
        return RetentionDecision(RetentionAction.UPLOAD, upload_path=initial_path(directory, short_name))

    upload_path = variant_path(directory, short_name, new_quality)
    if previous_attempts <= EVICTION_THRESHOLD:
        return RetentionDecision(RetentionAction.UPLOAD, upload_path=upload_path)

    weakest_name: str | None = None
    weakest_quality: int | None = None
    for name in list_variants():
        if short_name not in name:
            continue
        quality = parse_variant_quality(name)
        if not quality:
            continue
        if quality == new_quality:
            return RetentionDecision(RetentionAction.SKIP)
        if weakest_quality is None or quality < weakest_quality:
            weakest_name, weakest_quality = name, quality

    if weakest_name is None or weakest_quality >= new_quality:
        return RetentionDecision(RetentionAction.SKIP)
    return RetentionDecision(
        RetentionAction.REPLACE,
        upload_path=upload_path,
        remove_path=f"{directory}{weakest_name}",
    )


def record_attempt(record: PersonFingerprint, new_quality: int, now: datetime) -> None:
    """Count one more submission and keep the best quality seen."""
    if new_quality > record.quality:
        record.quality = new_quality
        record.updated_at = now
    record.attempts += 1
