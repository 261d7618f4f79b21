"""Submit WSQ fingerprint scans from disk for one person."""

from __future__ import annotations

import argparse
import base64
import logging
from pathlib import Path
import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from fingerprint_archive.archive import FtpArchive
from fingerprint_archive.config import load_settings
from fingerprint_archive.db.session import get_session
from fingerprint_archive.errors import FingerprintArchiveError
from fingerprint_archive.service import ScanSubmission, submit_fingerprints


def parse_scan(value: str) -> tuple[int, int, Path]:
    """Parse ``TYPE_ID:QUALITY:PATH``."""
    parts = value.split(":", 2)
    if len(parts) != 3 or not parts[0].isdigit() or not parts[1].isdigit() or not parts[2]:
        raise argparse.ArgumentTypeError(f"expected TYPE_ID:QUALITY:PATH, got {value!r}")
    return int(parts[0]), int(parts[1]), Path(parts[2]).expanduser()


def build_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Submit fingerprint scans for a person to the archive.",
        epilog="Exit codes: 0 all stored, 3 some scans failed, 2 lookup error, 1 unexpected error.",
    )
    parser.add_argument(
        "--person-id",
        type=int,
        required=True,
        help="Person id.",
    )
    parser.add_argument(
        "--scan",
        type=parse_scan,
        action="append",
        required=True,
        metavar="TYPE_ID:QUALITY:PATH",
        help="Scan to submit; repeat for several fingers.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the script and return process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        scans = [
            ScanSubmission(
                fingerprint_type_id=type_id,
                quality=quality,
                image_base64=base64.b64encode(path.read_bytes()).decode("ascii"),
            )
            for type_id, quality, path in args.scan
        ]
    except OSError as exc:
        print(f"Cannot read scan: {exc}", file=sys.stderr)
        return 2

    try:
        with get_session() as session:
            result = submit_fingerprints(
                session=session,
                archive=FtpArchive(settings),
                person_id=args.person_id,
                scans=scans,
                archive_root=settings.archive_root,
            )
    except FingerprintArchiveError as exc:
        print(f"Submission error: {exc}", file=sys.stderr)
        return 2
    except Exception as exc:  # pragma: no cover - defensive guard
        print(f"Unexpected error: {exc}", file=sys.stderr)
        return 1

    print(result.message)
    if result.results.error:
        print(f"Failed: {', '.join(result.results.error)}", file=sys.stderr)
        return 3
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
