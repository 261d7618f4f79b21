"""Download every stored fingerprint of a person into a directory."""

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
from fingerprint_archive.service import get_comparison_set


def build_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Export a person's archived fingerprints for side-by-side comparison."
    )
    parser.add_argument(
        "--person-id",
        type=int,
        required=True,
        help="Person id.",
    )
    parser.add_argument(
        "--output-dir",
        required=True,
        help="Directory to write WSQ files into.",
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
        with get_session() as session:
            items = get_comparison_set(session, FtpArchive(settings), args.person_id)
    except FingerprintArchiveError as exc:
        print(f"Comparison error: {exc}", file=sys.stderr)
        return 2
    except Exception as exc:  # pragma: no cover - defensive guard
        print(f"Unexpected error: {exc}", file=sys.stderr)
        return 1

    output_dir = Path(args.output_dir).expanduser().resolve()
    output_dir.mkdir(parents=True, exist_ok=True)
    for item in items:
        target = output_dir / f"{item.fingerprint_type['short_name']}_{item.quality}.wsq"
        target.write_bytes(base64.b64decode(item.image_base64))
        print(f"Saved {item.fingerprint_type['name']}: {target}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
