from __future__ import annotations

from datetime import datetime, timedelta, timezone
import unittest

from fingerprint_archive.db.models import PersonFingerprint
from fingerprint_archive.service import retention
from fingerprint_archive.service.retention import RetentionAction


DIRECTORY = "Person/Fingerprints/7/"


def _listing(*names: str):
    return lambda: list(names)


def _unreachable_listing():
    raise AssertionError("listing must not be requested")


class PathTests(unittest.TestCase):
    def test_directory_and_file_names(self) -> None:
        directory = retention.fingerprint_directory("/Person/Fingerprints/", 7)

        self.assertEqual(directory, DIRECTORY)
        self.assertEqual(retention.initial_path(directory, "TH"), "Person/Fingerprints/7/TH.wsq")
        self.assertEqual(retention.variant_path(directory, "TH", 55), "Person/Fingerprints/7/TH_55.wsq")

    def test_parse_variant_quality_uses_first_digit_run(self) -> None:
        self.assertEqual(retention.parse_variant_quality("TH_55.wsq"), 55)
        self.assertEqual(retention.parse_variant_quality("TH_07_91.wsq"), 7)
        self.assertIsNone(retention.parse_variant_quality("TH.wsq"))


class DecideRetentionTests(unittest.TestCase):
    def test_first_scan_goes_to_unsuffixed_path(self) -> None:
        decision = retention.decide_retention(None, 60, "TH", DIRECTORY, _unreachable_listing)

        self.assertEqual(decision.action, RetentionAction.UPLOAD)
        self.assertEqual(decision.upload_path, DIRECTORY + "TH.wsq")
        self.assertIsNone(decision.remove_path)

    def test_up_to_three_previous_attempts_always_upload(self) -> None:
        for attempts in (1, 2, 3):
            with self.subTest(attempts=attempts):
                decision = retention.decide_retention(attempts, 10, "TH", DIRECTORY, _unreachable_listing)

                self.assertEqual(decision.action, RetentionAction.UPLOAD)
                self.assertEqual(decision.upload_path, DIRECTORY + "TH_10.wsq")
                self.assertIsNone(decision.remove_path)

    def test_evicts_weakest_variant_when_new_quality_is_better(self) -> None:
        decision = retention.decide_retention(
            4,
            70,
            "TH",
            DIRECTORY,
            _listing("TH_60.wsq", "TH_55.wsq", "TH_58.wsq", "TH_62.wsq"),
        )

        self.assertEqual(decision.action, RetentionAction.REPLACE)
        self.assertEqual(decision.remove_path, DIRECTORY + "TH_55.wsq")
        self.assertEqual(decision.upload_path, DIRECTORY + "TH_70.wsq")

    def test_existing_quality_never_evicts(self) -> None:
        decision = retention.decide_retention(
            9,
            62,
            "TH",
            DIRECTORY,
            _listing("TH_55.wsq", "TH_62.wsq"),
        )

        self.assertEqual(decision.action, RetentionAction.SKIP)
        self.assertIsNone(decision.upload_path)
        self.assertIsNone(decision.remove_path)

    def test_no_eviction_when_new_quality_is_not_better(self) -> None:
        for quality in (40, 55):
            with self.subTest(quality=quality):
                decision = retention.decide_retention(
                    5, quality, "TH", DIRECTORY, _listing("TH_55.wsq", "TH_80.wsq")
                )

                self.assertEqual(decision.action, RetentionAction.SKIP)

    def test_other_fingers_and_unparseable_names_are_ignored(self) -> None:
        decision = retention.decide_retention(
            4,
            50,
            "TH",
            DIRECTORY,
            _listing("TH.wsq", "ID_10.wsq", "TH_45.wsq", "notes.txt"),
        )

        self.assertEqual(decision.action, RetentionAction.REPLACE)
        self.assertEqual(decision.remove_path, DIRECTORY + "TH_45.wsq")

    def test_no_parseable_variants_means_no_eviction(self) -> None:
        decision = retention.decide_retention(4, 90, "TH", DIRECTORY, _listing("TH.wsq", "ID_10.wsq"))

        self.assertEqual(decision.action, RetentionAction.SKIP)

    def test_zero_quality_variants_are_not_eviction_candidates(self) -> None:
        decision = retention.decide_retention(
            6,
            30,
            "TH",
            DIRECTORY,
            _listing("TH_0.wsq", "TH_20.wsq"),
        )

        self.assertEqual(decision.action, RetentionAction.REPLACE)
        self.assertEqual(decision.remove_path, DIRECTORY + "TH_20.wsq")


class RecordAttemptTests(unittest.TestCase):
    def _record(self) -> PersonFingerprint:
        return PersonFingerprint(
            quality=60,
            attempts=2,
            path=DIRECTORY + "TH.wsq",
            updated_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )

    def test_better_quality_updates_quality_and_timestamp(self) -> None:
        record = self._record()
        now = datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(days=3)

        retention.record_attempt(record, 75, now)

        self.assertEqual(record.quality, 75)
        self.assertEqual(record.updated_at, now)
        self.assertEqual(record.attempts, 3)
        self.assertEqual(record.path, DIRECTORY + "TH.wsq")

    def test_worse_quality_only_counts_attempt(self) -> None:
        record = self._record()

        retention.record_attempt(record, 55, datetime.now(timezone.utc))

        self.assertEqual(record.quality, 60)
        self.assertEqual(record.updated_at, datetime(2026, 1, 1, tzinfo=timezone.utc))
        self.assertEqual(record.attempts, 3)


if __name__ == "__main__":
    unittest.main()
