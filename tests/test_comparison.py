from __future__ import annotations

import base64
import unittest

from fingerprint_archive.errors import NotFoundError, TransferFailure
from fingerprint_archive.service import (
    get_comparison_set,
    list_fingerprint_catalogue,
    list_registered_fingerprints,
)

from fakes import DIRECTORY, PERSON_ID, FakeArchive, add_record, make_session


class ComparisonSetTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = make_session()
        self.archive = FakeArchive()

    def tearDown(self) -> None:
        self.session.close()

    def test_person_without_fingerprints_is_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            get_comparison_set(self.session, self.archive, PERSON_ID)

        self.assertEqual(self.archive.connects, 0)

    def test_unknown_person_is_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            get_comparison_set(self.session, self.archive, 321)

    def test_downloads_every_stored_fingerprint(self) -> None:
        add_record(self.session, 1, quality=80, attempts=2, path=DIRECTORY + "PD.wsq")
        add_record(self.session, 2, quality=65, attempts=1, path=DIRECTORY + "ID.wsq")
        self.archive.files.update({DIRECTORY + "PD.wsq": b"thumb", DIRECTORY + "ID.wsq": b"index"})

        items = get_comparison_set(self.session, self.archive, PERSON_ID)

        self.assertEqual([item.quality for item in items], [80, 65])
        self.assertEqual(
            items[0].fingerprint_type,
            {"id": 1, "name": "Pulgar derecho", "short_name": "PD"},
        )
        self.assertEqual(base64.b64decode(items[1].image_base64), b"index")
        self.assertEqual(self.archive.connects, 1)
        self.assertEqual(self.archive.closes, 1)

    def test_one_failed_download_fails_whole_call(self) -> None:
        add_record(self.session, 1, quality=80, attempts=2, path=DIRECTORY + "PD.wsq")
        add_record(self.session, 2, quality=65, attempts=1, path=DIRECTORY + "ID.wsq")
        self.archive.files[DIRECTORY + "PD.wsq"] = b"thumb"

        with self.assertRaises(TransferFailure) as ctx:
            get_comparison_set(self.session, self.archive, PERSON_ID)

        self.assertIn(DIRECTORY + "ID.wsq", str(ctx.exception))
        self.assertEqual(ctx.exception.code, 502)
        self.assertEqual(self.archive.closes, 1)

    def test_unreachable_archive_is_transfer_failure(self) -> None:
        add_record(self.session, 1, quality=80, attempts=2, path=DIRECTORY + "PD.wsq")
        self.archive.unreachable = True

        with self.assertRaises(TransferFailure) as ctx:
            get_comparison_set(self.session, self.archive, PERSON_ID)

        self.assertEqual(ctx.exception.code, 502)
        self.assertIn("Could not connect to archive", str(ctx.exception))


class RegisteredFingerprintTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = make_session()

    def tearDown(self) -> None:
        self.session.close()

    def test_lists_registered_types(self) -> None:
        add_record(self.session, 3, quality=50, attempts=1, path=DIRECTORY + "TH.wsq")

        self.assertEqual(
            list_registered_fingerprints(self.session, PERSON_ID),
            [{"id": 3, "name": "thumb"}],
        )

    def test_unknown_person_is_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            list_registered_fingerprints(self.session, 555)

    def test_catalogue_lists_all_types(self) -> None:
        self.assertEqual(
            list_fingerprint_catalogue(self.session),
            [
                {"id": 1, "name": "Pulgar derecho"},
                {"id": 2, "name": "Índice derecho"},
                {"id": 3, "name": "thumb"},
            ],
        )


if __name__ == "__main__":
    unittest.main()
