"""Shared test helpers."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from exercise_tracker.db.database import Database


class DatabaseTestCase(unittest.TestCase):
    """Gives each test a fresh SQLite file in a throwaway directory."""

    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.db_path = Path(self._tmpdir.name) / "tracker.db"
        self.db = Database(path=self.db_path)
        self.db.init()

    def tearDown(self):
        self.db.close()
        self._tmpdir.cleanup()
