"""Unit tests for the DB layer — schema and both repositories.

Every test uses a fresh temporary SQLite file so tests are isolated and
leave no artefacts behind.
"""

from __future__ import annotations

import unittest

from exercise_tracker.db.database import Database
from exercise_tracker.db.exercise_repo import ExerciseRepository
from exercise_tracker.db.user_repo import UserRepository
from exercise_tracker.errors import ConstraintViolation
from tests.helpers import DatabaseTestCase


# ===========================================================================
# 1. Database core
# ===========================================================================

class TestDatabaseCore(DatabaseTestCase):
    def test_tables_created(self):
        tables = self.db.fetchall(
            "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
        )
        names = {t["name"] for t in tables}
        self.assertTrue({"users", "exercises"}.issubset(names))

    def test_init_is_idempotent(self):
        UserRepository(self.db).create("alice")
        self.db.init()
        self.assertEqual(len(UserRepository(self.db).list_all()), 1)

    def test_foreign_keys_enabled(self):
        row = self.db.fetchone("PRAGMA foreign_keys")
        self.assertEqual(row["foreign_keys"], 1)

    def test_transaction_rollback(self):
        try:
            with self.db.transaction() as conn:
                conn.execute("INSERT INTO users (username) VALUES (?)", ("ghost",))
                raise ValueError("Force rollback")
        except ValueError:
            pass
        row = self.db.fetchone("SELECT * FROM users WHERE username = 'ghost'")
        self.assertIsNone(row)

    def test_creates_missing_parent_directory(self):
        nested = Database(path=self.db_path.parent / "nested" / "tracker.db")
        nested.init()
        self.assertTrue(nested.path.exists())
        nested.close()

    def test_data_survives_reopen(self):
        UserRepository(self.db).create("alice")
        self.db.close()
        self.assertEqual(UserRepository(self.db).list_all()[0].username, "alice")


# ===========================================================================
# 2. Users
# ===========================================================================

class TestUserRepository(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        self.repo = UserRepository(self.db)

    def test_create_assigns_id(self):
        user = self.repo.create("alice")
        self.assertIsInstance(user.id, int)
        self.assertGreater(user.id, 0)
        self.assertEqual(user.username, "alice")

    def test_duplicate_username(self):
        self.repo.create("alice")
        with self.assertRaises(ConstraintViolation) as ctx:
            self.repo.create("alice")
        self.assertEqual(ctx.exception.message, "Username already taken")

    def test_get_by_id(self):
        user = self.repo.create("bob")
        self.assertEqual(self.repo.get_by_id(user.id), user)
        self.assertIsNone(self.repo.get_by_id(user.id + 100))

    def test_list_all_in_insertion_order(self):
        self.repo.create("zed")
        self.repo.create("amy")
        self.assertEqual([u.username for u in self.repo.list_all()], ["zed", "amy"])

    def test_to_dict_uses_public_id(self):
        user = self.repo.create("carol")
        self.assertEqual(user.to_dict(), {"_id": user.id, "username": "carol"})


# ===========================================================================
# 3. Exercises
# ===========================================================================

class TestExerciseRepository(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        self.user = UserRepository(self.db).create("runner")
        self.repo = ExerciseRepository(self.db)
        self.repo.create(self.user.id, "run", 30, "2024-01-01T08:00:00.000Z")
        self.repo.create(self.user.id, "swim", 45, "2024-01-02T08:00:00.000Z")
        self.repo.create(self.user.id, "bike", 60, "2024-01-03T08:00:00.000Z")

    def test_create_returns_row_id(self):
        row_id = self.repo.create(self.user.id, "walk", 10, "2024-01-04T08:00:00.000Z")
        row = self.db.fetchone("SELECT * FROM exercises WHERE id = ?", (row_id,))
        self.assertEqual(row["description"], "walk")
        self.assertEqual(row["userId"], self.user.id)

    def test_query_all(self):
        exercises, count = self.repo.query(self.user.id)
        self.assertEqual(count, 3)
        self.assertEqual([e.description for e in exercises], ["run", "swim", "bike"])

    def test_query_other_user_is_empty(self):
        other = UserRepository(self.db).create("sitter")
        exercises, count = self.repo.query(other.id)
        self.assertEqual((exercises, count), ([], 0))

    def test_from_bound_is_inclusive(self):
        exercises, count = self.repo.query(self.user.id, from_ts="2024-01-02T08:00:00.000Z")
        self.assertEqual(count, 2)
        self.assertEqual([e.description for e in exercises], ["swim", "bike"])

    def test_to_bound_is_inclusive(self):
        exercises, count = self.repo.query(self.user.id, to_ts="2024-01-02T08:00:00.000Z")
        self.assertEqual(count, 2)
        self.assertEqual([e.description for e in exercises], ["run", "swim"])

    def test_count_ignores_limit(self):
        exercises, count = self.repo.query(self.user.id, limit=1)
        self.assertEqual(count, 3)
        self.assertEqual(len(exercises), 1)
        self.assertEqual(exercises[0].description, "run")

    def test_limit_zero(self):
        exercises, count = self.repo.query(self.user.id, limit=0)
        self.assertEqual(exercises, [])
        self.assertEqual(count, 3)

    def test_insertion_order_not_date_order(self):
        self.repo.create(self.user.id, "yoga", 20, "2023-12-31T08:00:00.000Z")
        exercises, _ = self.repo.query(self.user.id)
        self.assertEqual(exercises[-1].description, "yoga")

    def test_log_entry_shape(self):
        exercises, _ = self.repo.query(self.user.id, limit=1)
        entry = exercises[0].to_log_entry()
        self.assertEqual(set(entry), {"description", "duration", "date"})
        self.assertEqual(entry["duration"], 30)


if __name__ == "__main__":
    unittest.main()
