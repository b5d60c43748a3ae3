#!/usr/bin/env python3
"""Initialize the database and optionally seed it with users and exercises from YAML."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from exercise_tracker.db.database import Database
from exercise_tracker.errors import TrackerError
from exercise_tracker.services.tracker_service import TrackerService

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Initialize the database")
    parser.add_argument("--seed", type=str, help="YAML file with users and their exercises")
    parser.add_argument("--db-path", type=str, help="Override database path")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    db_path = Path(args.db_path) if args.db_path else None
    db = Database(path=db_path)
    db.init()
    print(f"Database initialized at: {db.path}")

    if args.seed:
        seed(db, load_seed(Path(args.seed)))

    db.close()
    print("Done.")


def load_seed(path: Path) -> dict[str, Any]:
    import yaml
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def seed(db: Database, data: dict[str, Any]) -> int:
    """
    Create every user in ``data["users"]`` with its ``exercises`` list.

    Entries the service rejects (duplicate usernames, bad durations) are
    reported and skipped. Returns the number of exercises written.
    """
    svc = TrackerService(db)
    written = 0
    for u in data.get("users", []):
        try:
            user = svc.create_user(u.get("username"))
            print(f"  Created user: {user['username']} ({user['_id']})")
        except TrackerError as e:
            print(f"  Skipping user {u.get('username', '?')}: {e.message}")
            continue

        for ex in u.get("exercises", []):
            try:
                svc.add_exercise(user["_id"], ex.get("description"), ex.get("duration"), ex.get("date"))
                written += 1
            except TrackerError as e:
                print(f"  Skipping exercise {ex.get('description', '?')}: {e.message}")
    return written


if __name__ == "__main__":
    main()
