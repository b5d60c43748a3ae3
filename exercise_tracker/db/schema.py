"""Database schema DDL — users and their logged exercises."""

SCHEMA_DDL = """
PRAGMA journal_mode=WAL;
PRAGMA foreign_keys = ON;

-- ==========================================================================
-- Users
-- ==========================================================================
CREATE TABLE IF NOT EXISTS users (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    username    TEXT NOT NULL UNIQUE
);

-- ==========================================================================
-- Exercises (date is a normalized UTC timestamp string)
-- ==========================================================================
CREATE TABLE IF NOT EXISTS exercises (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    userId      INTEGER NOT NULL,
    description TEXT NOT NULL,
    duration    INTEGER NOT NULL,
    date        TEXT NOT NULL,
    FOREIGN KEY (userId) REFERENCES users(id)
);

CREATE INDEX IF NOT EXISTS idx_exercises_user_date ON exercises(userId, date);
"""
