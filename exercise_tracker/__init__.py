"""Exercise tracker — users, exercise logging and filtered logs over SQLite."""

__version__ = "1.0.0"
