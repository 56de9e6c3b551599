"""Swiss-draw tournament pairing, team ratings, SQLite storage and a command line."""

__version__ = "0.1.0"

__all__ = ["models", "ratings", "optimizer", "draw", "storage", "cli"]