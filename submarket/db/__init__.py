"""Database Infrastructure — SQLAlchemy declarative Base and column types."""
