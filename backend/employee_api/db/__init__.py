"""Database package — SQLAlchemy declarative base shared by all ORM models."""
