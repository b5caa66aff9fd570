"""Database Infrastructure: declarative Base shared by ORM models and alembic."""
