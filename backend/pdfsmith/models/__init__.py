"""ORM Models: SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete for create_all/alembic
"""

from pdfsmith.models.request_log import RequestLog  # noqa: F401
