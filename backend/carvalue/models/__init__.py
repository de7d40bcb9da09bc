"""
ORM models. Re-exported here so that importing the package registers every
table on Base.metadata (Alembic, create_all in tests).
"""

from carvalue.models.report import Report
from carvalue.models.user import User

__all__ = ["Report", "User"]
