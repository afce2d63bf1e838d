"""Database layer for tradeclaims application."""

from tradeclaims.database.base import Database
from tradeclaims.database.sqlalchemy_db import SQLAlchemyDatabase

__all__ = ["Database", "SQLAlchemyDatabase"]
