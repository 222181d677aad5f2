"""Database persistence infrastructure.

This module provides:
- Base model for all database entities
- Database connection and session management
- Insert-if-absent statements for PostgreSQL and SQLite (dialects.py)
- SQLAlchemy failure classification (failures.py)
- Repository implementations (repositories/)
"""

from src.infrastructure.persistence.base import BaseModel
from src.infrastructure.persistence.database import Database

__all__ = [
    "BaseModel",
    "Database",
]
