"""
Relational persistence layer (SQLAlchemy).
"""
from .base import Base, Database

__all__ = [
    "Base",
    "Database",
]
