"""
SQLAlchemy declarative base for models.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all database models; its metadata holds the whole schema."""
    pass
