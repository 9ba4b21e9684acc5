"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from app.models.call_center import CallCenter
from app.models.user import User
from app.models.association_tables import call_center_users

__all__ = [
    "CallCenter",
    "User",
    "call_center_users",
]
