"""
Association tables for many-to-many relationships.
"""

from sqlalchemy import Table, Column, ForeignKey
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base

# CallCenter ↔ User (many-to-many): a user manages every call center linked here
call_center_users = Table(
    "call_center_users",
    Base.metadata,
    Column("call_center_id", UUID(as_uuid=True), ForeignKey("call_centers.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)
