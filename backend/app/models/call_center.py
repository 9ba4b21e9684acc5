"""
Call center model.
"""

from sqlalchemy import Column, String, Boolean, Integer, DateTime, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid

from app.db.base import Base
from app.models.association_tables import call_center_users


DEFAULT_CC_TYPE = "Default"


class CallCenter(Base):
    """Call center owned by one or more users. Deletion only stamps deleted_at."""

    __tablename__ = "call_centers"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False, index=True)
    call_center_open = Column(Boolean, nullable=False, default=True)
    cc_type = Column(String(50), nullable=False, default=DEFAULT_CC_TYPE)
    trigger_call_active = Column(Boolean, nullable=False, default=False)
    trigger_call_frequency_in_minutes = Column(Integer, nullable=True)
    trigger_call_phone_number = Column(String(50), nullable=True)
    virtualq_active = Column(Boolean, nullable=False, default=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    users = relationship("User", secondary=call_center_users, back_populates="call_centers")

    def __init__(self, **kwargs):
        # Column defaults only fire on INSERT; unsaved instances need them too
        for column in self.__table__.columns:
            if column.default is not None and column.default.is_scalar:
                kwargs.setdefault(column.key, column.default.arg)
        super().__init__(**kwargs)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
