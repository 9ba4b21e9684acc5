"""
Call center Pydantic schemas for request/response validation.

Requests and responses use a resource document:

    {"data": {"id": "...", "type": "call_centers", "attributes": {...}}}

``CallCenterAttributes`` is the serializer: it renders a call center record
to its public attribute set and nothing else.
"""

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError
from typing import Any, Dict, List, Optional
from uuid import UUID

from app.models.call_center import DEFAULT_CC_TYPE


CALL_CENTER_TYPE = "call_centers"

BLANK_MESSAGE = "can't be blank"


def _not_blank(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise PydanticCustomError("blank", BLANK_MESSAGE)
    return value


class CallCenterAttributes(BaseModel):
    """Serialized attributes of a call center."""
    name: str
    call_center_open: bool
    cc_type: str
    trigger_call_active: bool
    trigger_call_frequency_in_minutes: Optional[int] = None
    trigger_call_phone_number: Optional[str] = None
    virtualq_active: bool

    class Config:
        from_attributes = True


class CallCenterCreate(BaseModel):
    """Attributes accepted when creating a call center."""
    name: Optional[str] = Field(None, max_length=255, validate_default=True)
    call_center_open: bool = True
    cc_type: str = Field(DEFAULT_CC_TYPE, min_length=1, max_length=50)
    trigger_call_active: bool = False
    trigger_call_frequency_in_minutes: Optional[int] = Field(None, ge=1)
    trigger_call_phone_number: Optional[str] = Field(None, max_length=50)
    virtualq_active: bool = True

    @field_validator("name", mode="before")
    @classmethod
    def name_present(cls, value):
        return _not_blank(value)


class CallCenterUpdate(BaseModel):
    """Attributes accepted when updating a call center. Only sent keys are applied."""
    name: Optional[str] = Field(None, max_length=255)
    call_center_open: Optional[bool] = None
    cc_type: Optional[str] = Field(None, min_length=1, max_length=50)
    trigger_call_active: Optional[bool] = None
    trigger_call_frequency_in_minutes: Optional[int] = Field(None, ge=1)
    trigger_call_phone_number: Optional[str] = Field(None, max_length=50)
    virtualq_active: Optional[bool] = None

    @field_validator(
        "name",
        "call_center_open",
        "cc_type",
        "trigger_call_active",
        "virtualq_active",
        mode="before",
    )
    @classmethod
    def required_not_blank(cls, value):
        # Runs only for keys present in the payload
        return _not_blank(value)


class CallCenterPayload(BaseModel):
    """Incoming resource object; attributes are validated by the controller."""
    type: Optional[str] = None
    attributes: Dict[str, Any] = {}


class CallCenterRequest(BaseModel):
    """Incoming resource document."""
    data: Optional[CallCenterPayload] = None


class CallCenterResource(BaseModel):
    """Outgoing resource object."""
    id: UUID
    type: str = CALL_CENTER_TYPE
    attributes: CallCenterAttributes

    @classmethod
    def from_model(cls, call_center) -> "CallCenterResource":
        return cls(
            id=call_center.id,
            attributes=CallCenterAttributes.model_validate(call_center),
        )


class CallCenterResponse(BaseModel):
    """Schema for a single call center document."""
    data: CallCenterResource


class CallCenterListMeta(BaseModel):
    total: int


class CallCenterListResponse(BaseModel):
    """Schema for call center list document."""
    data: List[CallCenterResource]
    meta: CallCenterListMeta
