"""
Group schemas.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .base import OmitUnsetModel


class GroupResponse(OmitUnsetModel):
    """Group response model."""

    model_config = ConfigDict(from_attributes=True)
    OPTIONAL_FIELDS: ClassVar[frozenset[str]] = frozenset({"auto_fetch_full_content"})

    id: int
    name: str
    auto_fetch_full_content: bool | None = None


class GroupListResponse(BaseModel):
    """List of groups."""

    groups: list[GroupResponse]


class GroupCreate(BaseModel):
    """Create group request."""

    name: str = Field(min_length=1, max_length=255)
    auto_fetch_full_content: bool | None = None


class GroupUpdate(BaseModel):
    """
    Update group request.

    Only fields present in the request body are applied. Sending
    ``auto_fetch_full_content: null`` resets the group to the system default.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    auto_fetch_full_content: bool | None = None
