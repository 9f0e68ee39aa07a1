"""Pydantic request schemas for API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import Orientation


class AddItemRequest(BaseModel):
    """New payload. Missing id is filled with the controller's next unique id."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")
    id: Optional[str] = None
    to: Optional[str] = None
    title: str = ""


class SetParentRequest(BaseModel):
    to: Optional[str] = None


class ChangeIndexRequest(BaseModel):
    index: int = Field(..., ge=-1)


class ToggleRequest(BaseModel):
    hide: Optional[bool] = None


class OrientationRequest(BaseModel):
    orientation: Optional[Orientation] = None
    center: bool = True


class CenterNodeRequest(BaseModel):
    scale: Optional[float] = None
    animate: bool = True
    duration: float = Field(default=0.3, ge=0)
