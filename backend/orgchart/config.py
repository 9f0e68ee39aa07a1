"""Layout configuration: box size, spacing, run spacing and orientation."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .layout.constants import (
    DEFAULT_BOX_H,
    DEFAULT_BOX_W,
    DEFAULT_RUN_SPACING,
    DEFAULT_SPACING,
    Orientation,
)
from .node import Size

__all__ = ["LayoutConfig", "Orientation"]


class LayoutConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    box_size: Size = Field(default=Size(DEFAULT_BOX_W, DEFAULT_BOX_H), alias="boxSize")
    spacing: float = Field(default=DEFAULT_SPACING, ge=0)
    run_spacing: float = Field(default=DEFAULT_RUN_SPACING, ge=0, alias="runSpacing")
    orientation: Orientation = Orientation.LEFT_TO_RIGHT

    @field_validator("box_size", mode="before")
    @classmethod
    def _coerce_box_size(cls, value: Any) -> Any:
        """Accept {width, height} objects as well as [w, h] pairs."""
        if isinstance(value, dict):
            return (value.get("width", DEFAULT_BOX_W), value.get("height", DEFAULT_BOX_H))
        return value

    @field_validator("box_size")
    @classmethod
    def _check_box_size(cls, value: Size) -> Size:
        if value.width < 0 or value.height < 0:
            raise ValueError("boxSize dimensions must be non-negative")
        return Size(float(value.width), float(value.height))
