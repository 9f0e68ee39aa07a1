"""
Shared layout constants for the org chart engine.
Every node occupies the same box; spacing values are in layout-space units.
"""

from enum import Enum

# Node box dimensions
DEFAULT_BOX_W = 200
DEFAULT_BOX_H = 100

# Gap between siblings within a zig-zag pair
DEFAULT_SPACING = 20

# Gap between levels along the primary axis
DEFAULT_RUN_SPACING = 50


class Orientation(str, Enum):
    """Primary axis along which levels stack."""

    TOP_TO_BOTTOM = "topToBottom"
    LEFT_TO_RIGHT = "leftToRight"

    def toggled(self) -> "Orientation":
        if self is Orientation.TOP_TO_BOTTOM:
            return Orientation.LEFT_TO_RIGHT
        return Orientation.TOP_TO_BOTTOM
