"""Layout module - computes org chart positions, bounding size and overlaps."""

from .constants import Orientation
from .geometry import bounding_size, overlapping, visible_nodes
from .tree_layout import Axes, TreeLayout, compute_forest_layout

__all__ = ["Axes", "Orientation", "TreeLayout", "bounding_size", "compute_forest_layout", "overlapping", "visible_nodes"]
