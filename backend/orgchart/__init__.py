"""
Org chart layout engine.
Positions a forest of payloads linked by parent ids and keeps the layout
current as nodes are added, removed, reparented and reordered.
"""

from .config import LayoutConfig, Orientation
from .controller import OrgChartController, RemovalPolicy, ViewportController
from .errors import CyclicReferenceError, MissingSetterError, NodeNotFoundError, OrgChartError
from .node import Node, Offset, Rect, Size
from .shared.graph import Topology

__all__ = [
    "CyclicReferenceError",
    "LayoutConfig",
    "MissingSetterError",
    "Node",
    "NodeNotFoundError",
    "Offset",
    "OrgChartController",
    "OrgChartError",
    "Orientation",
    "Rect",
    "RemovalPolicy",
    "Size",
    "Topology",
    "ViewportController",
]
