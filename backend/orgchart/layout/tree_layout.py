"""
Recursive org chart layout.

Levels stack along the primary axis: (level - 1) * (box_primary + run_spacing).
Siblings spread along the cross axis, each subtree consuming a contiguous band:
  - children that are all leaves sit in a two-column zig-zag, pairs sharing a row,
    with the parent centered between the columns;
  - otherwise each child subtree is laid out after the previous one and the parent
    is centered over the total footprint of its children.

topToBottom: primary = y, cross = x.  leftToRight: primary = x, cross = y.
"""

from typing import List, Optional, Tuple

from ..errors import CyclicReferenceError
from ..node import Node, Offset, Size
from ..shared.graph import Topology
from .constants import Orientation


class Axes:
    """Maps (primary, cross) coordinates to layout space for one orientation."""

    def __init__(self, orientation: Orientation, box_size: Size):
        self.orientation = orientation
        if orientation == Orientation.TOP_TO_BOTTOM:
            self.box_primary, self.box_cross = box_size.height, box_size.width
        else:
            self.box_primary, self.box_cross = box_size.width, box_size.height

    def point(self, primary: float, cross: float) -> Offset:
        if self.orientation == Orientation.TOP_TO_BOTTOM:
            return Offset(cross, primary)
        return Offset(primary, cross)

    def cross_of(self, position: Offset) -> float:
        if self.orientation == Orientation.TOP_TO_BOTTOM:
            return position.x
        return position.y

    def primary_of(self, position: Offset) -> float:
        if self.orientation == Orientation.TOP_TO_BOTTOM:
            return position.y
        return position.x


class TreeLayout:
    """One layout pass over a topology. Writes node.position in place."""

    def __init__(
        self,
        topology: Topology,
        box_size: Size,
        spacing: float,
        run_spacing: float,
        orientation: Orientation,
    ):
        self.topology = topology
        self.axes = Axes(orientation, box_size)
        self.spacing = spacing
        self.run_spacing = run_spacing
        self._path: List[Node] = []

    @property
    def run_unit(self) -> float:
        return self.axes.box_primary + self.run_spacing

    def primary(self, node: Node) -> float:
        return (self.topology.level(node) - 1) * self.run_unit

    def leaf_span(self, count: int) -> float:
        """Cross-axis band used by a parent whose children are all leaves."""
        box, sp = self.axes.box_cross, self.spacing
        return box * 2 + sp * 3 if count > 1 else box + sp * 2

    def visible_children(self, node: Node) -> List[Node]:
        if node.hide_nodes:
            return []
        return self.topology.get_children(node)

    def run(self, roots: Optional[List[Node]] = None) -> float:
        """Lay out every root subtree side by side. Returns the total cross-axis span."""
        offset = 0.0
        for root in (self.topology.roots if roots is None else roots):
            offset += self.layout_subtree(root, offset)
        return offset

    def layout_subtree(self, node: Node, offset: float = 0.0) -> float:
        """Position node and its visible descendants starting at cross offset; return the band consumed."""
        self._enter(node)
        try:
            children = self.visible_children(node)
            if self.topology.all_leaves(children):
                return self._position_leaf_children(node, children, offset)
            return self._position_subtrees(node, children, offset)
        finally:
            self._path.pop()

    def _position_leaf_children(self, node: Node, children: List[Node], offset: float) -> float:
        box, sp = self.axes.box_cross, self.spacing
        count = len(children)
        for i, child in enumerate(children):
            if i % 2 == 1:
                cross = sp + box
            elif count > i + 1 or count == 1:
                cross = 0.0
            else:
                # last of an odd run: centered between the columns
                cross = box / 2 + sp / 2
            primary = (self.topology.level(child) - 1 + i // 2) * self.run_unit
            child.position = self.axes.point(primary, offset + cross)

        parent_cross = box / 2 + sp / 2 if count > 1 else 0.0
        node.position = self.axes.point(self.primary(node), offset + parent_cross)
        return self.leaf_span(count)

    def _position_subtrees(self, node: Node, children: List[Node], offset: float) -> float:
        consumed = 0.0
        for child in children:
            consumed += self.layout_subtree(child, offset + consumed)

        relative_offset = sum(self.subtree_footprint(c) for c in children)
        if len(children) == 1:
            cross = self.axes.cross_of(children[0].position)
        else:
            cross = offset + relative_offset / 2 - self.axes.box_cross / 2 - self.spacing
        node.position = self.axes.point(self.primary(node), cross)
        return relative_offset

    def subtree_footprint(self, node: Node) -> float:
        """Cross-axis band of node's subtree, computed without touching positions."""
        children = self.visible_children(node)
        if not children:
            return self.axes.box_cross + self.spacing * 2
        if self.topology.all_leaves(children):
            return self.leaf_span(len(children))
        self._enter(node)
        try:
            return sum(self.subtree_footprint(c) for c in children)
        finally:
            self._path.pop()

    def _enter(self, node: Node) -> None:
        if any(node is p for p in self._path):
            ids = [self.topology.node_id(p) for p in self._path]
            raise CyclicReferenceError(ids + [self.topology.node_id(node)], repeated=self.topology.node_id(node))
        self._path.append(node)


def compute_forest_layout(
    topology: Topology,
    box_size: Size,
    spacing: float,
    run_spacing: float,
    orientation: Orientation,
) -> Tuple[int, float]:
    """Lay out all roots of topology. Returns (root count, total cross-axis span)."""
    layout = TreeLayout(topology, box_size, spacing, run_spacing, orientation)
    roots = topology.roots
    span = layout.run(roots)
    return len(roots), span
