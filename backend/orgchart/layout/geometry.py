"""Bounding size and overlap queries over laid-out nodes."""

from typing import List, Optional

from ..node import Node, Size
from ..shared.graph import Topology


def _max_extent(topology: Topology, node: Node, current: Size) -> Size:
    size = Size(max(current.width, node.position.x), max(current.height, node.position.y))
    if not node.hide_nodes:
        for child in topology.get_children(node):
            size = _max_extent(topology, child, size)
    return size


def visible_nodes(topology: Topology) -> List[Node]:
    """Nodes reachable from the roots without passing below a hidden node, pre-order."""
    visible = []
    seen = set()
    stack = list(reversed(topology.roots))
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        visible.append(node)
        if not node.hide_nodes:
            stack.extend(reversed(topology.get_children(node)))
    return visible


def bounding_size(topology: Topology, box_size: Size, size: Optional[Size] = None) -> Size:
    """
    Width/height needed to show every visible node: the furthest top-left anchor
    reached from the roots plus one box. Descendants of hidden nodes are skipped.
    """
    size = size or Size(0, 0)
    for root in topology.roots:
        size = _max_extent(topology, root, size)
    return Size(size.width + box_size.width, size.height + box_size.height)


def overlapping(topology: Topology, node: Node, box_size: Size) -> List[Node]:
    """Other visible nodes whose boxes intersect node's box, nearest first."""
    node_id = topology.node_id(node) or ""
    hits = []
    for other in visible_nodes(topology):
        if (topology.node_id(other) or "") == node_id:
            continue
        delta = node.distance(other)
        if abs(delta.x) < box_size.width and abs(delta.y) < box_size.height:
            hits.append(other)
    hits.sort(key=lambda other: other.distance_squared(node))
    return hits
