"""
Org chart controller - owns the node store, runs layout after mutations and
forwards host effects (state flush, viewport centering) to injected callbacks.

Payload identity and parent linkage come from id_provider / to_provider; the
controller never inspects payload fields itself. Parent references are only
rewritten through to_setter.
"""

import asyncio
import inspect
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Iterable, List, Optional, Protocol, Set, TypeVar, Union

from loguru import logger

from .config import LayoutConfig, Orientation
from .errors import CyclicReferenceError, MissingSetterError
from .layout import bounding_size, compute_forest_layout, overlapping
from .layout.constants import DEFAULT_BOX_H, DEFAULT_BOX_W, DEFAULT_RUN_SPACING, DEFAULT_SPACING
from .node import Node, Rect, Size
from .shared.graph import Topology

T = TypeVar("T")


class RemovalPolicy(str, Enum):
    """What happens to the direct children of a removed node."""

    UNLINK = "unlink"
    CONNECT_TO_PARENT = "connectToParent"
    REMOVE_DESCENDANTS = "removeDescendants"


class ViewportController(Protocol):
    async def center_on_rect(
        self,
        rect: Rect,
        *,
        scale: Optional[float] = None,
        animate: bool = True,
        duration: float = 0.3,
    ) -> None: ...


async def _await(awaitable: Awaitable) -> Any:
    return await awaitable


class OrgChartController(Generic[T]):
    """
    Layout engine for a forest of payloads linked by parent ids.

    Every mutation except change_node_index re-runs layout(). With
    cache_topology=True (default) relationship lookups are memoized per store
    version; hosts that edit a payload's parent field directly must call
    layout() or invalidate_topology() before querying again.
    """

    def __init__(
        self,
        items: Iterable[T],
        *,
        id_provider: Callable[[T], Optional[str]],
        to_provider: Callable[[T], Optional[str]],
        to_setter: Optional[Callable[[T, Optional[str]], None]] = None,
        box_size: Union[Size, tuple] = Size(DEFAULT_BOX_W, DEFAULT_BOX_H),
        spacing: float = DEFAULT_SPACING,
        run_spacing: float = DEFAULT_RUN_SPACING,
        orientation: Orientation = Orientation.LEFT_TO_RIGHT,
        apply_state: Optional[Callable[[], None]] = None,
        center_chart: Optional[Callable[[], Any]] = None,
        viewer: Optional[ViewportController] = None,
        cache_topology: bool = True,
    ):
        self.id_provider = id_provider
        self.to_provider = to_provider
        self.to_setter = to_setter
        self.box_size = Size(*box_size)
        self.spacing = spacing
        self.run_spacing = run_spacing
        self._orientation = Orientation(orientation)
        self.apply_state = apply_state
        self.center_chart = center_chart
        self._viewer = viewer
        self.cache_topology = cache_topology
        self.pending_center: Optional[asyncio.Future] = None
        self._center_tasks: Set[asyncio.Future] = set()
        self._version = 0
        self._memo: Optional[Topology[T]] = None
        self._nodes: List[Node[T]] = []
        self.set_items(items, center=False)

    # ------------------------------------------------------------------
    # Store
    # ------------------------------------------------------------------

    @property
    def items(self) -> List[T]:
        return [n.data for n in self._nodes]

    @items.setter
    def items(self, items: Iterable[T]) -> None:
        self.set_items(items)

    @property
    def nodes(self) -> List[Node[T]]:
        return list(self._nodes)

    @property
    def version(self) -> int:
        return self._version

    def set_items(self, items: Iterable[T], center: bool = True) -> None:
        """Replace the whole store with fresh nodes and lay them out."""
        self._commit([Node(data=item) for item in items], center=center)

    def add_item(self, item: T, center: bool = True) -> Node[T]:
        node = Node(data=item)
        self._commit(self._nodes + [node], center=center)
        return node

    def add_items(self, items: Iterable[T], center: bool = True) -> List[Node[T]]:
        added = [Node(data=item) for item in items]
        self._commit(self._nodes + added, center=center)
        return added

    def _commit(
        self,
        nodes: List[Node[T]],
        center: bool = True,
        undo: Optional[Callable[[], None]] = None,
    ) -> None:
        """
        Swap in a new store and lay it out. If the layout hits a parent cycle the
        previous store is put back (undo reverts any payload writes) and the
        error propagates.
        """
        previous = self._nodes
        self._nodes = nodes
        try:
            self.layout(center=center)
        except CyclicReferenceError:
            self._nodes = previous
            if undo is not None:
                undo()
            self.invalidate_topology()
            logger.info("Store rolled back to {} node(s)", len(previous))
            raise

    @property
    def unique_node_id(self) -> str:
        """Smallest non-negative integer, as a string, not used as an id yet."""
        used = {self.id_provider(n.data) for n in self._nodes}
        i = 0
        while str(i) in used:
            i += 1
        return str(i)

    def remove_item(self, node_id: Optional[str], policy: Union[RemovalPolicy, str]) -> List[Node[T]]:
        """
        Remove the node with node_id, applying policy to its direct children.
        Returns the removed nodes. Nothing is mutated if the setter is missing,
        the id is unknown or a descendant walk hits a cycle. A cycle met while
        laying out the result is rolled back, child relinks included.
        """
        policy = RemovalPolicy(policy)
        if policy in (RemovalPolicy.UNLINK, RemovalPolicy.CONNECT_TO_PARENT) and self.to_setter is None:
            raise MissingSetterError(f"remove_item with policy {policy.value!r}")

        topology = self.topology
        target = topology.find_by_id(node_id)
        children = topology.get_children(target)

        doomed = [target]
        relinked = []
        if policy == RemovalPolicy.REMOVE_DESCENDANTS:
            for child in children:
                doomed.extend(topology.descendants(child))
        else:
            new_parent = topology.parent_id(target) if policy == RemovalPolicy.CONNECT_TO_PARENT else None
            for child in children:
                relinked.append((child, topology.parent_id(child)))
                self.to_setter(child.data, new_parent)

        def undo():
            for child, old_parent in relinked:
                self.to_setter(child.data, old_parent)

        removed: List[Node[T]] = []
        doomed_ids = set()
        for n in doomed:
            if id(n) not in doomed_ids:
                doomed_ids.add(id(n))
                removed.append(n)
        self._commit([n for n in self._nodes if id(n) not in doomed_ids], undo=undo)
        logger.info("Removed node {} ({}): {} node(s) dropped", node_id, policy.value, len(removed))
        return removed

    def change_node_index(self, node: Node[T], index: int) -> None:
        """Move node to index in store order (-1 appends). Does not re-run layout."""
        self._nodes.remove(node)
        if index == -1:
            self._nodes.append(node)
        else:
            self._nodes.insert(index, node)
        self.invalidate_topology()

    def set_parent(self, node_id: Optional[str], parent_id: Optional[str], center: bool = True) -> Node[T]:
        """Reparent a node (drag-and-drop completion) and lay out again."""
        if self.to_setter is None:
            raise MissingSetterError("set_parent")
        topology = self.topology
        node = topology.find_by_id(node_id)
        new_parent = topology.find(parent_id)
        if new_parent is not None and any(d is new_parent for d in topology.descendants(node)):
            # node -> new parent -> ... back up to node
            chain = [node_id, parent_id]
            if new_parent is not node:
                for ancestor in topology.ancestors(new_parent):
                    chain.append(topology.node_id(ancestor))
                    if ancestor is node:
                        break
            raise CyclicReferenceError(chain, repeated=node_id)
        old_parent = topology.parent_id(node)
        self.to_setter(node.data, parent_id)
        self._commit(self._nodes, center=center, undo=lambda: self.to_setter(node.data, old_parent))
        logger.info("Reparented node {} under {}", node_id, parent_id)
        return node

    def toggle_hide_nodes(self, node_id: Optional[str], hide: Optional[bool] = None, center: bool = True) -> Node[T]:
        node = self.topology.find_by_id(node_id)
        node.hide_nodes = (not node.hide_nodes) if hide is None else hide
        self.layout(center=center)
        return node

    # ------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------

    def invalidate_topology(self) -> None:
        self._version += 1
        self._memo = None

    @property
    def topology(self) -> Topology[T]:
        if not self.cache_topology:
            return Topology(self._nodes, self.id_provider, self.to_provider, version=self._version)
        if self._memo is None or self._memo.version != self._version:
            self._memo = Topology(
                self._nodes, self.id_provider, self.to_provider, cache=True, version=self._version
            )
        return self._memo

    @property
    def roots(self) -> List[Node[T]]:
        return self.topology.roots

    def get_children(self, node: Node[T]) -> List[Node[T]]:
        return self.topology.get_children(node)

    def get_parent(self, node: Node[T]) -> Optional[Node[T]]:
        return self.topology.get_parent(node)

    def level(self, node: Node[T]) -> int:
        return self.topology.level(node)

    def all_leaves(self, nodes: Iterable[Node[T]]) -> bool:
        return self.topology.all_leaves(nodes)

    def find_node(self, node_id: Optional[str]) -> Node[T]:
        return self.topology.find_by_id(node_id)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    @property
    def orientation(self) -> Orientation:
        return self._orientation

    @property
    def config(self) -> LayoutConfig:
        return LayoutConfig(
            box_size=self.box_size,
            spacing=self.spacing,
            run_spacing=self.run_spacing,
            orientation=self._orientation,
        )

    def apply_config(self, config: LayoutConfig, center: bool = True) -> None:
        self.box_size = Size(*config.box_size)
        self.spacing = config.spacing
        self.run_spacing = config.run_spacing
        self._orientation = config.orientation
        self.layout(center=center)

    def switch_orientation(self, orientation: Optional[Orientation] = None, center: bool = True) -> Orientation:
        """Set orientation, or toggle it when none is given, then lay out again."""
        self._orientation = Orientation(orientation) if orientation is not None else self._orientation.toggled()
        self.layout(center=center)
        return self._orientation

    def layout(self, center: bool = True) -> None:
        """Recompute every node position, flush state to the host and optionally re-center."""
        # payload parent fields may have been edited in place since the last pass
        self.invalidate_topology()
        try:
            root_count, span = compute_forest_layout(
                self.topology, self.box_size, self.spacing, self.run_spacing, self._orientation
            )
        except CyclicReferenceError as e:
            logger.warning("Layout aborted: {}", e)
            raise
        logger.debug(
            "Laid out {} node(s) under {} root(s), {} span {}",
            len(self._nodes), root_count, self._orientation.value, span,
        )
        if self.apply_state is not None:
            self.apply_state()
        if center:
            self._request_center()

    def _request_center(self) -> None:
        if self.center_chart is None:
            return
        result = self.center_chart()
        if not inspect.isawaitable(result):
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(_await(result))
            return
        task = asyncio.ensure_future(result)
        self._center_tasks.add(task)
        task.add_done_callback(self._center_done)
        self.pending_center = task

    def _center_done(self, task: asyncio.Future) -> None:
        self._center_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.opt(exception=error).warning("Chart centering failed: {}", error)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def bounding_size(self, size: Optional[Size] = None) -> Size:
        return bounding_size(self.topology, self.box_size, size)

    def overlapping(self, node: Node[T]) -> List[Node[T]]:
        return overlapping(self.topology, node, self.box_size)

    # ------------------------------------------------------------------
    # Viewport
    # ------------------------------------------------------------------

    def set_viewer_controller(self, viewer: Optional[ViewportController]) -> None:
        self._viewer = viewer

    async def center_node(
        self,
        node_id: Optional[str],
        scale: Optional[float] = None,
        animate: bool = True,
        duration: float = 0.3,
    ) -> None:
        """Ask the viewport to center on a node; skipped when an ancestor hides it."""
        if self._viewer is None:
            return
        topology = self.topology
        node = topology.find_by_id(node_id)
        if any(a.hide_nodes for a in topology.ancestors(node)):
            return
        rect = Rect(node.position.x, node.position.y, self.box_size.width, self.box_size.height)
        await self._viewer.center_on_rect(rect, scale=scale, animate=animate, duration=duration)
