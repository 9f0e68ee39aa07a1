"""
Topology accessors for the node store.
Parent/child/level relationships are derived from the payloads on every query
through the id/to provider functions; nothing is materialized on the nodes.
A Topology built with cache=True indexes the store once and memoizes lookups;
it is only valid for the store version it was built for.
"""

from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Sequence, TypeVar

import networkx as nx

from ..errors import CyclicReferenceError, NodeNotFoundError
from ..node import Node

T = TypeVar("T")

IdProvider = Callable[[Any], Optional[str]]


class Topology(Generic[T]):
    """Read-only view of parent/child relationships over a list of nodes."""

    def __init__(
        self,
        nodes: Sequence[Node[T]],
        id_provider: IdProvider,
        to_provider: IdProvider,
        cache: bool = False,
        version: int = 0,
    ):
        self.nodes = nodes
        self.id_provider = id_provider
        self.to_provider = to_provider
        self.cache = cache
        self.version = version
        self._by_id: Dict[Any, Node[T]] = {}
        self._children: Dict[Any, List[Node[T]]] = {}
        self._levels: Dict[int, int] = {}
        if cache:
            self._index()

    def _index(self) -> None:
        for n in self.nodes:
            nid = self.id_provider(n.data)
            if nid is not None and nid not in self._by_id:
                self._by_id[nid] = n
            pid = self.to_provider(n.data)
            if pid is not None:
                self._children.setdefault(pid, []).append(n)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def node_id(self, node: Node[T]) -> Optional[str]:
        return self.id_provider(node.data)

    def parent_id(self, node: Node[T]) -> Optional[str]:
        return self.to_provider(node.data)

    def find(self, node_id: Any) -> Optional[Node[T]]:
        """First node in store order whose id equals node_id, or None."""
        if node_id is None:
            return None
        if self.cache:
            return self._by_id.get(node_id)
        for n in self.nodes:
            if self.id_provider(n.data) == node_id:
                return n
        return None

    def find_by_id(self, node_id: Any) -> Node[T]:
        node = self.find(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def get_children(self, node: Node[T]) -> List[Node[T]]:
        """All nodes whose parent id equals this node's id, in store order."""
        nid = self.id_provider(node.data)
        if nid is None:
            return []
        if self.cache:
            return list(self._children.get(nid, ()))
        return [n for n in self.nodes if self.to_provider(n.data) == nid]

    def get_parent(self, node: Node[T]) -> Optional[Node[T]]:
        return self.find(self.to_provider(node.data))

    def level(self, node: Node[T]) -> int:
        """
        1 for a root; otherwise one more per resolvable parent hop.
        Raises CyclicReferenceError if the parent chain revisits an id.
        """
        if self.cache and id(node) in self._levels:
            return self._levels[id(node)]
        level = 1
        current = node
        chain = [self.id_provider(node.data)]
        seen = {id(node)}
        while True:
            pid = self.to_provider(current.data)
            if pid is None:
                break
            parent = self.find(pid)
            if parent is None:
                break
            if id(parent) in seen:
                raise CyclicReferenceError(chain + [pid], repeated=pid)
            seen.add(id(parent))
            chain.append(pid)
            current = parent
            level += 1
        if self.cache:
            self._levels[id(node)] = level
        return level

    @property
    def roots(self) -> List[Node[T]]:
        return [n for n in self.nodes if self.level(n) == 1]

    def is_leaf(self, node: Node[T]) -> bool:
        return node.hide_nodes or not self.get_children(node)

    def all_leaves(self, nodes: Iterable[Node[T]]) -> bool:
        return all(self.is_leaf(n) for n in nodes)

    # ------------------------------------------------------------------
    # Walks
    # ------------------------------------------------------------------

    def ancestors(self, node: Node[T]) -> List[Node[T]]:
        """Parents from the immediate one up to the root."""
        result: List[Node[T]] = []
        seen = {id(node)}
        parent = self.get_parent(node)
        while parent is not None:
            if id(parent) in seen:
                raise CyclicReferenceError(
                    [self.id_provider(n.data) for n in [node] + result],
                    repeated=self.id_provider(parent.data),
                )
            seen.add(id(parent))
            result.append(parent)
            parent = self.get_parent(parent)
        return result

    def descendants(self, node: Node[T]) -> List[Node[T]]:
        """The node itself followed by everything reachable through child lookups (pre-order)."""
        result: List[Node[T]] = []
        seen = set()
        stack = [(node, (node,))]
        while stack:
            current, path = stack.pop()
            if id(current) in seen:
                # reached again through a duplicate id, not a cycle
                continue
            seen.add(id(current))
            result.append(current)
            for child in reversed(self.get_children(current)):
                if any(child is p for p in path):
                    raise CyclicReferenceError(
                        [self.id_provider(p.data) for p in path] + [self.id_provider(child.data)],
                        repeated=self.id_provider(child.data),
                    )
                stack.append((child, path + (child,)))
        return result

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def build_hierarchy_graph(self) -> nx.DiGraph:
        """Parent -> child graph over resolvable references. Duplicate ids collapse to one vertex."""
        G = nx.DiGraph()
        for n in self.nodes:
            nid = self.id_provider(n.data)
            if nid is None:
                continue
            G.add_node(nid)
            pid = self.to_provider(n.data)
            if pid is not None and self.find(pid) is not None:
                G.add_edge(pid, nid)
        return G

    def find_cycles(self) -> List[List[Any]]:
        """Every parent-reference cycle as a list of ids; empty for a well-formed forest."""
        return [list(c) for c in nx.simple_cycles(self.build_hierarchy_graph())]
