"""Tests for orgchart.shared.graph topology accessors."""

import pytest

from orgchart import CyclicReferenceError, Node, NodeNotFoundError, Topology

from conftest import example_items, get_id, get_to


def build(items, cache=False):
    nodes = [Node(data=item) for item in items]
    return Topology(nodes, get_id, get_to, cache=cache)


def ids(nodes):
    return [get_id(n.data) for n in nodes]


@pytest.fixture(params=[False, True], ids=["scan", "cached"])
def topology(request):
    return build(example_items(), cache=request.param)


class TestLookups:
    """Children, parent and id lookups."""

    def test_children_in_store_order(self, topology):
        root = topology.find_by_id("1")
        assert ids(topology.get_children(root)) == ["2", "3", "4"]

    def test_leaf_has_no_children(self, topology):
        assert topology.get_children(topology.find_by_id("5")) == []

    def test_parent_of_root_is_none(self, topology):
        assert topology.get_parent(topology.find_by_id("1")) is None

    def test_parent_lookup(self, topology):
        assert get_id(topology.get_parent(topology.find_by_id("5")).data) == "2"

    def test_find_missing_returns_none(self, topology):
        assert topology.find("42") is None
        assert topology.find(None) is None

    def test_find_by_id_missing_raises(self, topology):
        with pytest.raises(NodeNotFoundError) as exc:
            topology.find_by_id("42")
        assert exc.value.node_id == "42"

    def test_duplicate_ids_resolve_to_first_match(self):
        items = [
            {"id": "a", "to": None, "title": "first"},
            {"id": "a", "to": None, "title": "second"},
            {"id": "b", "to": "a"},
        ]
        topology = build(items)
        parent = topology.get_parent(topology.find_by_id("b"))
        assert parent.data["title"] == "first"

    def test_node_without_id_has_no_children(self):
        topology = build([{"id": None, "to": None}, {"id": "x", "to": None}])
        assert topology.get_children(topology.nodes[0]) == []


class TestLevels:
    """Level computation and root detection."""

    def test_levels(self, topology):
        levels = {get_id(n.data): topology.level(n) for n in topology.nodes}
        assert levels == {"1": 1, "2": 2, "3": 2, "4": 2, "5": 3}

    def test_roots(self, topology):
        assert ids(topology.roots) == ["1"]

    def test_dangling_parent_is_root(self):
        topology = build([{"id": "x", "to": "missing"}, {"id": "y", "to": "x"}])
        assert ids(topology.roots) == ["x"]
        assert topology.level(topology.find_by_id("y")) == 2

    def test_root_invariant(self):
        items = example_items() + [{"id": "6", "to": "gone"}, {"id": "7", "to": None}]
        topology = build(items)
        for n in topology.nodes:
            parent_id = get_to(n.data)
            is_root = parent_id is None or topology.find(parent_id) is None
            assert (topology.level(n) == 1) == is_root

    def test_self_reference_raises(self):
        topology = build([{"id": "a", "to": "a"}])
        with pytest.raises(CyclicReferenceError):
            topology.level(topology.nodes[0])

    def test_two_node_cycle_raises(self):
        topology = build([{"id": "a", "to": "b"}, {"id": "b", "to": "a"}])
        with pytest.raises(CyclicReferenceError) as exc:
            topology.level(topology.find_by_id("a"))
        assert exc.value.repeated == "a"
        assert exc.value.chain == ["a", "b", "a"]

    def test_chain_into_cycle_raises(self):
        topology = build([{"id": "a", "to": "b"}, {"id": "b", "to": "c"}, {"id": "c", "to": "b"}])
        with pytest.raises(CyclicReferenceError):
            topology.level(topology.find_by_id("a"))


class TestLeaves:
    def test_all_leaves_empty(self, topology):
        assert topology.all_leaves([]) is True

    def test_all_leaves_false_when_child_has_children(self, topology):
        children = topology.get_children(topology.find_by_id("1"))
        assert topology.all_leaves(children) is False

    def test_hidden_node_counts_as_leaf(self, topology):
        topology.find_by_id("2").hide_nodes = True
        children = topology.get_children(topology.find_by_id("1"))
        assert topology.all_leaves(children) is True


class TestWalks:
    """Descendant and ancestor walks."""

    def test_descendants_preorder(self, topology):
        assert ids(topology.descendants(topology.find_by_id("1"))) == ["1", "2", "5", "3", "4"]

    def test_descendants_of_leaf(self, topology):
        assert ids(topology.descendants(topology.find_by_id("3"))) == ["3"]

    def test_ancestors(self, topology):
        assert ids(topology.ancestors(topology.find_by_id("5"))) == ["2", "1"]

    def test_descendants_cycle_raises(self):
        topology = build([{"id": "a", "to": "b"}, {"id": "b", "to": "a"}])
        with pytest.raises(CyclicReferenceError):
            topology.descendants(topology.find_by_id("a"))

    def test_ancestors_cycle_raises(self):
        topology = build([{"id": "a", "to": "b"}, {"id": "b", "to": "a"}])
        with pytest.raises(CyclicReferenceError):
            topology.ancestors(topology.find_by_id("a"))


class TestDiagnostics:
    """networkx-backed hierarchy graph and cycle report."""

    def test_hierarchy_graph_edges(self, topology):
        G = topology.build_hierarchy_graph()
        assert set(G.edges()) == {("1", "2"), ("1", "3"), ("1", "4"), ("2", "5")}

    def test_dangling_reference_has_no_edge(self):
        G = build([{"id": "x", "to": "missing"}]).build_hierarchy_graph()
        assert list(G.nodes()) == ["x"]
        assert G.number_of_edges() == 0

    def test_no_cycles(self, topology):
        assert topology.find_cycles() == []

    def test_cycle_reported(self):
        items = example_items() + [{"id": "a", "to": "b"}, {"id": "b", "to": "a"}]
        cycles = build(items).find_cycles()
        assert len(cycles) == 1
        assert sorted(cycles[0]) == ["a", "b"]
