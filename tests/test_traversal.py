"""
Tests for depth-bounded subgraph traversal
"""
import pytest

from depgraph.graph import build_graph, collect_depths, traverse

from conftest import modules_for_chain


def depths_of(subgraph):
    return {node.id: node.depth for node in subgraph.nodes}


def edge_pairs(subgraph):
    return [(edge.source, edge.target) for edge in subgraph.edges]


class TestCollectDepths:
    """Test single-direction depth collection"""

    @pytest.mark.unit
    def test_outgoing_stops_at_max_depth(self, chain_graph):
        assert collect_depths(chain_graph, "a", 2, outgoing=True) == {"a": 0, "b": 1, "c": 2}

    @pytest.mark.unit
    def test_incoming(self, chain_graph):
        assert collect_depths(chain_graph, "d", 5, outgoing=False) == {"d": 0, "c": 1, "b": 2, "a": 3}

    @pytest.mark.unit
    def test_minimum_depth_wins(self):
        """a -> b -> c plus a shortcut a -> c puts c at depth 1"""
        graph = build_graph({
            "modules": [
                {"source": "b", "dependencies": [{"resolved": "c"}]},
                {"source": "a", "dependencies": [{"resolved": "b"}, {"resolved": "c"}]},
            ]
        })

        assert collect_depths(graph, "a", 3, outgoing=True) == {"a": 0, "b": 1, "c": 1}

    @pytest.mark.unit
    def test_cycle_terminates(self):
        graph = build_graph({
            "modules": [
                {"source": "a", "dependencies": [{"resolved": "b"}]},
                {"source": "b", "dependencies": [{"resolved": "a"}]},
            ]
        })

        assert collect_depths(graph, "a", 5, outgoing=True) == {"a": 0, "b": 1}


class TestTraverse:
    """Test combined dependency / dependent subgraphs"""

    @pytest.mark.unit
    def test_depth_one_chain(self):
        graph = build_graph(modules_for_chain("a", "b", "c"))

        subgraph = traverse(graph, "a", 1, True)

        assert depths_of(subgraph) == {"a": 0, "b": 1}
        assert edge_pairs(subgraph) == [("a", "b")]

    @pytest.mark.unit
    def test_direct_edges_kept_without_indirect(self):
        """Edges touching the root or a depth-1 node always stay"""
        graph = build_graph(modules_for_chain("a", "b", "c"))

        subgraph = traverse(graph, "a", 2, False)

        assert depths_of(subgraph) == {"a": 0, "b": 1, "c": 2}
        assert edge_pairs(subgraph) == [("a", "b"), ("b", "c")]

    @pytest.mark.unit
    def test_indirect_edges_filtered(self, chain_graph):
        """c -> d joins two nodes deeper than one hop"""
        with_indirect = traverse(chain_graph, "a", 3, True)
        without_indirect = traverse(chain_graph, "a", 3, False)

        assert ("c", "d") in edge_pairs(with_indirect)
        assert ("c", "d") not in edge_pairs(without_indirect)
        assert ("b", "c") in edge_pairs(without_indirect)
        assert depths_of(with_indirect) == depths_of(without_indirect)

    @pytest.mark.unit
    def test_both_directions(self, chain_graph):
        subgraph = traverse(chain_graph, "b", 1, True)

        assert depths_of(subgraph) == {"a": 1, "b": 0, "c": 1}
        assert edge_pairs(subgraph) == [("a", "b"), ("b", "c")]

    @pytest.mark.unit
    def test_root_flag(self, sample_graph):
        subgraph = traverse(sample_graph, "src/app.ts", 2, True)

        roots = [node for node in subgraph.nodes if node.is_root]
        assert [node.id for node in roots] == ["src/app.ts"]
        assert roots[0].depth == 0
        assert subgraph.to_dict()["nodes"][0] == {
            "id": "src/app.ts",
            "label": "app.ts",
            "depth": 0,
            "isRoot": True,
        }

    @pytest.mark.unit
    def test_node_in_both_directions_takes_smaller_depth(self):
        """x is a dependent at depth 1 and a dependency at depth 2"""
        graph = build_graph({
            "modules": [
                {"source": "x", "dependencies": [{"resolved": "r"}]},
                {"source": "r", "dependencies": [{"resolved": "y"}]},
                {"source": "y", "dependencies": [{"resolved": "x"}]},
            ]
        })

        subgraph = traverse(graph, "r", 2, True)

        assert depths_of(subgraph) == {"x": 1, "r": 0, "y": 1}

    @pytest.mark.unit
    def test_unknown_root_gives_empty_subgraph(self, sample_graph):
        subgraph = traverse(sample_graph, "src/missing.ts", 3, True)

        assert subgraph.is_empty()
        assert subgraph.to_dict() == {"nodes": [], "edges": []}

    @pytest.mark.unit
    def test_isolated_root(self):
        graph = build_graph({"modules": [{"source": "x.ts"}]})

        subgraph = traverse(graph, "x.ts", 3, True)

        assert depths_of(subgraph) == {"x.ts": 0}
        assert subgraph.edges == []

    @pytest.mark.unit
    def test_zero_depth_keeps_root_only(self, chain_graph):
        assert depths_of(traverse(chain_graph, "b", 0, True)) == {"b": 0}

    @pytest.mark.unit
    def test_monotonic_in_depth(self, sample_graph):
        previous = set()
        for depth in range(1, 5):
            ids = traverse(sample_graph, "src/utils/format.ts", depth, False).node_ids
            assert previous <= ids
            previous = ids

    @pytest.mark.unit
    def test_idempotent_and_graph_untouched(self, sample_graph):
        before = sample_graph.to_dict()

        first = traverse(sample_graph, "src/app.ts", 3, False)
        second = traverse(sample_graph, "src/app.ts", 3, False)

        assert first.to_dict() == second.to_dict()
        assert sample_graph.to_dict() == before

    @pytest.mark.unit
    def test_duplicate_edges_carried_through(self):
        graph = build_graph({
            "modules": [{"source": "a", "dependencies": [{"resolved": "b"}, {"resolved": "b"}]}]
        })

        assert edge_pairs(traverse(graph, "a", 1, True)) == [("a", "b"), ("a", "b")]
