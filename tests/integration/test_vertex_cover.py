"""
Integration tests: Minimum Vertex Cover on networkx graphs.

These tests drive the full Carousel Greedy pipeline with a realistic
caller: the feasibility check tests whether every edge is covered and
the greedy score is the residual degree of a vertex.
"""

import networkx as nx
import pytest

from carouselgreedy import CarouselGreedy, RunStatus


def is_cover(cg, solution):
    chosen = set(solution)
    return all(u in chosen or v in chosen for u, v in cg.data.edges)


def residual_degree(cg, solution, candidate):
    chosen = set(solution)
    return sum(1 for w in cg.data.neighbors(candidate) if w not in chosen)


def make_solver(graph, **kwargs):
    kwargs.setdefault("alpha", 10)
    kwargs.setdefault("beta", 0.1)
    kwargs.setdefault("seed", 1)
    return CarouselGreedy(is_cover, residual_degree, list(graph.nodes), data=graph, **kwargs)


class TestVertexCoverIntegration:
    """Integration tests for a vertex cover caller."""

    def test_star_graph(self):
        """The hub alone covers a star."""
        graph = nx.star_graph(8)
        cg = make_solver(graph)

        assert cg.greedy_minimize() == [0]
        assert cg.minimize() == [0]

    def test_path_graph(self):
        """A path on 5 vertices has a cover of size 2."""
        graph = nx.path_graph(5)
        cg = make_solver(graph, random_tie_break=False)

        best = cg.minimize()

        assert is_cover(cg, best)
        assert len(best) == 2

    def test_empty_edge_set(self):
        """With no edges the empty set is a cover."""
        graph = nx.empty_graph(4)
        cg = make_solver(graph)

        assert cg.minimize() == []
        assert cg.result.status == RunStatus.FEASIBLE

    def test_random_graph(self, random_graph):
        cg = make_solver(random_graph)

        best = cg.minimize()

        assert is_cover(cg, best)
        assert len(best) <= len(cg.greedy_solution)
        assert set(best) <= set(random_graph.nodes)
        assert len(set(best)) == len(best)
        assert cg.result.status == RunStatus.FEASIBLE

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_never_worse_than_greedy(self, seed):
        graph = nx.gnp_random_graph(25, 0.2, seed=seed)
        cg = make_solver(graph, seed=seed)

        best = cg.minimize()

        assert is_cover(cg, best)
        assert len(best) <= len(cg.greedy_solution)

    def test_reproducible(self, random_graph):
        """Two identically configured solvers agree."""
        a = make_solver(random_graph, seed=5)
        b = make_solver(random_graph, seed=5)

        assert a.minimize() == b.minimize()
        assert a.greedy_solution == b.greedy_solution
        assert a.cg_solution == b.cg_solution

    def test_string_labels(self):
        """Candidates may be arbitrary hashable labels."""
        graph = nx.relabel_nodes(nx.cycle_graph(6), {i: f"v{i}" for i in range(6)})
        cg = make_solver(graph)

        best = cg.minimize()

        assert is_cover(cg, best)
        assert 3 <= len(best) <= len(cg.greedy_solution)
        assert all(isinstance(v, str) for v in best)

    @pytest.mark.slow
    def test_larger_graph(self):
        graph = nx.gnp_random_graph(80, 0.08, seed=42)
        cg = make_solver(graph, alpha=5, beta=0.05, seed=42)

        best = cg.minimize()

        assert is_cover(cg, best)
        assert len(best) <= len(cg.greedy_solution)
