"""
Shared pytest fixtures for carouselgreedy tests.
"""

import pytest


def pytest_configure(config):
    """Add custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")


def at_least(k):
    """Feasibility callback: the solution has at least ``k`` elements."""
    def feasible(cg, solution):
        return len(solution) >= k
    return feasible


def constant_score(cg, solution, candidate):
    return 1.0


@pytest.fixture
def toy_candidates():
    """Candidate universe {1..10}."""
    return list(range(1, 11))


@pytest.fixture
def toy_solver(toy_candidates):
    """Minimize toy: feasible once four elements are chosen, flat scores."""
    from carouselgreedy import CarouselGreedy

    return CarouselGreedy(
        at_least(4),
        constant_score,
        toy_candidates,
        alpha=1,
        beta=0.3,
        random_tie_break=False,
        seed=0,
    )


@pytest.fixture
def knapsack_solver():
    """
    Maximize toy: candidates 1..5 weigh their own value, capacity 6.

    Lighter items score higher.
    """
    from carouselgreedy import CarouselGreedy

    def fits(cg, solution):
        return sum(solution) <= cg.data["capacity"]

    def lighter_first(cg, solution, candidate):
        return -candidate

    return CarouselGreedy(
        fits,
        lighter_first,
        [1, 2, 3, 4, 5],
        data={"capacity": 6},
        alpha=1,
        beta=0.2,
        random_tie_break=False,
    )


@pytest.fixture
def random_graph():
    """A small Erdos-Renyi graph."""
    import networkx as nx

    return nx.gnp_random_graph(30, 0.15, seed=7)
