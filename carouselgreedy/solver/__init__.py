"""
Solver module - Carousel Greedy algorithm implementation.

This module provides:
- CarouselGreedy: Main algorithm controller
- SolverConfig: Configuration options
- CarouselResult: Run report
- RunStatus: Status of a run
- Phase / PhaseRecord: Per-phase statistics
- RunState: Mutable state threaded through the phases

Usage:
------
Basic usage:

    >>> from carouselgreedy.solver import CarouselGreedy
    >>> cg = CarouselGreedy(is_cover, residual_degree, graph.nodes,
    ...                     alpha=10, beta=0.1, seed=1)
    >>> cover = cg.minimize()
    >>> print(len(cg.greedy_solution), len(cg.cg_solution))

Per-call overrides:

    >>> cover = cg.minimize(alpha=20, beta=0.05)
    >>> cg.config.alpha  # unchanged
    10

Running phases by hand:

    >>> from carouselgreedy.core import ProblemType
    >>> state = cg.new_run(ProblemType.MINIMIZE)
    >>> greedy = cg.construction_phase(state)
    >>> removed = cg.removal_phase(state)
    >>> rounds = cg.iterative_phase(state, 5 * len(greedy))
    >>> feasible = cg.completion_phase(state)

Configuration Options:
--------------------
- alpha: Iterative-phase length multiplier (rounds = alpha * |greedy|)
- beta: Fraction of the greedy solution removed before the iterative phase
- seed: Seed of the instance-private tie-break generator
- random_tie_break: Random choice among equally scored candidates
- verbose: Print progress information
"""

from carouselgreedy.solver.solution import CarouselResult, Phase, PhaseRecord, RunStatus
from carouselgreedy.solver.state import RunState
from carouselgreedy.solver.carousel_greedy import CarouselGreedy, SolverConfig

__all__ = [
    # Main class
    'CarouselGreedy',

    # Configuration
    'SolverConfig',

    # Run state and results
    'RunState',
    'CarouselResult',
    'RunStatus',
    'Phase',
    'PhaseRecord',
]
