"""
carouselgreedy: Carousel Greedy metaheuristic

A problem-agnostic implementation of Carousel Greedy, a generalized greedy
algorithm that interleaves construction, partial destruction and localized
refinement before finalizing a solution.
"""

__version__ = "0.1.0"

# Configuration
from carouselgreedy.config import config, get_default_seed, set_verbose
from carouselgreedy.exceptions import InvalidConfiguration

# Core classes
from carouselgreedy.core import CandidateSet, ProblemType, Solution

# Solver
from carouselgreedy.solver import (
    CarouselGreedy,
    CarouselResult,
    Phase,
    PhaseRecord,
    RunState,
    RunStatus,
    SolverConfig,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "config",
    "get_default_seed",
    "set_verbose",
    # Errors
    "InvalidConfiguration",
    # Core classes
    "ProblemType",
    "CandidateSet",
    "Solution",
    # Solver
    "CarouselGreedy",
    "SolverConfig",
    "CarouselResult",
    "RunStatus",
    "RunState",
    "Phase",
    "PhaseRecord",
]
