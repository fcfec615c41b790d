"""
Core module - data structures shared by every solver phase.

Components:
----------
- ProblemType: Direction of optimization (minimize / maximize)
- CandidateSet: The immutable universe of candidate elements
- Solution: The ordered working selection (oldest first)
- FeasibilityFunction / GreedyFunction: Callback signatures
"""

from carouselgreedy.core.candidates import CandidateSet, Solution
from carouselgreedy.core.problem import FeasibilityFunction, GreedyFunction, ProblemType

__all__ = [
    "ProblemType",
    "FeasibilityFunction",
    "GreedyFunction",
    "CandidateSet",
    "Solution",
]
