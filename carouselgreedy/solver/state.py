"""
Run state - the mutable part of a solver run.

Configuration lives in the immutable SolverConfig. Everything that changes
while a run executes (direction, working solution, counters, phase history)
lives here and is threaded explicitly through the phase methods. A fresh
RunState is created for every top-level call.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from carouselgreedy.core.candidates import CandidateSet, Solution
from carouselgreedy.core.problem import ProblemType
from carouselgreedy.solver.solution import PhaseRecord

if TYPE_CHECKING:
    from carouselgreedy.solver.carousel_greedy import SolverConfig


@dataclass
class RunState:
    """
    Mutable state of a single solver run.

    Attributes:
        problem_type: Direction of the run
        config: Configuration in effect for this run (per-call overrides applied)
        solution: Working solution, mutated only by the phases
        rounds: Iterative rounds executed in this run
        score_evaluations: Scoring callback invocations so far
        feasibility_evaluations: Feasibility callback invocations so far
        phase_history: Records of completed phases
    """
    problem_type: ProblemType
    config: 'SolverConfig'
    solution: Solution
    rounds: int = 0
    score_evaluations: int = 0
    feasibility_evaluations: int = 0
    phase_history: List[PhaseRecord] = field(default_factory=list)

    @classmethod
    def fresh(
        cls,
        problem_type: ProblemType,
        config: 'SolverConfig',
        candidates: CandidateSet,
    ) -> 'RunState':
        """Create a state with an empty solution."""
        return cls(problem_type=problem_type, config=config, solution=Solution(candidates))

    @property
    def is_minimize(self) -> bool:
        return self.problem_type is ProblemType.MINIMIZE
