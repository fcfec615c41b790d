"""
Carousel Greedy result module.

This module defines the data structures for reporting the outcome of a
solver run: the final status, the greedy and Carousel Greedy solutions,
and per-phase statistics.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional

from carouselgreedy.core.problem import ProblemType


class RunStatus(Enum):
    """
    Status of a solver run.
    """
    FEASIBLE = auto()          # Final solution satisfies the feasibility predicate
    INFEASIBLE = auto()        # Candidates ran out before feasibility was reached
    NOT_SOLVED = auto()        # Not yet solved


class Phase(Enum):
    """The four phases of Carousel Greedy."""
    CONSTRUCTION = auto()
    REMOVAL = auto()
    ITERATIVE = auto()
    COMPLETION = auto()


@dataclass
class PhaseRecord:
    """
    Statistics for one phase of a run.

    Attributes:
        phase: Which phase ran
        size_before: Solution size when the phase started
        size_after: Solution size when the phase ended
        rounds: Iterative rounds executed (iterative phase only)
        score_evaluations: Scoring callback invocations during the phase
        feasibility_evaluations: Feasibility callback invocations during the phase
        elapsed: Wall-clock time spent in the phase
    """
    phase: Phase
    size_before: int
    size_after: int
    rounds: int = 0
    score_evaluations: int = 0
    feasibility_evaluations: int = 0
    elapsed: float = 0.0


@dataclass
class CarouselResult:
    """
    Result of a Carousel Greedy run.

    Attributes:
        problem_type: Direction of the run
        status: Final status of the returned solution
        greedy_solution: Result of the construction phase alone
        cg_solution: Result after removal, iterative and completion phases
        best_solution: Whichever of the two was returned to the caller
        alpha: Iterative-phase multiplier used for this run
        beta: Removal fraction used for this run
        iterations: Iterative rounds executed in this run
        score_evaluations: Total scoring callback invocations
        feasibility_evaluations: Total feasibility callback invocations
        total_time: Total run time in seconds
        phase_history: One record per executed phase

    Example:
        >>> solver.minimize()
        >>> result = solver.result
        >>> print(result.summary())
    """
    problem_type: Optional[ProblemType] = None
    status: RunStatus = RunStatus.NOT_SOLVED

    # Solutions
    greedy_solution: List[Any] = field(default_factory=list)
    cg_solution: List[Any] = field(default_factory=list)
    best_solution: List[Any] = field(default_factory=list)

    # Parameters used
    alpha: Optional[int] = None
    beta: Optional[float] = None

    # Statistics
    iterations: int = 0
    score_evaluations: int = 0
    feasibility_evaluations: int = 0
    total_time: float = 0.0

    phase_history: List[PhaseRecord] = field(default_factory=list)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def is_feasible(self) -> bool:
        """Check if the returned solution is feasible."""
        return self.status == RunStatus.FEASIBLE

    @property
    def improved(self) -> bool:
        """Check if Carousel Greedy strictly beat plain greedy."""
        if self.problem_type is None:
            return False
        if self.problem_type is ProblemType.MINIMIZE:
            return len(self.cg_solution) < len(self.greedy_solution)
        return len(self.cg_solution) > len(self.greedy_solution)

    # =========================================================================
    # Methods
    # =========================================================================

    def get_phase(self, phase: Phase) -> Optional[PhaseRecord]:
        """
        Get the record of a phase.

        Args:
            phase: Phase to look up

        Returns:
            The last record for that phase, or None if it did not run
        """
        for record in reversed(self.phase_history):
            if record.phase == phase:
                return record
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the headline figures to a dictionary."""
        return {
            "problem_type": self.problem_type.name if self.problem_type else None,
            "status": self.status.name,
            "greedy_size": len(self.greedy_solution),
            "cg_size": len(self.cg_solution),
            "best_size": len(self.best_solution),
            "alpha": self.alpha,
            "beta": self.beta,
            "iterations": self.iterations,
            "score_evaluations": self.score_evaluations,
            "feasibility_evaluations": self.feasibility_evaluations,
            "total_time": self.total_time,
        }

    def summary(self) -> str:
        """
        Return a human-readable summary.

        Returns:
            Summary string
        """
        direction = self.problem_type.name if self.problem_type else "NONE"
        lines = [
            "Carousel Greedy Result:",
            f"  Direction: {direction}",
            f"  Status: {self.status.name}",
            f"  Greedy size: {len(self.greedy_solution)}",
            f"  Carousel Greedy size: {len(self.cg_solution)}",
            f"  Returned size: {len(self.best_solution)}",
            "",
            f"  Alpha: {self.alpha}",
            f"  Beta: {self.beta}",
            f"  Iterative rounds: {self.iterations}",
            f"  Score evaluations: {self.score_evaluations}",
            f"  Feasibility evaluations: {self.feasibility_evaluations}",
            "",
            f"  Total time: {self.total_time:.3f}s",
        ]

        for record in self.phase_history:
            lines.append(
                f"    {record.phase.name.lower():<12} "
                f"{record.size_before:>5} -> {record.size_after:<5} "
                f"({record.elapsed:.3f}s)"
            )

        return "\n".join(lines)

    def __repr__(self) -> str:
        direction = self.problem_type.name if self.problem_type else "NONE"
        return (
            f"CarouselResult({direction}, {self.status.name}, "
            f"greedy={len(self.greedy_solution)}, cg={len(self.cg_solution)})"
        )
