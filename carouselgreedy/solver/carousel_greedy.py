"""
Carousel Greedy controller.

This module implements the Carousel Greedy metaheuristic, a generalization
of greedy construction that softens the irreversibility of early greedy
decisions before settling on a solution.

Algorithm Overview:
------------------
1. Construction: build a solution greedily (the plain greedy result)
2. Removal: drop the most recently added fraction beta of the solution
3. Iterative phase: for alpha * |greedy| rounds, evict the oldest element
   and add the best-scoring remaining candidate
4. Completion: add candidates until the solution is feasible (minimize)
   or no candidate can be added feasibly (maximize)
5. Return the better of the greedy and Carousel Greedy solutions

Key Features:
------------
- Problem-agnostic: feasibility and scoring are caller callbacks
- Deterministic for a fixed seed (instance-private numpy Generator)
- Per-call alpha/beta overrides that never touch the stored configuration
- Per-phase statistics in a CarouselResult

References:
----------
- Cerrone, C., Cerulli, R., & Golden, B. (2017). Carousel greedy: A
  generalized greedy algorithm with applications in optimization.
  Computers & Operations Research, 85, 97-112.
"""

import math
import numbers
import time
import warnings
from dataclasses import dataclass, replace
from typing import Any, Iterable, List, Optional, Tuple

import numpy as np

from carouselgreedy.config import config as defaults
from carouselgreedy.core.candidates import CandidateSet
from carouselgreedy.core.problem import FeasibilityFunction, GreedyFunction, ProblemType
from carouselgreedy.exceptions import InvalidConfiguration
from carouselgreedy.solver.selection import select_best_candidate
from carouselgreedy.solver.solution import CarouselResult, Phase, PhaseRecord, RunStatus
from carouselgreedy.solver.state import RunState


def _is_integer(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, (bool, np.bool_))


@dataclass(frozen=True)
class SolverConfig:
    """
    Configuration for the Carousel Greedy algorithm.

    Attributes:
        alpha: Iterative-phase length multiplier (positive integer)
        beta: Fraction of the greedy solution removed before the
            iterative phase (0 <= beta <= 1)
        seed: RNG seed (non-negative integer)
        random_tie_break: Draw uniformly among equally scored candidates
            instead of taking the first one
        verbose: Print progress information
    """
    alpha: int = 10
    beta: float = 0.2
    seed: int = 42
    random_tie_break: bool = True
    verbose: bool = False

    def validate(self) -> 'SolverConfig':
        """
        Check every field.

        Returns:
            self, so calls can be chained

        Raises:
            InvalidConfiguration: If a field is out of range
        """
        if not _is_integer(self.alpha) or self.alpha <= 0:
            raise InvalidConfiguration(f"alpha must be a positive integer, got {self.alpha!r}")
        if (
            not isinstance(self.beta, numbers.Real)
            or isinstance(self.beta, (bool, np.bool_))
            or not 0.0 <= self.beta <= 1.0
        ):
            raise InvalidConfiguration(f"beta must be a number in [0, 1], got {self.beta!r}")
        if not _is_integer(self.seed) or self.seed < 0:
            raise InvalidConfiguration(f"seed must be a non-negative integer, got {self.seed!r}")
        if not isinstance(self.random_tie_break, (bool, np.bool_)):
            raise InvalidConfiguration(
                f"random_tie_break must be a boolean, got {self.random_tie_break!r}"
            )
        return self

    def with_overrides(self, **overrides: Any) -> 'SolverConfig':
        """
        Return a validated copy with some fields replaced.

        None values are ignored so optional call arguments can be passed
        straight through.
        """
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return replace(self, **changes).validate()


class CarouselGreedy:
    """
    Carousel Greedy solver.

    The solver searches for a small (minimize) or large (maximize) feasible
    subset of a candidate universe. It only reaches the problem through
    two callbacks:

    - test_feasibility(solver, solution) -> bool
    - greedy_function(solver, solution, candidate) -> float

    ``solution`` is a tuple of the selected elements, oldest first. Higher
    scores are always preferred.

    Example:
        >>> def feasible(cg, solution):
        ...     return len(solution) >= 4
        >>> def score(cg, solution, candidate):
        ...     return 1.0
        >>> cg = CarouselGreedy(feasible, score, range(1, 11),
        ...                     alpha=1, beta=0.3, random_tie_break=False)
        >>> cg.greedy_minimize()
        [1, 2, 3, 4]
        >>> best = cg.minimize()
        >>> print(cg.result.summary())

    Observable state after a run:
        greedy_solution, cg_solution, result, and the lifetime
        ``iteration`` counter of iterative-phase rounds.
    """

    def __init__(
        self,
        test_feasibility: FeasibilityFunction,
        greedy_function: GreedyFunction,
        candidate_elements: Iterable[Any],
        *,
        alpha: Optional[int] = None,
        beta: Optional[float] = None,
        data: Any = None,
        random_tie_break: Optional[bool] = None,
        seed: Optional[int] = None,
        verbose: Optional[bool] = None,
        config: Optional[SolverConfig] = None,
    ):
        """
        Initialize the solver.

        Args:
            test_feasibility: Feasibility predicate (solver, solution) -> bool
            greedy_function: Scoring function (solver, solution, candidate) -> float
            candidate_elements: Non-empty universe of candidates
            alpha: Iterative-phase multiplier (default from library config)
            beta: Removal fraction (default from library config)
            data: Opaque payload for the callbacks, passed through unchanged
            random_tie_break: Random choice among top-scoring candidates
            seed: RNG seed
            verbose: Print progress information
            config: Full configuration; keyword arguments override its fields

        Raises:
            InvalidConfiguration: If a callback is missing, the universe is
                empty or has duplicates, or a parameter is out of range
        """
        if not callable(test_feasibility):
            raise InvalidConfiguration("test_feasibility must be callable")
        if not callable(greedy_function):
            raise InvalidConfiguration("greedy_function must be callable")

        overrides = dict(
            alpha=alpha,
            beta=beta,
            seed=seed,
            random_tie_break=random_tie_break,
            verbose=verbose,
        )
        if config is None:
            self._config = defaults.solver_config(**overrides)
        else:
            self._config = config.validate().with_overrides(**overrides)

        self._test_feasibility = test_feasibility
        self._greedy_function = greedy_function
        self._candidates = CandidateSet(candidate_elements)
        self.data = data

        self._rng = np.random.default_rng(self._config.seed)

        # State
        self._state: Optional[RunState] = None
        self._iteration = 0
        self._greedy_solution: Optional[List[Any]] = None
        self._cg_solution: Optional[List[Any]] = None
        self._result: Optional[CarouselResult] = None

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def config(self) -> SolverConfig:
        """Stored configuration (per-call overrides never change it)."""
        return self._config

    @property
    def candidates(self) -> CandidateSet:
        """The candidate universe."""
        return self._candidates

    @property
    def candidate_elements(self) -> Tuple[Any, ...]:
        """Candidate elements in enumeration order."""
        return self._candidates.elements

    @property
    def problem_type(self) -> Optional[ProblemType]:
        """Direction of the active run (None outside a run)."""
        return self._state.problem_type if self._state is not None else None

    @property
    def iteration(self) -> int:
        """Iterative-phase rounds executed over the solver's lifetime."""
        return self._iteration

    @property
    def greedy_solution(self) -> Optional[List[Any]]:
        """Result of the most recent construction (greedy-only or full run)."""
        return list(self._greedy_solution) if self._greedy_solution is not None else None

    @property
    def cg_solution(self) -> Optional[List[Any]]:
        """Result of the most recent full Carousel Greedy run."""
        return list(self._cg_solution) if self._cg_solution is not None else None

    @property
    def result(self) -> Optional[CarouselResult]:
        """Report of the most recent full run (None before the first one)."""
        return self._result

    @property
    def rng(self) -> np.random.Generator:
        """The instance-private generator used for tie-breaking."""
        return self._rng

    # =========================================================================
    # Public API
    # =========================================================================

    def greedy_minimize(self) -> List[Any]:
        """
        Run the construction phase only, in minimize mode.

        Returns:
            The greedy solution (possibly infeasible if candidates ran out)
        """
        state = self.new_run(ProblemType.MINIMIZE)
        try:
            self._greedy_solution = self.construction_phase(state)
        finally:
            self._state = None
        return list(self._greedy_solution)

    def greedy_maximize(self) -> List[Any]:
        """
        Run the construction phase only, in maximize mode.

        A minimize construction runs first and the maximize construction
        continues from its partial solution.

        Returns:
            The greedy solution
        """
        state = self.new_run(ProblemType.MAXIMIZE)
        try:
            self._greedy_solution = self._greedy_maximize(state)
        finally:
            self._state = None
        return list(self._greedy_solution)

    def minimize(self, alpha: Optional[int] = None, beta: Optional[float] = None) -> List[Any]:
        """
        Run Carousel Greedy for a minimization problem.

        Args:
            alpha: Iterative-phase multiplier for this call only
            beta: Removal fraction for this call only

        Returns:
            The Carousel Greedy solution if it is no larger than the greedy
            one, otherwise the greedy solution

        Raises:
            InvalidConfiguration: If an override is out of range
        """
        return self._run(ProblemType.MINIMIZE, alpha, beta)

    def maximize(self, alpha: Optional[int] = None, beta: Optional[float] = None) -> List[Any]:
        """
        Run Carousel Greedy for a maximization problem.

        Args:
            alpha: Iterative-phase multiplier for this call only
            beta: Removal fraction for this call only

        Returns:
            The Carousel Greedy solution if it is strictly larger than the
            greedy one, otherwise the greedy solution

        Raises:
            InvalidConfiguration: If an override is out of range
        """
        return self._run(ProblemType.MAXIMIZE, alpha, beta)

    def reseed(self, seed: Optional[int] = None) -> None:
        """
        Recreate the tie-break generator.

        Args:
            seed: New seed (stored in the configuration); None reuses the
                configured seed
        """
        self._config = self._config.with_overrides(seed=seed)
        self._rng = np.random.default_rng(self._config.seed)

    def new_run(
        self,
        problem_type: ProblemType,
        config: Optional[SolverConfig] = None,
    ) -> RunState:
        """
        Start a run with an empty solution.

        Args:
            problem_type: Direction of the run
            config: Configuration for the run (defaults to the stored one)

        Returns:
            The new RunState, also made the solver's active state
        """
        self._state = RunState.fresh(problem_type, config or self._config, self._candidates)
        return self._state

    # =========================================================================
    # Main Algorithm
    # =========================================================================

    def _run(
        self,
        problem_type: ProblemType,
        alpha: Optional[int],
        beta: Optional[float],
    ) -> List[Any]:
        run_config = self._config.with_overrides(alpha=alpha, beta=beta)
        state = self.new_run(problem_type, run_config)
        try:
            return self._solve(state)
        finally:
            self._state = None

    def _solve(self, state: RunState) -> List[Any]:
        """Run the four phases on a fresh state and pick the returned solution."""
        start_time = time.time()
        problem_type = state.problem_type
        run_config = state.config

        if problem_type is ProblemType.MINIMIZE:
            greedy = self.construction_phase(state)
        else:
            greedy = self._greedy_maximize(state)
        self._greedy_solution = greedy

        self.removal_phase(state)
        self.iterative_phase(state, run_config.alpha * len(greedy))
        self.completion_phase(state)

        cg = list(state.solution.elements())
        self._cg_solution = cg

        best = cg if problem_type.is_improvement(len(cg), len(greedy)) else greedy
        feasible = self._is_feasible(state, tuple(best))
        status = RunStatus.FEASIBLE if feasible else RunStatus.INFEASIBLE

        if not feasible:
            if problem_type is ProblemType.MINIMIZE:
                reason = "candidates ran out before the solution became feasible"
            else:
                reason = "maximize construction adds every candidate without a feasibility check"
            warnings.warn(
                f"{problem_type.name.lower()}: returned solution of size {len(best)} "
                f"is infeasible ({reason})",
                UserWarning,
                stacklevel=4,
            )

        self._result = CarouselResult(
            problem_type=problem_type,
            status=status,
            greedy_solution=list(greedy),
            cg_solution=list(cg),
            best_solution=list(best),
            alpha=run_config.alpha,
            beta=run_config.beta,
            iterations=state.rounds,
            score_evaluations=state.score_evaluations,
            feasibility_evaluations=state.feasibility_evaluations,
            total_time=time.time() - start_time,
            phase_history=list(state.phase_history),
        )

        self._log(
            f"{problem_type.name.lower()}: greedy={len(greedy)}, cg={len(cg)}, "
            f"returned={len(best)} ({status.name})"
        )

        return list(best)

    def _greedy_maximize(self, state: RunState) -> List[Any]:
        """Minimize construction followed by maximize construction."""
        state.problem_type = ProblemType.MINIMIZE
        self.construction_phase(state)
        state.problem_type = ProblemType.MAXIMIZE
        return self.construction_phase(state)

    # =========================================================================
    # Phases
    # =========================================================================

    def construction_phase(self, state: RunState) -> List[Any]:
        """
        Build (or extend) the solution greedily.

        Minimize adds the best candidate until the solution is feasible.
        Maximize adds the best candidate until none is left. Both stop
        early when candidates run out.

        Returns:
            The solution elements after construction
        """
        mark = self._begin_phase(state)
        solution = state.solution

        while True:
            if state.is_minimize and self._is_feasible(state, solution.elements()):
                break
            candidate = self._select(state)
            if candidate is None:
                break
            solution.append(candidate)

        self._end_phase(state, Phase.CONSTRUCTION, mark)
        return list(solution.elements())

    def removal_phase(self, state: RunState) -> List[Any]:
        """
        Drop the most recently added fraction beta of the solution.

        floor(|S| * beta) elements are removed from the tail, but never so
        many that fewer than two survive; a solution of two elements or
        fewer is left untouched.

        Returns:
            The removed elements, oldest first
        """
        mark = self._begin_phase(state)
        solution = state.solution
        size = len(solution)

        to_remove = math.floor(size * state.config.beta)
        if size - to_remove < 2:
            to_remove = size - 2
        to_remove = max(0, to_remove)

        removed = solution.drop_newest(to_remove)

        self._end_phase(state, Phase.REMOVAL, mark)
        return list(self._candidates.elements_at(removed))

    def iterative_phase(self, state: RunState, iterations: int) -> int:
        """
        Rotate the solution for a fixed number of rounds.

        Each round evicts the oldest element, then adds the best remaining
        candidate (minimize) or adds it only if the result stays feasible
        (maximize). The phase ends early when no candidate is left.

        Args:
            state: Active run state
            iterations: Maximum number of rounds

        Returns:
            Number of rounds executed
        """
        mark = self._begin_phase(state)
        solution = state.solution
        rounds = 0

        for _ in range(iterations):
            self._iteration += 1
            rounds += 1

            solution.pop_oldest()

            candidate = self._select(state)
            if candidate is None:
                break

            if state.is_minimize:
                solution.append(candidate)
            elif self._is_feasible(state, solution.extended(candidate)):
                solution.append(candidate)

        state.rounds += rounds
        self._end_phase(state, Phase.ITERATIVE, mark, rounds=rounds)
        return rounds

    def completion_phase(self, state: RunState) -> bool:
        """
        Repair the solution.

        Minimize adds the best candidate until the solution is feasible.
        Maximize keeps adding the best candidate among those whose addition
        stays feasible, until no such candidate exists.

        Returns:
            True if the solution ends feasible. Maximize always returns True
            since every addition is checked.
        """
        mark = self._begin_phase(state)
        solution = state.solution
        feasible = True

        if state.is_minimize:
            while not self._is_feasible(state, solution.elements()):
                candidate = self._select(state)
                if candidate is None:
                    feasible = False
                    break
                solution.append(candidate)
        else:
            while True:
                eligible = [
                    i for i in solution.remaining()
                    if self._is_feasible(state, solution.extended(i))
                ]
                if not eligible:
                    break
                solution.append(self._select(state, eligible))

        self._end_phase(state, Phase.COMPLETION, mark)
        return feasible

    # =========================================================================
    # Callback plumbing
    # =========================================================================

    def _select(self, state: RunState, eligible: Optional[List[int]] = None) -> Optional[int]:
        """Select the best candidate among ``eligible`` (default: all remaining)."""
        if eligible is None:
            eligible = state.solution.remaining()
        snapshot = state.solution.elements()
        elements = self._candidates.elements

        def score(index: int) -> float:
            state.score_evaluations += 1
            return self._greedy_function(self, snapshot, elements[index])

        return select_best_candidate(
            eligible,
            score,
            self._rng,
            random_tie_break=state.config.random_tie_break,
        )

    def _is_feasible(self, state: RunState, elements: Tuple[Any, ...]) -> bool:
        state.feasibility_evaluations += 1
        return bool(self._test_feasibility(self, elements))

    def _begin_phase(self, state: RunState) -> Tuple[float, int, int, int]:
        return (
            time.time(),
            len(state.solution),
            state.score_evaluations,
            state.feasibility_evaluations,
        )

    def _end_phase(
        self,
        state: RunState,
        phase: Phase,
        mark: Tuple[float, int, int, int],
        rounds: int = 0,
    ) -> None:
        start, size_before, scores_before, feas_before = mark
        record = PhaseRecord(
            phase=phase,
            size_before=size_before,
            size_after=len(state.solution),
            rounds=rounds,
            score_evaluations=state.score_evaluations - scores_before,
            feasibility_evaluations=state.feasibility_evaluations - feas_before,
            elapsed=time.time() - start,
        )
        state.phase_history.append(record)

        self._log(
            f"  {phase.name.lower()}: size {record.size_before} -> {record.size_after}"
            + (f", rounds={rounds}" if phase is Phase.ITERATIVE else "")
            + f" ({record.elapsed:.3f}s)"
        )

    def _log(self, message: str) -> None:
        """Print a progress message if verbose mode is enabled."""
        active = self._state.config if self._state is not None else self._config
        if active.verbose:
            print(message)

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def summary(self) -> str:
        """
        Return a human-readable summary.

        Returns:
            Summary string
        """
        lines = [
            f"CarouselGreedy: {len(self._candidates)} candidates",
            "  Config:",
            f"    Alpha: {self._config.alpha}",
            f"    Beta: {self._config.beta}",
            f"    Seed: {self._config.seed}",
            f"    Random tie-break: {self._config.random_tie_break}",
        ]

        if self._result is not None:
            lines.extend([
                "",
                self._result.summary(),
            ])
        else:
            lines.append("\n  Status: Not yet solved")

        return "\n".join(lines)

    def __repr__(self) -> str:
        status = "solved" if self._result is not None else "not solved"
        return f"CarouselGreedy(candidates={len(self._candidates)}, {status})"
