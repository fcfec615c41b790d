"""
Tests for the four Carousel Greedy phases, run one at a time.

This module tests:
- Construction in both directions
- Removal bounds (tail removal, at least two survivors)
- Iterative rotation and its round bound
- Completion in both directions
"""

import pytest

from carouselgreedy import CarouselGreedy, Phase, ProblemType


def at_least(k):
    return lambda cg, solution: len(solution) >= k


def flat(cg, solution, candidate):
    return 0.0


def make_solver(feasible=None, score=flat, candidates=range(10), **kwargs):
    kwargs.setdefault("random_tie_break", False)
    return CarouselGreedy(feasible or at_least(3), score, list(candidates), **kwargs)


def filled_state(solver, size, problem_type=ProblemType.MINIMIZE, **overrides):
    """Run state whose solution holds the first ``size`` candidates."""
    state = solver.new_run(problem_type, solver.config.with_overrides(**overrides))
    for i in range(size):
        state.solution.append(i)
    return state


# =============================================================================
# Construction
# =============================================================================

class TestConstructionPhase:
    """Tests for construction_phase."""

    def test_minimize_stops_when_feasible(self):
        solver = make_solver(at_least(3))
        state = solver.new_run(ProblemType.MINIMIZE)

        assert solver.construction_phase(state) == [0, 1, 2]

    def test_minimize_follows_scores(self):
        """Higher scores are picked first."""
        solver = make_solver(at_least(2), score=lambda cg, s, c: c)
        state = solver.new_run(ProblemType.MINIMIZE)

        assert solver.construction_phase(state) == [9, 8]

    def test_minimize_already_feasible(self):
        """A feasible empty solution stays empty."""
        solver = make_solver(lambda cg, s: True)
        state = solver.new_run(ProblemType.MINIMIZE)

        assert solver.construction_phase(state) == []

    def test_minimize_exhaustion(self):
        """An unsatisfiable predicate consumes every candidate and stops."""
        solver = make_solver(lambda cg, s: False, candidates=range(4))
        state = solver.new_run(ProblemType.MINIMIZE)

        assert solver.construction_phase(state) == [0, 1, 2, 3]

    def test_maximize_consumes_everything(self):
        """Maximize construction has no feasibility gate."""
        solver = make_solver(lambda cg, s: len(s) <= 2, candidates=range(5))
        state = solver.new_run(ProblemType.MAXIMIZE)

        assert solver.construction_phase(state) == [0, 1, 2, 3, 4]

    def test_records_phase(self):
        solver = make_solver(at_least(3))
        state = solver.new_run(ProblemType.MINIMIZE)
        solver.construction_phase(state)

        record = state.phase_history[-1]
        assert record.phase == Phase.CONSTRUCTION
        assert record.size_before == 0
        assert record.size_after == 3
        # 10 + 9 + 8 candidates scored, feasibility checked 4 times
        assert record.score_evaluations == 27
        assert record.feasibility_evaluations == 4


# =============================================================================
# Removal
# =============================================================================

class TestRemovalPhase:
    """Tests for removal_phase."""

    def test_removes_newest(self):
        """floor(10 * 0.5) = 5 elements are removed from the tail."""
        solver = make_solver()
        state = filled_state(solver, 10, beta=0.5)

        removed = solver.removal_phase(state)

        assert removed == [5, 6, 7, 8, 9]
        assert state.solution.indices == (0, 1, 2, 3, 4)

    def test_floor(self):
        """floor(7 * 0.2) = 1."""
        solver = make_solver()
        state = filled_state(solver, 7, beta=0.2)

        assert solver.removal_phase(state) == [6]
        assert len(state.solution) == 6

    def test_keeps_two_survivors(self):
        """floor(5 * 0.9) = 4 would leave one element; three are removed."""
        solver = make_solver()
        state = filled_state(solver, 5, beta=0.9)

        solver.removal_phase(state)

        assert state.solution.indices == (0, 1)

    def test_full_removal_clamped(self):
        solver = make_solver()
        state = filled_state(solver, 6, beta=1.0)

        solver.removal_phase(state)

        assert len(state.solution) == 2

    @pytest.mark.parametrize("size", [0, 1, 2])
    def test_tiny_solution_untouched(self, size):
        """Solutions of two or fewer elements never go negative."""
        solver = make_solver()
        state = filled_state(solver, size, beta=1.0)

        assert solver.removal_phase(state) == []
        assert len(state.solution) == size

    def test_beta_zero(self):
        solver = make_solver()
        state = filled_state(solver, 8, beta=0.0)

        assert solver.removal_phase(state) == []
        assert len(state.solution) == 8

    @pytest.mark.parametrize("size", range(2, 12))
    @pytest.mark.parametrize("beta", [0.1, 0.35, 0.5, 0.75, 1.0])
    def test_bound(self, size, beta):
        """At least two elements survive and the head is preserved."""
        solver = make_solver(candidates=range(12))
        state = filled_state(solver, size, beta=beta)

        solver.removal_phase(state)

        survivors = state.solution.indices
        assert len(survivors) >= 2
        assert survivors == tuple(range(len(survivors)))


# =============================================================================
# Iterative
# =============================================================================

class TestIterativePhase:
    """Tests for iterative_phase."""

    def test_rotation_minimize(self):
        """Each round evicts the head and appends the best candidate."""
        solver = make_solver(candidates=range(5))
        state = filled_state(solver, 3)

        rounds = solver.iterative_phase(state, 2)

        # round 1: [1, 2] + 0 ; round 2: [2, 0] + 1
        assert rounds == 2
        assert state.solution.indices == (2, 0, 1)

    def test_round_count(self):
        solver = make_solver(candidates=range(5))
        state = filled_state(solver, 3)

        assert solver.iterative_phase(state, 7) == 7
        assert state.rounds == 7
        assert solver.iteration == 7
        assert len(state.solution) == 3

    def test_zero_rounds(self):
        solver = make_solver()
        state = filled_state(solver, 3)

        assert solver.iterative_phase(state, 0) == 0
        assert state.solution.indices == (0, 1, 2)

    def test_maximize_gated_by_feasibility(self):
        """In maximize mode an infeasible addition is skipped, the evicted element is lost."""
        solver = make_solver(lambda cg, s: 3 not in s, candidates=range(4))
        state = filled_state(solver, 2, ProblemType.MAXIMIZE)

        # round 1: evict 0 -> [1]; best remaining is 0 -> [1, 0]
        # round 2: evict 1 -> [0]; best remaining is 1 -> [0, 1]
        solver.iterative_phase(state, 2)
        assert state.solution.indices == (0, 1)

        blocked = make_solver(lambda cg, s: len(s) <= 1, candidates=range(4))
        state = filled_state(blocked, 3, ProblemType.MAXIMIZE)

        # evict 0 -> [1, 2]; adding 0 gives three elements: rejected
        blocked.iterative_phase(state, 1)
        assert state.solution.indices == (1, 2)

    def test_empty_solution(self):
        """An empty solution grows by one per round in minimize mode."""
        solver = make_solver(candidates=range(5))
        state = filled_state(solver, 0)

        solver.iterative_phase(state, 1)

        assert state.solution.indices == (0,)


# =============================================================================
# Completion
# =============================================================================

class TestCompletionPhase:
    """Tests for completion_phase."""

    def test_minimize_repairs(self):
        solver = make_solver(at_least(4))
        state = filled_state(solver, 2)

        assert solver.completion_phase(state) is True
        assert state.solution.indices == (0, 1, 2, 3)

    def test_minimize_exhaustion(self):
        solver = make_solver(lambda cg, s: False, candidates=range(3))
        state = filled_state(solver, 1)

        assert solver.completion_phase(state) is False
        assert len(state.solution) == 3

    def test_maximize_fills_feasibly(self):
        """Only candidates that keep the solution feasible are added."""
        def fits(cg, solution):
            return sum(solution) <= 7

        solver = make_solver(fits, score=lambda cg, s, c: -c, candidates=range(1, 6))
        state = solver.new_run(ProblemType.MAXIMIZE)

        assert solver.completion_phase(state) is True
        # 1, then 2, then 3 (sum 6); 4 and 5 no longer fit
        assert state.solution.elements() == (1, 2, 3)

    def test_maximize_prefers_score_among_feasible(self):
        """The best score wins among feasible candidates only."""
        def no_nine(cg, solution):
            return 9 not in solution

        solver = make_solver(no_nine, score=lambda cg, s, c: c, candidates=range(10))
        state = solver.new_run(ProblemType.MAXIMIZE)
        solver.completion_phase(state)

        assert state.solution.elements() == (8, 7, 6, 5, 4, 3, 2, 1, 0)
