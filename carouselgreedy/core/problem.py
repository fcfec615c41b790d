"""
Problem module - optimization direction and callback contracts.

The solver knows nothing about the problem being solved. Everything
problem-specific is reached through two callbacks:

- a feasibility predicate: (solver, solution) -> bool
- a greedy scoring function: (solver, solution, candidate) -> float

Solutions passed to callbacks are tuple snapshots of the working solution
(oldest element first). The solver itself is passed as the first argument
so callbacks can reach the caller's ``data`` payload.

Design Notes:
------------
- Higher scores are always preferred, whatever the direction
- The direction only decides how constructions are driven and which of
  the greedy and Carousel Greedy results is returned
"""

from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Callable, Tuple

if TYPE_CHECKING:
    from carouselgreedy.solver.carousel_greedy import CarouselGreedy


class ProblemType(Enum):
    """Direction of optimization (size of the selected subset)."""
    MINIMIZE = auto()
    MAXIMIZE = auto()

    def is_improvement(self, new_size: int, reference_size: int) -> bool:
        """
        Check whether a Carousel Greedy result should replace the greedy one.

        Minimize keeps the refined solution on ties; maximize only when it
        is strictly larger.

        Args:
            new_size: Size of the refined solution
            reference_size: Size of the greedy solution

        Returns:
            True if the refined solution is preferred
        """
        if self is ProblemType.MINIMIZE:
            return new_size <= reference_size
        return new_size > reference_size


# Type aliases for the two callbacks
FeasibilityFunction = Callable[['CarouselGreedy', Tuple[Any, ...]], bool]
GreedyFunction = Callable[['CarouselGreedy', Tuple[Any, ...], Any], float]
