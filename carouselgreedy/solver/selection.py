"""
Candidate selection - the single scoring primitive of Carousel Greedy.

Construction, the iterative phase and completion all pick the next
candidate the same way:

1. Score every eligible candidate against the current solution
2. Keep the candidates that reach the best score (the tie set)
3. With random tie-breaking and more than one tie, draw one uniformly
   from the solver's generator; otherwise take the first in enumeration
   order

Scores are collected into a numpy array in the order the candidates are
given, so tie sets and random draws are reproducible for a fixed seed.
NaN scores are ranked below every other score. Integer scores are
compared exactly; mixed or float scores are compared as float64.
"""

import numbers
from typing import Callable, Optional, Sequence

import numpy as np


def score_candidates(
    candidates: Sequence[int],
    score: Callable[[int], float],
) -> np.ndarray:
    """
    Evaluate the scoring function on every candidate.

    Args:
        candidates: Candidate indices in enumeration order
        score: Function mapping a candidate index to its greedy score

    Returns:
        Array of scores aligned with ``candidates``. Float scores give a
        float64 array; all-integer scores are kept as exact Python
        integers (object array) so that values beyond 2**53 still rank
        correctly.
    """
    raw = [score(i) for i in candidates]

    if all(isinstance(s, numbers.Integral) for s in raw):
        return np.array([int(s) for s in raw], dtype=object)

    scores = np.array(raw, dtype=float)
    scores[np.isnan(scores)] = -np.inf
    return scores


def tie_set(scores: np.ndarray) -> np.ndarray:
    """Positions (in order) of the entries reaching the maximum score."""
    return np.flatnonzero(np.asarray(scores == scores.max(), dtype=bool))


def select_best_candidate(
    candidates: Sequence[int],
    score: Callable[[int], float],
    rng: np.random.Generator,
    random_tie_break: bool = True,
) -> Optional[int]:
    """
    Pick the best-scoring candidate.

    Args:
        candidates: Eligible candidate indices in enumeration order
        score: Function mapping a candidate index to its greedy score
        rng: Generator used only when a random tie-break is needed
        random_tie_break: Draw uniformly among ties instead of taking the first

    Returns:
        The selected candidate index, or None if there are no candidates
    """
    if len(candidates) == 0:
        return None

    scores = score_candidates(candidates, score)
    ties = tie_set(scores)

    if random_tie_break and len(ties) > 1:
        position = ties[rng.integers(len(ties))]
    else:
        position = ties[0]

    return candidates[int(position)]
