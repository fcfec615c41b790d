"""
Candidates module - the candidate universe and the ordered working solution.

This module provides:
- CandidateSet: Immutable, ordered universe of candidate elements
- Solution: Ordered selection of candidates (oldest first)

Design Notes:
------------
- Candidate elements are opaque; only equality matters
- Elements do not have to be hashable. Hashable elements are checked
  for duplicates with a set, others with a pairwise equality scan
- A Solution stores candidate indices, not elements. Membership tests
  are set lookups and the element type never matters to the solver
- Insertion order is meaningful: index 0 is the oldest decision
"""

from typing import Any, Iterable, Iterator, List, Optional, Set, Tuple

from carouselgreedy.exceptions import InvalidConfiguration


def _is_hashable(element: Any) -> bool:
    try:
        hash(element)
    except TypeError:
        return False
    return True


def _same(a: Any, b: Any) -> bool:
    try:
        return bool(a == b)
    except (TypeError, ValueError) as exc:
        raise InvalidConfiguration(
            f"candidate elements {type(a).__name__} cannot be compared for equality: {exc}"
        ) from exc


class CandidateSet:
    """
    Immutable ordered universe of candidate elements.

    Enumeration order is the order supplied by the caller and is the
    order used to break score ties deterministically.

    Example:
        >>> candidates = CandidateSet(["a", "b", "c"])
        >>> len(candidates)
        3
        >>> candidates[2]
        'c'
    """

    def __init__(self, elements: Iterable[Any]):
        """
        Build the universe from an iterable of elements.

        Args:
            elements: Candidate elements. Unhashable elements must compare
                with ``==`` to a plain bool (numpy arrays, for instance, do not)

        Raises:
            InvalidConfiguration: If the universe is empty, has duplicates,
                or holds elements that cannot be compared
        """
        if elements is None:
            raise InvalidConfiguration("candidate_elements must be provided and non-empty")

        self._elements: Tuple[Any, ...] = tuple(elements)
        if not self._elements:
            raise InvalidConfiguration("candidate_elements must be provided and non-empty")

        seen: Set[Any] = set()
        unhashable: List[Any] = []

        for element in self._elements:
            if _is_hashable(element):
                if element in seen:
                    raise InvalidConfiguration(
                        f"candidate_elements contains a duplicate element: {element!r}"
                    )
                seen.add(element)
            else:
                unhashable.append(element)

        # Unhashable elements are compared pairwise (usually a short list)
        for pos, a in enumerate(unhashable):
            for b in unhashable[pos + 1:]:
                if _same(a, b):
                    raise InvalidConfiguration(
                        f"candidate_elements contains a duplicate element: {a!r}"
                    )

    # =========================================================================
    # Lookup
    # =========================================================================

    def elements_at(self, indices: Iterable[int]) -> Tuple[Any, ...]:
        """Materialize a sequence of indices as a tuple of elements."""
        return tuple(self._elements[i] for i in indices)

    @property
    def elements(self) -> Tuple[Any, ...]:
        """All elements in enumeration order."""
        return self._elements

    def __getitem__(self, index: int) -> Any:
        return self._elements[index]

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._elements)

    def __repr__(self) -> str:
        return f"CandidateSet(size={len(self._elements)})"


class Solution:
    """
    Ordered selection of candidates drawn from a CandidateSet.

    The oldest element sits at position 0. The iterative phase rotates
    elements out from the front while the removal phase trims the back.

    Invariant: no index appears twice and every index is a valid
    position in the owning CandidateSet.
    """

    def __init__(self, candidates: CandidateSet):
        """
        Create an empty solution over a candidate universe.

        Args:
            candidates: The universe the solution draws from
        """
        self._candidates = candidates
        self._order: List[int] = []
        self._members: Set[int] = set()

    @property
    def candidates(self) -> CandidateSet:
        """The universe this solution draws from."""
        return self._candidates

    @property
    def indices(self) -> Tuple[int, ...]:
        """Candidate indices, oldest first."""
        return tuple(self._order)

    # =========================================================================
    # Mutation
    # =========================================================================

    def append(self, index: int) -> None:
        """
        Append a candidate as the newest element.

        Args:
            index: Candidate index

        Raises:
            ValueError: If the candidate is already selected or out of range
        """
        if index in self._members:
            raise ValueError(f"Candidate {self._candidates[index]!r} is already in the solution")
        if not 0 <= index < len(self._candidates):
            raise ValueError(f"Candidate index {index} out of range")
        self._order.append(index)
        self._members.add(index)

    def pop_oldest(self) -> Optional[int]:
        """
        Remove and return the oldest candidate index.

        Returns:
            The evicted index, or None if the solution is empty
        """
        if not self._order:
            return None
        index = self._order.pop(0)
        self._members.discard(index)
        return index

    def drop_newest(self, count: int) -> List[int]:
        """
        Remove the ``count`` most recently appended candidates.

        Args:
            count: Number of elements to drop (non-positive drops nothing)

        Returns:
            The removed indices in insertion order
        """
        if count <= 0:
            return []
        removed = self._order[-count:]
        del self._order[-count:]
        self._members.difference_update(removed)
        return removed

    # =========================================================================
    # Views
    # =========================================================================

    def elements(self) -> Tuple[Any, ...]:
        """Snapshot of the selected elements, oldest first."""
        return self._candidates.elements_at(self._order)

    def extended(self, index: int) -> Tuple[Any, ...]:
        """
        Snapshot of the solution with one more candidate appended.

        Used for tentative feasibility checks; the solution is unchanged.
        """
        return self._candidates.elements_at(self._order) + (self._candidates[index],)

    def remaining(self) -> List[int]:
        """Indices of unselected candidates in enumeration order."""
        return [i for i in range(len(self._candidates)) if i not in self._members]

    def __contains__(self, index: int) -> bool:
        return index in self._members

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.elements())

    def __repr__(self) -> str:
        return f"Solution(size={len(self._order)})"
