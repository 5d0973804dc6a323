"""Cross-tier deduplication, ranking and pagination."""

from typing import AbstractSet, Iterable, List, Sequence, Set, TypeVar

from ..models.entry import CandidateMatch

T = TypeVar("T")


class ResultAccumulator:
    """
    Running state threaded through the match tiers of one search.
    
    Tracks the candidates collected so far, their ids, and how many more
    results are needed before later tiers can be skipped.
    """
    
    def __init__(self, total_needed: int) -> None:
        """
        Initialize the accumulator.
        
        Args:
            total_needed: offset + limit of the requested page
        """
        self.total_needed = max(0, total_needed)
        self._results: List[CandidateMatch] = []
        self._seen: Set[int] = set()
    
    @property
    def remaining(self) -> int:
        """Number of results still needed."""
        return max(0, self.total_needed - len(self._results))
    
    @property
    def satisfied(self) -> bool:
        return self.remaining == 0
    
    @property
    def seen_ids(self) -> AbstractSet[int]:
        return frozenset(self._seen)
    
    def __len__(self) -> int:
        return len(self._results)
    
    def extend(self, candidates: Iterable[CandidateMatch]) -> int:
        """
        Append candidates whose id has not been collected yet.
        
        Returns:
            Number of candidates actually added
        """
        added = 0
        for candidate in candidates:
            if candidate.id in self._seen:
                continue
            self._seen.add(candidate.id)
            self._results.append(candidate)
            added += 1
        return added
    
    def ranked(self) -> List[CandidateMatch]:
        """
        All collected candidates sorted ascending by score.
        
        The sort is stable, so ties keep tier order and then insertion order.
        """
        return sorted(self._results, key=lambda candidate: candidate.score)


def paginate(results: Sequence[T], offset: int, limit: int) -> List[T]:
    """Slice the ``[offset, offset + limit)`` window, clamped to the sequence."""
    start = min(offset, len(results))
    end = min(offset + limit, len(results))
    return list(results[start:end])
