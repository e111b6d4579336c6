# graph/combinator.py
from math import comb
from typing import FrozenSet, Iterator, List, Sequence, Tuple


class EdgeCombinator:
    """
    Walks all k-sized combinations of a fixed edge list, one state at a time.
    Index tuples are kept strictly increasing, so every combination is seen once:
      (0,1,..,k-1) -> ... -> (n-k,..,n-1) -> wraps back to (0,1,..,k-1)
    advance() returns True exactly when the walk has wrapped to the start.
    """

    def __init__(self, edges: Sequence[int], combination_length: int):
        if combination_length < 1:
            raise ValueError(f"combination length must be >= 1, got {combination_length}")
        if len(edges) < combination_length:
            raise ValueError(
                f"list of edges ({len(edges)}) must be at least as long as the combination ({combination_length})"
            )
        self._edges = list(edges)
        self._k = combination_length
        self._idx: List[int] = list(range(combination_length))

    def indices(self) -> Tuple[int, ...]:
        return tuple(self._idx)

    def current_state(self) -> FrozenSet[int]:
        return frozenset(self._edges[i] for i in self._idx)

    def reset(self) -> None:
        self._idx = list(range(self._k))

    def advance(self) -> bool:
        n, k = len(self._edges), self._k
        # rightmost position that can still move up
        i = k - 1
        while i >= 0 and self._idx[i] == n - k + i:
            i -= 1
        if i < 0:
            self.reset()
            return True
        self._idx[i] += 1
        for j in range(i + 1, k):
            self._idx[j] = self._idx[j - 1] + 1
        return False

    def __iter__(self) -> Iterator[FrozenSet[int]]:
        self.reset()
        while True:
            yield self.current_state()
            if self.advance():
                return

    def __len__(self) -> int:
        return comb(len(self._edges), self._k)
