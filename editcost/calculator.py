"""
Calculator of optimal string distances.

The distance between two strings is the minimum total cost of turning the
first into the second, one leading character at a time, with three
authorized transformations:

- adding a character (``add_cost``)
- removing a character (``remove_cost``)
- changing a character into another (``change_cost``)

Given X and Y two strings and a, b two distinct characters::

    d(aX, aY) = d(X, Y)
    d(aX, bY) = min(add + d(aX, Y), remove + d(X, bY), change + d(X, Y))
    d(X, "")  = len(X) * remove
    d("", Y)  = len(Y) * add
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from editcost.constants import (
    DEFAULT_ADD_COST,
    DEFAULT_CHANGE_COST,
    DEFAULT_METHOD,
    DEFAULT_REMOVE_COST,
    METHOD_ITERATIVE,
    METHOD_MEMOIZED,
    METHOD_NAIVE,
    NAIVE_RECOMMENDED_MAX_LENGTH,
)
from editcost.validation import require_cost, require_method, require_string

logger = logging.getLogger(__name__)

SuffixPair = Tuple[str, str]


@dataclass(frozen=True)
class CostModel:
    """Read-only weights of the three transformations."""
    add_cost: float = DEFAULT_ADD_COST
    remove_cost: float = DEFAULT_REMOVE_COST
    change_cost: float = DEFAULT_CHANGE_COST

    def __post_init__(self) -> None:
        # Rejects negative, NaN and non-numeric costs
        for name in ("add_cost", "remove_cost", "change_cost"):
            object.__setattr__(self, name, require_cost(getattr(self, name), name))

    def swapped(self) -> "CostModel":
        """Return the model with add and remove costs exchanged."""
        return CostModel(
            add_cost=self.remove_cost,
            remove_cost=self.add_cost,
            change_cost=self.change_cost,
        )


def _skip_common_prefix(a: str, b: str) -> SuffixPair:
    limit = min(len(a), len(b))
    i = 0
    while i < limit and a[i] == b[i]:
        i += 1
    return a[i:], b[i:]


class StringDistanceCalculator:
    """
    Evaluate the distance between two strings under a fixed cost model.

    The three ``distance_*`` methods return the same value for the same
    inputs; they only differ in time and memory usage. The memoized
    evaluator keeps its cache for the lifetime of the instance.
    """

    def __init__(
        self,
        costs: Optional[CostModel] = None,
        *,
        add_cost: Optional[float] = None,
        remove_cost: Optional[float] = None,
        change_cost: Optional[float] = None,
        naive_max_length: int = NAIVE_RECOMMENDED_MAX_LENGTH,
    ):
        """
        Create a calculator with an empty cache.

        Args:
            costs: Cost model, defaults to add=1, remove=1, change=1.5
            add_cost: Override for the add cost of ``costs``
            remove_cost: Override for the remove cost of ``costs``
            change_cost: Override for the change cost of ``costs``
            naive_max_length: Input length above which the naive evaluator logs a warning
        """
        base = costs or CostModel()
        self.costs = CostModel(
            add_cost=base.add_cost if add_cost is None else add_cost,
            remove_cost=base.remove_cost if remove_cost is None else remove_cost,
            change_cost=base.change_cost if change_cost is None else change_cost,
        )
        self.naive_max_length = naive_max_length
        self.computations = 0
        self._cache: Dict[SuffixPair, float] = {}
        self._cache_lock = threading.Lock()

    def __repr__(self) -> str:
        return f"StringDistanceCalculator(costs={self.costs!r}, cached={self.cache_size})"

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> None:
        """Drop every cached suffix pair and reset the computation counter."""
        with self._cache_lock:
            self._cache.clear()
            self.computations = 0

    def distance(self, a: str, b: str, method: str = DEFAULT_METHOD) -> float:
        """Evaluate the distance with the evaluator named by ``method``."""
        evaluators: Dict[str, Callable[[str, str], float]] = {
            METHOD_NAIVE: self.distance_naive,
            METHOD_MEMOIZED: self.distance_memoized,
            METHOD_ITERATIVE: self.distance_iterative,
        }
        return evaluators[require_method(method)](a, b)

    # Naive recursion

    def distance_naive(self, a: str, b: str) -> float:
        """
        Evaluate the distance by applying the recurrence directly.

        Runs in exponential time; keep inputs to a dozen characters or so and
        prefer :meth:`distance_iterative` beyond that.
        """
        a = require_string(a, "a")
        b = require_string(b, "b")
        if max(len(a), len(b)) > self.naive_max_length:
            logger.warning(
                f"Naive evaluation of strings of length {len(a)} and {len(b)} "
                f"may take very long; use the iterative method for long inputs"
            )
        return self._naive(a, b)

    def _naive(self, a: str, b: str) -> float:
        if not a:
            return len(b) * self.costs.add_cost
        if not b:
            return len(a) * self.costs.remove_cost

        if a[0] == b[0]:
            return self._naive(a[1:], b[1:])

        return min(
            self.costs.add_cost + self._naive(a, b[1:]),
            self.costs.remove_cost + self._naive(a[1:], b),
            self.costs.change_cost + self._naive(a[1:], b[1:]),
        )

    # Memoized recursion

    def distance_memoized(self, a: str, b: str) -> float:
        """
        Evaluate the distance, caching the best cost of every mismatching
        suffix pair met along the way.

        When a pair appears again, in this call or a later one on the same
        instance, its cost is read back from the cache. Pairs whose leading
        characters match are not cached: they reduce to a smaller pair whose
        cost is. The cache is never evicted; use :meth:`clear_cache` to reclaim
        memory.
        """
        a = require_string(a, "a")
        b = require_string(b, "b")
        with self._cache_lock:
            before = self.computations
            result = self._memoized(a, b)
            fresh = self.computations - before
        logger.debug(
            f"Memoized distance {result} computed {fresh} new pairs "
            f"({self.cache_size} cached)"
        )
        return result

    def _settled(self, a: str, b: str) -> Optional[float]:
        """Cost of a reduced pair if it is a base case or already cached."""
        if not a:
            return len(b) * self.costs.add_cost
        if not b:
            return len(a) * self.costs.remove_cost
        return self._cache.get((a, b))

    def _memoized(self, a: str, b: str) -> float:
        # Explicit stack: pending pairs can chain as long as both inputs together
        root = _skip_common_prefix(a, b)
        stack = [root]
        while stack:
            a, b = stack[-1]
            if self._settled(a, b) is not None:
                stack.pop()
                continue

            branches = (
                _skip_common_prefix(a, b[1:]),
                _skip_common_prefix(a[1:], b),
                _skip_common_prefix(a[1:], b[1:]),
            )
            costs = [self._settled(*pair) for pair in branches]
            pending = [pair for pair, cost in zip(branches, costs) if cost is None]
            if pending:
                stack.extend(pending)
                continue

            cost_add, cost_remove, cost_change = costs
            self._cache[(a, b)] = min(
                self.costs.add_cost + cost_add,
                self.costs.remove_cost + cost_remove,
                self.costs.change_cost + cost_change,
            )
            self.computations += 1
            stack.pop()

        return self._settled(*root)

    # Matrix iteration

    def distance_iterative(self, a: str, b: str) -> float:
        """
        Evaluate the distance by filling a cost matrix.

        Row ``y`` has consumed ``b[:y]`` and column ``x`` has consumed
        ``a[:x]``. Moving down adds a character of ``b``, moving right removes
        a character of ``a`` and moving diagonally changes (or keeps) one.
        With unit costs, "CAT" against "DOG" fills as::

              C A T
            0 1 2 3
          D 1 1 2 3
          O 2 2 2 3
          G 3 3 3 3

        The bottom-right cell holds the distance.
        """
        a = require_string(a, "a")
        b = require_string(b, "b")
        add_cost = self.costs.add_cost
        remove_cost = self.costs.remove_cost
        change_cost = self.costs.change_cost

        costs = [[0.0] * (len(a) + 1) for _ in range(len(b) + 1)]
        for x in range(len(a) + 1):
            costs[0][x] = x * remove_cost
        for y in range(len(b) + 1):
            costs[y][0] = y * add_cost

        for y in range(1, len(b) + 1):
            for x in range(1, len(a) + 1):
                if a[x - 1] == b[y - 1]:
                    cost = 0.0
                else:
                    cost = change_cost

                costs[y][x] = min(
                    costs[y - 1][x] + add_cost,
                    costs[y][x - 1] + remove_cost,
                    costs[y - 1][x - 1] + cost,
                )

        return costs[len(b)][len(a)]
