"""
Editcost - Weighted edit distance between two strings

Computes the minimum cost of turning one string into another using:
- Single-character additions
- Single-character removals
- Single-character changes

Three interchangeable evaluators (naive recursion, memoized recursion and
matrix iteration) return the same value for a given cost model.
"""

from editcost.calculator import CostModel, StringDistanceCalculator

__version__ = "0.1.0"

__all__ = ["CostModel", "StringDistanceCalculator", "__version__"]
