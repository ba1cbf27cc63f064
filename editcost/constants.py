"""
Shared constants for Editcost.
"""

# Default cost model
DEFAULT_ADD_COST = 1.0
DEFAULT_REMOVE_COST = 1.0
DEFAULT_CHANGE_COST = 1.5

# Evaluation methods
METHOD_NAIVE = "naive"
METHOD_MEMOIZED = "memoized"
METHOD_ITERATIVE = "iterative"
METHODS = (METHOD_NAIVE, METHOD_MEMOIZED, METHOD_ITERATIVE)
DEFAULT_METHOD = METHOD_ITERATIVE

# Inputs longer than this make the naive evaluator impractically slow
NAIVE_RECOMMENDED_MAX_LENGTH = 12

# Config file locations and environment overrides
CONFIG_FILENAME = "editcost.yaml"
ENV_PREFIX = "EDITCOST_"
