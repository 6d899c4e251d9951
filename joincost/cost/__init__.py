# ==============================================
# COST: join cost formulas and method selection
# ==============================================
#
# Two-step process:
#   Step 1 (Cost Model): one cost per join method (None = not applicable)
#   Step 2 (Selector):   fold the costs into the cheapest method
#
# Modules:
# --------
# - cost_model.py → block nested / indexed / merge / hash join costs
# - selector.py   → JoinMethod, CostCandidate, select_cheapest
#
# ==============================================

from .cost_model import (
    block_nested_join_cost,
    indexed_join_cost,
    merge_join_cost,
    hash_join_cost,
    index_tree_height,
    sort_passes,
    sorting_cost,
)
from .selector import JoinMethod, CostCandidate, EVALUATION_ORDER, select_cheapest

__all__ = [
    "block_nested_join_cost",
    "indexed_join_cost",
    "merge_join_cost",
    "hash_join_cost",
    "index_tree_height",
    "sort_passes",
    "sorting_cost",
    "JoinMethod",
    "CostCandidate",
    "EVALUATION_ORDER",
    "select_cheapest",
]
