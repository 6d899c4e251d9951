# ==============================================
# Cost Model
# ==============================================
#
# PURPOSE:
#   Estimate the number of block transfers needed to join two
#   tables with each classical join algorithm.
#
# FUNCTIONS:
# ----------
# - block_nested_join_cost(t1, t2, memory_size) -> int
# - indexed_join_cost(t1, c1, t2, c2, fan_out) -> int | None
# - merge_join_cost(t1, c1, t2, c2, memory_size) -> int
# - hash_join_cost(t1, t2, memory_size) -> int | None
#
#   None means the algorithm cannot be used for this join.
#
# HELPERS:
# --------
# - index_tree_height(total_values, fan_out) -> int
# - sort_passes(blocks, memory_size) -> int
# - sorting_cost(blocks, memory_size) -> int
#
#   Logarithms are evaluated with integer arithmetic so that exact
#   powers (e.g. 100 runs with fan-in 10) do not round up a pass.
#
# ==============================================

from typing import Optional

from joincost.config import DEFAULT_INDEX_FAN_OUT
from joincost.schema.model import Column, Table


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


def _ceil_log(value: int, base: int) -> int:
    """Smallest p such that base ** p >= value; 0 for value <= 1."""
    if base < 2:
        raise ValueError(f"Logarithm base must be at least 2, got {base}")
    power = 0
    reach = 1
    while reach < value:
        reach *= base
        power += 1
    return power


def index_tree_height(total_values: int, fan_out: int = DEFAULT_INDEX_FAN_OUT) -> int:
    """
    Height of a B+-tree index over `total_values` keys.

    Nodes are assumed half full, so each level divides the key space
    by fan_out // 2. A column with at most one distinct value has
    height 0.
    """
    if fan_out < 4:
        raise ValueError(f"Index fan-out must be at least 4, got {fan_out}")
    return _ceil_log(total_values, fan_out // 2)


def sort_passes(blocks: int, memory_size: int) -> int:
    """
    Merge passes of an external sort.

    ceil(blocks / M) initial runs are merged M - 1 at a time. A relation
    that fits in a single run needs no merge pass. With M <= 2 the merge
    fan-in is taken as 2.
    """
    runs = _ceil_div(blocks, memory_size)
    fan_in = max(memory_size - 1, 2)
    return _ceil_log(runs, fan_in)


def sorting_cost(blocks: int, memory_size: int) -> int:
    """Every pass reads and writes the whole relation."""
    return 2 * blocks * sort_passes(blocks, memory_size)


def block_nested_join_cost(table1: Table, table2: Table, memory_size: int) -> int:
    """
    Block nested-loop join.

    If the smaller relation fits in memory both relations are read once.
    Otherwise the smaller one is the outer relation and the inner one is
    rescanned for each of its blocks:
        s * (br1 + br2 - s + 1),  s = min(br1, br2)
    """
    smaller = min(table1.br, table2.br)
    if smaller < memory_size:
        return table1.br + table2.br
    return smaller * (table1.br + table2.br - smaller + 1)


def indexed_join_cost(
    table1: Table,
    column1: Column,
    table2: Table,
    column2: Column,
    fan_out: int = DEFAULT_INDEX_FAN_OUT,
) -> Optional[int]:
    """
    Indexed nested-loop join.

    For an index on column1, every row of table2 looks it up:
        nr2 * height(column1) + br2
    and symmetrically for an index on column2. With both indexed, the
    cheaper direction is used. Returns None if neither column is indexed.
    """
    costs = []
    if column1.indexed:
        costs.append(table2.nr * index_tree_height(column1.total_values, fan_out) + table2.br)
    if column2.indexed:
        costs.append(table1.nr * index_tree_height(column2.total_values, fan_out) + table1.br)
    return min(costs) if costs else None


def merge_join_cost(
    table1: Table,
    column1: Column,
    table2: Table,
    column2: Column,
    memory_size: int,
) -> int:
    """
    Sort-merge join: sort each input not already ordered on its join
    column, then read both once.
    """
    cost = table1.br + table2.br
    if not table1.is_sorted_on(column1):
        cost += sorting_cost(table1.br, memory_size)
    if not table2.is_sorted_on(column2):
        cost += sorting_cost(table2.br, memory_size)
    return cost


def hash_join_cost(table1: Table, table2: Table, memory_size: int) -> Optional[int]:
    """
    Hash join without recursive partitioning.

    Usable only when M^2 > br of the smaller (build) relation. Cost is
    3 * (br1 + br2) plus one block per partition, with
    ceil(br_build / M) + 1 partitions.
    """
    build = table1 if table1.br <= table2.br else table2
    if memory_size * memory_size <= build.br:
        return None
    partitions = _ceil_div(build.br, memory_size) + 1
    return 3 * (table1.br + table2.br) + partitions
