# ==============================================
# Method Selector
# ==============================================
#
# PURPOSE:
#   Reduce the per-method costs of one join to a single answer:
#   the applicable method with the lowest cost.
#
# ENUMS:
# ------
# - JoinMethod(Enum): BLOCK_NESTED, INDEXED, MERGE, HASH
#     Values are the display names printed to the user.
#
# CLASSES:
# --------
# - CostCandidate (frozen dataclass)
#     method: JoinMethod
#     cost: int | None       → None = method not applicable
#
# FUNCTION:
# ---------
# - select_cheapest(candidates) -> CostCandidate
#     Walk the candidates in order. A candidate replaces the current
#     best only if it is applicable and STRICTLY cheaper, so on a tie
#     the earlier method wins. The planner evaluates methods in
#     EVALUATION_ORDER.
#
# ==============================================

from dataclasses import dataclass
from enum import Enum
from functools import reduce
from typing import Any, Dict, Iterable, Optional


class JoinMethod(Enum):
    BLOCK_NESTED = "Block Nested Join"
    INDEXED = "Indexed Join"
    MERGE = "Merge Join"
    HASH = "Hash Join"

    def __str__(self) -> str:
        return self.value


EVALUATION_ORDER = (
    JoinMethod.BLOCK_NESTED,
    JoinMethod.INDEXED,
    JoinMethod.MERGE,
    JoinMethod.HASH,
)


@dataclass(frozen=True)
class CostCandidate:
    method: JoinMethod
    cost: Optional[int]

    @property
    def applicable(self) -> bool:
        return self.cost is not None

    def to_dict(self) -> Dict[str, Any]:
        return {"method": self.method.value, "cost": self.cost}


def _keep_cheaper(best: Optional[CostCandidate], candidate: CostCandidate) -> Optional[CostCandidate]:
    if not candidate.applicable:
        return best
    if best is None or candidate.cost < best.cost:
        return candidate
    return best


def select_cheapest(candidates: Iterable[CostCandidate]) -> CostCandidate:
    """
    Return the first applicable candidate with the minimum cost.

    Raises:
        ValueError: if no candidate is applicable
    """
    best = reduce(_keep_cheaper, candidates, None)
    if best is None:
        raise ValueError("No applicable join method")
    return best
