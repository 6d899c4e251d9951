# ==============================================
# JoinPlanner: Orchestrator
# ==============================================
#
# PURPOSE:
#   The class users interact with. Ties the pieces together:
#
#   "Orders.cust_id = Customers.id"
#          │ parse_join_request
#          ▼
#     JoinRequest ──resolve(schema)──▶ ResolvedJoin
#                                          │
#                    ┌─────────────────────┼──────────────────────┐
#                    ▼            ▼        ▼            ▼
#              block nested   indexed    merge        hash      (cost_model)
#                    └─────────────────────┬──────────────────────┘
#                                          ▼ select_cheapest
#                                     JoinEstimate
#
# CLASS: JoinPlanner
# ------------------
#   Constructor:
#   ------------
#   - __init__(config: CostConfig | None = None)
#       Falls back to get_config().cost.
#
#   Methods:
#   --------
#   - candidates(join: ResolvedJoin) -> list[CostCandidate]
#   - estimate(join: ResolvedJoin) -> JoinEstimate
#   - estimate_request(schema, request) -> JoinEstimate
#   - estimate_from_text(schema, text) -> JoinEstimate
#
# ==============================================

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from joincost.config import CostConfig, get_config
from joincost.cost.cost_model import (
    block_nested_join_cost,
    hash_join_cost,
    indexed_join_cost,
    merge_join_cost,
)
from joincost.cost.selector import EVALUATION_ORDER, CostCandidate, JoinMethod, select_cheapest
from joincost.query.join_request import JoinRequest, ResolvedJoin, parse_join_request
from joincost.schema.model import Schema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JoinEstimate:
    """The chosen method for one join, plus every method that was costed."""

    method: JoinMethod
    cost: int
    memory_size: int
    candidates: List[CostCandidate] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "method": self.method.value,
            "cost": self.cost,
            "memory_size": self.memory_size,
            "candidates": [candidate.to_dict() for candidate in self.candidates],
        }


class JoinPlanner:
    """
    Costs every join method for a two-table equi-join and picks the cheapest.
    """

    def __init__(self, config: Optional[CostConfig] = None):
        self.config = config or get_config().cost

    @property
    def memory_size(self) -> int:
        return self.config.memory_size

    def candidates(self, join: ResolvedJoin) -> List[CostCandidate]:
        """
        Cost the join with each method, in evaluation order.
        """
        t1, c1 = join.left_table, join.left_column
        t2, c2 = join.right_table, join.right_column
        m = self.config.memory_size

        costs = {
            JoinMethod.BLOCK_NESTED: block_nested_join_cost(t1, t2, m),
            JoinMethod.INDEXED: indexed_join_cost(t1, c1, t2, c2, self.config.index_fan_out),
            JoinMethod.MERGE: merge_join_cost(t1, c1, t2, c2, m),
            JoinMethod.HASH: hash_join_cost(t1, t2, m),
        }
        candidates = [CostCandidate(method, costs[method]) for method in EVALUATION_ORDER]
        for candidate in candidates:
            logger.debug(
                "%s.%s X %s.%s: %s -> %s",
                t1.name, c1.name, t2.name, c2.name,
                candidate.method.value,
                candidate.cost if candidate.applicable else "not applicable",
            )
        return candidates

    def estimate(self, join: ResolvedJoin) -> JoinEstimate:
        candidates = self.candidates(join)
        best = select_cheapest(candidates)
        logger.info("Chose %s at %d blocks (M=%d)", best.method.value, best.cost, self.memory_size)
        return JoinEstimate(
            method=best.method,
            cost=best.cost,
            memory_size=self.memory_size,
            candidates=candidates,
        )

    def estimate_request(self, schema: Schema, request: JoinRequest) -> JoinEstimate:
        return self.estimate(request.resolve(schema))

    def estimate_from_text(self, schema: Schema, text: str) -> JoinEstimate:
        """Parse, resolve and cost a "t1.c1 = t2.c2" line."""
        return self.estimate_request(schema, parse_join_request(text))
