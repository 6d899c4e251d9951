# ==============================================
# QUERY: join request parsing and resolution
# ==============================================
#
# Modules:
# --------
# - join_request.py → parse "t1.c1 = t2.c2", resolve against a Schema
#
# ==============================================

from .join_request import JoinRequest, ResolvedJoin, parse_join_request

__all__ = [
    "JoinRequest",
    "ResolvedJoin",
    "parse_join_request",
]
