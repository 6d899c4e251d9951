# ==============================================
# JoinRequest
# ==============================================
#
# PURPOSE:
#   Turn the user's one-line equi-join description into names,
#   then resolve those names against the loaded Schema.
#
# INPUT FORMAT:
#   <table1>.<column1> = <table2>.<column2>
#   e.g.  Orders.cust_id = Customers.id
#
#   Whitespace around names and around "=" is ignored. Everything
#   after the first "=" is the right-hand side. Extra ".segments"
#   after the column name are ignored.
#
# CLASSES:
# --------
# - JoinRequest (frozen dataclass)  → the four names
# - ResolvedJoin (frozen dataclass) → the two (Table, Column) pairs
#
# FUNCTION:
# ---------
# - parse_join_request(text) -> JoinRequest
#     Raises RequestParseError on a malformed line.
#
# ==============================================

from dataclasses import dataclass
from typing import Tuple

from joincost.errors import RequestParseError
from joincost.schema.model import Column, Schema, Table

USAGE = "Input format: <table1>.<column1> = <table2>.<column2>"


@dataclass(frozen=True)
class ResolvedJoin:
    """Both sides of an equi-join, looked up in the schema."""

    left_table: Table
    left_column: Column
    right_table: Table
    right_column: Column


@dataclass(frozen=True)
class JoinRequest:
    left_table: str
    left_column: str
    right_table: str
    right_column: str

    def __str__(self) -> str:
        return f"{self.left_table}.{self.left_column} X {self.right_table}.{self.right_column}"

    def resolve(self, schema: Schema) -> ResolvedJoin:
        """
        Look both sides up in the schema.

        Raises:
            TableNotFoundError, ColumnNotFoundError
        """
        left_table = schema.get_table(self.left_table)
        right_table = schema.get_table(self.right_table)
        return ResolvedJoin(
            left_table=left_table,
            left_column=left_table.get_column(self.left_column),
            right_table=right_table,
            right_column=right_table.get_column(self.right_column),
        )


def _split_side(side: str, label: str) -> Tuple[str, str]:
    parts = [part.strip() for part in side.strip().split(".")]
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise RequestParseError(f"Malformed {label} side {side.strip()!r}. {USAGE}")
    return parts[0], parts[1]


def parse_join_request(text: str) -> JoinRequest:
    """
    Parse "t1.c1 = t2.c2" into a JoinRequest.

    Args:
        text: The raw request line (trailing newline allowed)

    Returns:
        JoinRequest with the four names
    """
    left, sep, right = text.partition("=")
    if not sep:
        raise RequestParseError(f"Missing '=' in {text.strip()!r}. {USAGE}")

    left_table, left_column = _split_side(left, "left")
    right_table, right_column = _split_side(right, "right")
    return JoinRequest(left_table, left_column, right_table, right_column)
