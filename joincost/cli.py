# ==============================================
# CLI: Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Load a schema, read one join request, print the cheapest
#   join method. This is the only place that ends the process
#   on error.
#
# USAGE:
# ------
#   python -m joincost.cli schema.json
#   python -m joincost.cli schema.json 50 --query "Orders.cust_id = Customers.id"
#   echo "Orders.cust_id = Customers.id" | joincost schema.json --all
#
#   MEMORY_SIZE defaults to JOINCOST_MEMORY_SIZE (10000 blocks).
#   Without --query the request is read from stdin.
#
# EXIT STATUS:
# ------------
#   0 success, 1 any estimator error, 2 bad command-line arguments
#
# ==============================================

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional, TextIO

from joincost.config import get_config
from joincost.errors import JoinCostError
from joincost.join_planner import JoinEstimate, JoinPlanner
from joincost.query.join_request import JoinRequest, parse_join_request
from joincost.schema.loader import SchemaLoader
from joincost.schema.model import Schema


def _memory_size(value: str) -> int:
    try:
        size = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("Memory size should be a whole number") from None
    if size < 1:
        raise argparse.ArgumentTypeError("Memory size should be a positive number of blocks")
    return size


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="joincost",
        description="Pick the cheapest algorithm for a two-table equi-join.",
    )
    parser.add_argument("schema", help="path or http(s) URL of the database metadata JSON")
    parser.add_argument(
        "memory_size",
        nargs="?",
        type=_memory_size,
        default=None,
        help="buffer size in blocks (default: JOINCOST_MEMORY_SIZE or 10000)",
    )
    parser.add_argument("-q", "--query", help='join request, e.g. "Orders.cust_id = Customers.id"')
    parser.add_argument("--all", action="store_true", help="print the cost of every method")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def print_tables(schema: Schema, out: TextIO) -> None:
    print("TABLES =>", file=out)
    for table in schema:
        print(table.name, file=out)
        for column in table.columns:
            print(f" - {column.name}", file=out)
        print(file=out)


def print_estimate(request: JoinRequest, estimate: JoinEstimate, show_all: bool, out: TextIO) -> None:
    print(f"Memory size: {estimate.memory_size}", file=out)
    print(f"User entered: {request}", file=out)
    if show_all:
        for candidate in estimate.candidates:
            cost = candidate.cost if candidate.applicable else "n/a"
            print(f"  {candidate.method.value:<20} {cost}", file=out)
    print(
        f"Best cost for joining is {estimate.cost} blocks by using method {estimate.method.value}",
        file=out,
    )


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    args = build_parser().parse_args(argv)

    try:
        config = get_config()
        logging.basicConfig(level=logging.DEBUG if args.verbose else config.log_level)

        cost_config = config.cost
        if args.memory_size is not None:
            cost_config = replace(cost_config, memory_size=args.memory_size)

        schema = SchemaLoader(timeout=config.http_timeout_seconds).load(args.schema)
        print_tables(schema, stdout)

        line = args.query if args.query is not None else stdin.readline()
        request = parse_join_request(line)

        estimate = JoinPlanner(cost_config).estimate_request(schema, request)
        print_estimate(request, estimate, args.all, stdout)
    except JoinCostError as e:
        print(f"error: {e}", file=stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
