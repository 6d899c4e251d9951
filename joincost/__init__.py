# ==============================================
# Join Cost Estimator
# ==============================================
#
# Package Structure:
#
# joincost/
# ├── schema/           # Tables, columns and their statistics (+ JSON loader)
# ├── query/            # "t1.c1 = t2.c2" request parsing and name resolution
# ├── cost/             # Cost formulas per join method + cheapest-method selector
# ├── config.py         # Configuration management
# ├── errors.py         # Exception hierarchy
# ├── join_planner.py   # Orchestrator class
# └── cli.py            # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
