# ==============================================
# SCHEMA: tables, columns and their statistics
# ==============================================
#
# Modules:
# --------
# - model.py   → Column, Table, Schema (immutable) + name lookup
# - loader.py  → SchemaLoader: JSON file / URL → Schema
#
# ==============================================

from .model import Column, Table, Schema
from .loader import SchemaLoader, load_schema

__all__ = [
    "Column",
    "Table",
    "Schema",
    "SchemaLoader",
    "load_schema",
]
