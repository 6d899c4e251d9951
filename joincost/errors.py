# ==============================================
# Errors
# ==============================================
#
# Every failure the estimator can report derives from JoinCostError,
# so the CLI has a single type to catch before terminating.
#
#   JoinCostError
#   ├── ConfigError              → bad value in the environment / .env
#   ├── SchemaIOError            → schema source could not be read
#   ├── SchemaParseError         → schema JSON malformed or wrong shape
#   │   └── InvalidStatisticsError → br < 1, negative counts, duplicate names
#   ├── RequestParseError        → join request is not "t1.c1 = t2.c2"
#   └── LookupFailedError        → (also a builtin LookupError)
#       ├── TableNotFoundError
#       └── ColumnNotFoundError
#
# The cost formulas never raise: an inapplicable method is None.
# ==============================================


class JoinCostError(Exception):
    """Base error for the join cost estimator."""


class ConfigError(JoinCostError):
    pass


class SchemaIOError(JoinCostError):
    pass


class SchemaParseError(JoinCostError):
    pass


class InvalidStatisticsError(SchemaParseError):
    pass


class RequestParseError(JoinCostError):
    pass


class LookupFailedError(JoinCostError, LookupError):
    pass


class TableNotFoundError(LookupFailedError):
    def __init__(self, table_name: str):
        super().__init__(f"Table not found with name {table_name}")
        self.table_name = table_name


class ColumnNotFoundError(LookupFailedError):
    def __init__(self, table_name: str, column_name: str):
        super().__init__(f"Column {column_name} not found in table {table_name}")
        self.table_name = table_name
        self.column_name = column_name
