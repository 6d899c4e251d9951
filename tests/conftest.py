# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# - clean_config (autouse) → no JOINCOST_* env leakage, fresh config singleton
# - make_table             → build a Table from a few statistics
# - schema_records         → raw JSON records (Orders / Customers / Promotions)
# - schema                 → Schema built from schema_records
# - schema_file            → schema_records written to tmp_path
# ==============================================

import json

import pytest

from joincost.config import reset_config
from joincost.schema.model import Column, Schema, Table


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Every test starts from default configuration."""
    for name in (
        "JOINCOST_MEMORY_SIZE",
        "JOINCOST_INDEX_FAN_OUT",
        "JOINCOST_HTTP_TIMEOUT",
        "JOINCOST_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def make_table():
    """Factory: make_table(br=..., nr=..., sorted_on=..., columns=[...])."""

    def _make(name="T", br=1, nr=0, sorted_on="id", columns=None):
        columns = columns or [Column("id")]
        return Table(
            name=name,
            columns=columns,
            sorted_column=Column(sorted_on),
            nr=nr,
            br=br,
        )

    return _make


@pytest.fixture
def schema_records():
    return [
        {
            "name": "Orders",
            "columns": [
                {"name": "id", "indexed": True, "total_values": 10000},
                {"name": "cust_id", "total_values": 2000},
                {"name": "amount", "total_values": 750},
            ],
            "sortedColumn": {"name": "id", "indexed": True, "total_values": 10000},
            "nr": 10000,
            "br": 400,
        },
        {
            "name": "Customers",
            "columns": [
                {"name": "id", "indexed": True, "total_values": 2000},
                {"name": "name", "total_values": 1950},
            ],
            "sortedColumn": {"name": "id", "indexed": True, "total_values": 2000},
            "nr": 2000,
            "br": 100,
        },
        {
            "name": "Promotions",
            "columns": [{"name": "order_id", "total_values": 5}],
            "sortedColumn": {"name": "order_id", "total_values": 5},
            "nr": 5,
            "br": 1,
        },
    ]


@pytest.fixture
def schema(schema_records):
    return Schema.from_list(schema_records)


@pytest.fixture
def schema_file(tmp_path, schema_records):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(schema_records))
    return path
