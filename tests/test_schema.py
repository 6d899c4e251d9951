# ==============================================
# Tests for Schema Model and SchemaLoader
# ==============================================

import json
from dataclasses import FrozenInstanceError
from unittest.mock import Mock, patch

import pytest
import requests

from joincost.errors import (
    ColumnNotFoundError,
    InvalidStatisticsError,
    LookupFailedError,
    SchemaIOError,
    SchemaParseError,
    TableNotFoundError,
)
from joincost.schema.loader import SchemaLoader, load_schema
from joincost.schema.model import Column, Schema, Table


# ==============================================
# Model
# ==============================================

class TestModel:

    def test_from_list(self, schema):
        assert schema.table_names == ["Orders", "Customers", "Promotions"]
        orders = schema.get_table("Orders")
        assert orders.nr == 10000
        assert orders.br == 400
        assert orders.column_names == ["id", "cust_id", "amount"]
        assert orders.sorted_column.name == "id"

    def test_indexed_defaults_to_false(self, schema):
        assert schema.get_table("Orders").get_column("cust_id").indexed is False

    def test_total_values_camel_case_alias(self):
        column = Column.from_dict({"name": "a", "totalValues": 12})
        assert column.total_values == 12

    def test_columns_are_frozen_into_tuple(self, make_table):
        table = make_table(columns=[Column("a"), Column("b")])
        assert isinstance(table.columns, tuple)

    def test_immutable(self, schema):
        with pytest.raises(FrozenInstanceError):
            schema.get_table("Orders").nr = 1

    def test_sorted_column_need_not_be_member(self, make_table):
        table = make_table(sorted_on="not_a_column")
        assert table.find_column("not_a_column") is None
        assert table.sorted_column.name == "not_a_column"

    def test_round_trip_dict(self, schema, schema_records):
        assert schema.to_list() == Schema.from_list(schema_records).to_list()
        assert schema.to_list()[0]["sortedColumn"]["name"] == "id"


class TestLookup:

    def test_missing_table(self, schema):
        assert schema.find_table("Nope") is None
        with pytest.raises(TableNotFoundError, match="Table not found with name Nope"):
            schema.get_table("Nope")

    def test_missing_column(self, schema):
        orders = schema.get_table("Orders")
        assert orders.find_column("zip") is None
        with pytest.raises(ColumnNotFoundError, match="Column zip not found in table Orders"):
            orders.get_column("zip")

    def test_lookup_errors_are_builtin_lookup_errors(self, schema):
        with pytest.raises(LookupError):
            schema.get_table("Nope")
        assert issubclass(ColumnNotFoundError, LookupFailedError)


class TestValidation:

    def test_zero_blocks_rejected(self):
        with pytest.raises(InvalidStatisticsError):
            Table("T", (), Column("a"), nr=0, br=0)

    def test_negative_rows_rejected(self):
        with pytest.raises(InvalidStatisticsError):
            Table("T", (), Column("a"), nr=-1, br=1)

    def test_negative_total_values_rejected(self):
        with pytest.raises(InvalidStatisticsError):
            Column("a", total_values=-3)

    def test_duplicate_columns_rejected(self):
        with pytest.raises(InvalidStatisticsError):
            Table("T", (Column("a"), Column("a")), Column("a"), nr=0, br=1)

    def test_duplicate_tables_rejected(self, make_table):
        with pytest.raises(InvalidStatisticsError):
            Schema((make_table(name="T"), make_table(name="T")))

    def test_invalid_statistics_is_a_parse_error(self):
        assert issubclass(InvalidStatisticsError, SchemaParseError)

    @pytest.mark.parametrize("records", [
        {"name": "T"},
        ["not a table"],
        [{"name": "T", "columns": [], "nr": 1, "br": 1}],
        [{"name": "T", "columns": [], "sortedColumn": {"name": "a", "total_values": 1}, "nr": "1", "br": 1}],
        [{"name": "T", "columns": [], "sortedColumn": {"name": "a", "total_values": 1}, "nr": True, "br": 1}],
        [{"name": "T", "columns": [{"name": "a"}], "sortedColumn": {"name": "a", "total_values": 1}, "nr": 1, "br": 1}],
        [{"name": "T", "columns": [{"name": "a", "total_values": 1, "indexed": "yes"}],
          "sortedColumn": {"name": "a", "total_values": 1}, "nr": 1, "br": 1}],
    ])
    def test_wrong_structure(self, records):
        with pytest.raises(SchemaParseError):
            Schema.from_list(records)


# ==============================================
# Loader
# ==============================================

class TestSchemaLoader:

    def test_load_file(self, schema_file):
        schema = SchemaLoader().load(schema_file)
        assert len(schema) == 3
        assert schema.get_table("Customers").get_column("id").indexed is True

    def test_load_file_from_str_path(self, schema_file):
        assert load_schema(str(schema_file)).table_names[0] == "Orders"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaIOError):
            SchemaLoader().load(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[{")
        with pytest.raises(SchemaParseError):
            SchemaLoader().load(path)

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'[{"name": "\xff"}]')
        with pytest.raises(SchemaParseError, match="not UTF-8"):
            SchemaLoader().load(path)

    def test_zero_blocks_in_file(self, tmp_path, schema_records):
        schema_records[0]["br"] = 0
        path = tmp_path / "schema.json"
        path.write_text(json.dumps(schema_records))
        with pytest.raises(InvalidStatisticsError):
            SchemaLoader().load(path)

    def test_load_url(self, schema_records):
        response = Mock(text=json.dumps(schema_records))
        with patch("joincost.schema.loader.requests.get", return_value=response) as get:
            schema = SchemaLoader(timeout=3).load("https://example.com/schema.json")
        get.assert_called_once_with("https://example.com/schema.json", timeout=3)
        response.raise_for_status.assert_called_once()
        assert schema.table_names == ["Orders", "Customers", "Promotions"]

    def test_url_failure(self):
        with patch(
            "joincost.schema.loader.requests.get",
            side_effect=requests.exceptions.ConnectionError("refused"),
        ):
            with pytest.raises(SchemaIOError, match="refused"):
                SchemaLoader(timeout=1).load("http://localhost:1/schema.json")

    def test_timeout_from_config(self, monkeypatch):
        monkeypatch.setenv("JOINCOST_HTTP_TIMEOUT", "2.5")
        assert SchemaLoader().timeout == 2.5
