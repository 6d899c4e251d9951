# ==============================================
# SchemaLoader
# ==============================================
#
# PURPOSE:
#   Read the JSON description of the database (a list of tables
#   with their statistics) and turn it into a Schema.
#
# SOURCES:
#   - A filesystem path         → read with open()
#   - An http:// or https:// URL → fetched with requests
#
# FILE FORMAT:
# ------------
#   [
#     {
#       "name": "Orders",
#       "columns": [{"name": "cust_id", "indexed": true, "total_values": 5000}],
#       "sortedColumn": {"name": "id", "total_values": 100000},
#       "nr": 100000,
#       "br": 2500
#     }
#   ]
#
# ERRORS:
#   - SchemaIOError          → file missing / unreadable, HTTP failure
#   - SchemaParseError       → invalid JSON or wrong structure
#   - InvalidStatisticsError → br < 1, negative counts, duplicate names
#
# ==============================================

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import requests

from joincost.config import get_config
from joincost.errors import SchemaIOError, SchemaParseError
from joincost.schema.model import Schema

logger = logging.getLogger(__name__)


class SchemaLoader:
    """
    Loads a Schema from a local JSON file or an HTTP endpoint.
    """

    URL_PREFIXES = ("http://", "https://")

    def __init__(self, timeout: Optional[float] = None):
        """
        Args:
            timeout: Seconds to wait for URL sources. Defaults to the
                     configured JOINCOST_HTTP_TIMEOUT.
        """
        self.timeout = timeout if timeout is not None else get_config().http_timeout_seconds

    def load(self, source: Union[str, Path]) -> Schema:
        """
        Load and validate a schema.

        Args:
            source: Path to a JSON file, or an http(s) URL

        Returns:
            The loaded Schema
        """
        if isinstance(source, str) and source.startswith(self.URL_PREFIXES):
            content = self._fetch(source)
        else:
            content = self._read(Path(source))

        try:
            records = json.loads(content)
        except json.JSONDecodeError as e:
            raise SchemaParseError(f"Parse error in {source}: {e}") from e

        schema = self.from_records(records)
        logger.info("Loaded %d tables from %s", len(schema), source)
        return schema

    @staticmethod
    def from_records(records: Any) -> Schema:
        """Build a Schema from already-decoded JSON."""
        return Schema.from_list(records)

    def _read(self, path: Path) -> str:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise SchemaParseError(f"Parse error in {path}: not UTF-8 text ({e})") from e
        except OSError as e:
            raise SchemaIOError(f"IO error reading {path}: {e}") from e

    def _fetch(self, url: str) -> str:
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise SchemaIOError(f"IO error fetching {url}: {e}") from e
        return response.text


def load_schema(source: Union[str, Path]) -> Schema:
    """Convenience wrapper around SchemaLoader().load()."""
    return SchemaLoader().load(source)
