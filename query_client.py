"""
Thin adapter over the ADOMD.NET client (``pyadomd``).

All queries of a run go to one ``host:port`` endpoint. Every call is a single
attempt without timeout; a hung engine blocks the caller.
"""

import json
from typing import Any, Dict, List

from exceptions import QueryExecutionError
from logger import logger

CATALOG_QUERY = "SELECT [CATALOG_NAME] FROM $SYSTEM.DBSCHEMA_CATALOGS"
FUNCTIONS_QUERY = "EVALUATE Functions"
TYPES_QUERY = "EVALUATE Types"
ENUM_OPTIONS_QUERY = "EVALUATE EnumOptions"


def endpoint_for(port: int, host: str = "localhost") -> str:
    return f"{host}:{port}"


def connection_string(endpoint: str) -> str:
    return f"Provider=MSOLAP;Data Source={endpoint}"


def refresh_command(catalog: str) -> str:
    """TMSL command that fully refreshes `catalog`."""
    return json.dumps({"refresh": {"type": "full", "objects": [{"database": catalog}]}})


def _connect(endpoint: str):
    # pyadomd loads the ADOMD.NET assembly on import, so it is only imported
    # once a connection is actually needed.
    from pyadomd import Pyadomd

    return Pyadomd(connection_string(endpoint))


class EngineClient:
    def __init__(self, endpoint: str):
        self.endpoint = endpoint

    def execute_query(self, query_text: str) -> List[Dict[str, Any]]:
        """
        Runs `query_text` and returns one dict per row, keyed by column name.

        Raises:
            QueryExecutionError: On any connection or query failure, with the client error chained.
        """
        try:
            with _connect(self.endpoint) as conn:
                with conn.cursor().execute(query_text) as cur:
                    columns = [column.name for column in cur.description]
                    return [dict(zip(columns, values)) for values in cur.fetchall()]
        except Exception as e:
            raise QueryExecutionError(
                f"Query failed against {self.endpoint}: {e}", query=query_text
            ) from e

    def execute_command(self, command_text: str) -> None:
        """Runs a command that returns no rows (e.g. a refresh)."""
        try:
            with _connect(self.endpoint) as conn:
                conn.cursor().execute_nonquery(command_text).close()
        except Exception as e:
            raise QueryExecutionError(
                f"Command failed against {self.endpoint}: {e}", query=command_text
            ) from e

    def lookup_catalog(self) -> str:
        rows = self.execute_query(CATALOG_QUERY)
        if not rows:
            raise QueryExecutionError(f"No catalog is open on {self.endpoint}", query=CATALOG_QUERY)
        catalog = next(iter(rows[0].values()))
        logger.info(f"Using catalog {catalog}")
        return str(catalog)

    def refresh_catalog(self, catalog: str) -> None:
        logger.info(f"Refreshing catalog {catalog}")
        self.execute_command(refresh_command(catalog))

    def fetch_functions(self) -> List[Dict[str, Any]]:
        return self._fetch(FUNCTIONS_QUERY, "function")

    def fetch_types(self) -> List[Dict[str, Any]]:
        return self._fetch(TYPES_QUERY, "type")

    def fetch_enum_options(self) -> List[Dict[str, Any]]:
        return self._fetch(ENUM_OPTIONS_QUERY, "enum option")

    def _fetch(self, query_text: str, label: str) -> List[Dict[str, Any]]:
        rows = self.execute_query(query_text)
        logger.info(f"Fetched {len(rows)} {label} rows")
        return rows


def execute_query(endpoint: str, query_text: str) -> List[Dict[str, Any]]:
    return EngineClient(endpoint).execute_query(query_text)
