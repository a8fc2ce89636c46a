# Copyright 2025-present DatusAI, Inc.
# Licensed under the Apache License, Version 2.0.
# See http://www.apache.org/licenses/LICENSE-2.0 for details.

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import clickhouse_connect
from clickhouse_connect.driver.exceptions import ClickHouseError

from .config import ClickHouseCredentials
from .context import JsonObject
from .exceptions import ConnectivityError

logger = logging.getLogger(__name__)

JSON_EACH_ROW = "JSONEachRow"


def _decode_rows(payload: Any) -> List[JsonObject]:
    """Split a JSONEachRow body into rows.

    Rows are separated by newline bytes only; other Unicode line breaks may appear raw
    inside string values. Bytes that are not valid UTF-8 are replaced.
    """
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    rows = []
    for line in bytes(payload).split(b"\n"):
        if not line.strip():
            continue
        try:
            rows.append(json.loads(line.decode("utf-8", errors="replace")))
        except ValueError as exc:
            raise ConnectivityError(f"Malformed JSONEachRow response from ClickHouse: {exc}") from exc
    return rows


def _encode_rows(rows: Sequence[JsonObject]) -> bytes:
    return "\n".join(json.dumps(row, ensure_ascii=False) for row in rows).encode("utf-8")


class ClickHouseSession:
    """A single ClickHouse HTTP client scoped to one node invocation.

    Every request uses the JSONEachRow format and an empty parameter map.
    Vendor errors are raised as ``ConnectivityError`` with the original message.
    """

    def __init__(self, credentials: ClickHouseCredentials):
        self.credentials = credentials
        kwargs = credentials.client_kwargs()
        logger.debug(
            "Connecting to ClickHouse at %s:%s (database=%s, secure=%s)",
            kwargs["host"],
            kwargs["port"],
            kwargs["database"],
            kwargs["secure"],
        )
        try:
            self._client = clickhouse_connect.get_client(**kwargs)
        except ClickHouseError as exc:
            raise ConnectivityError(str(exc)) from exc
        self._closed = False

    def query_rows(self, sql: str, parameters: Optional[Dict[str, Any]] = None) -> List[JsonObject]:
        """Run ``sql`` and return one dict per result row, in server order."""
        logger.debug("Executing ClickHouse query: %s", sql)
        try:
            payload = self._client.raw_query(sql, parameters=parameters or {}, fmt=JSON_EACH_ROW)
        except ClickHouseError as exc:
            raise ConnectivityError(str(exc)) from exc
        rows = _decode_rows(payload)
        logger.debug("Received %d rows from ClickHouse", len(rows))
        return rows

    def insert_rows(self, table: str, rows: Sequence[JsonObject]) -> None:
        """Submit all ``rows`` to ``table`` in one request."""
        if not rows:
            logger.debug("No rows to insert into %s", table)
            return
        logger.debug("Inserting %d rows into %s", len(rows), table)
        try:
            self._client.raw_insert(table, insert_block=_encode_rows(rows), fmt=JSON_EACH_ROW)
        except ClickHouseError as exc:
            raise ConnectivityError(str(exc)) from exc

    def close(self) -> None:
        """Close the underlying client once. Failures are logged, never raised."""
        if self._closed:
            return
        self._closed = True
        try:
            self._client.close()
        except Exception as exc:
            logger.warning("Failed to close ClickHouse client: %s", exc)

    def __enter__(self) -> "ClickHouseSession":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
