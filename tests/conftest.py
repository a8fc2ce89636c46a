# Copyright 2025-present DatusAI, Inc.
# Licensed under the Apache License, Version 2.0.
# See http://www.apache.org/licenses/LICENSE-2.0 for details.

import json
from typing import Any, Dict, List, Optional

import clickhouse_connect
import pytest
from clickhouse_node import StaticExecutionContext


class FakeClient:
    """Stands in for a clickhouse_connect HTTP client and records every call."""

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.rows: List[Dict[str, Any]] = []
        self.body: Optional[bytes] = None
        self.queries: List[Dict[str, Any]] = []
        self.inserts: List[Dict[str, Any]] = []
        self.close_calls = 0
        self.query_error: Optional[Exception] = None
        self.insert_error: Optional[Exception] = None
        self.close_error: Optional[Exception] = None

    def raw_query(self, query, parameters=None, settings=None, fmt=None, **kwargs):
        self.queries.append({"query": query, "parameters": parameters, "fmt": fmt})
        if self.query_error is not None:
            raise self.query_error
        if self.body is not None:
            return self.body
        return "\n".join(json.dumps(row) for row in self.rows).encode("utf-8")

    def raw_insert(self, table, column_names=None, insert_block=None, settings=None, fmt=None, **kwargs):
        if self.insert_error is not None:
            raise self.insert_error
        rows = [json.loads(line) for line in insert_block.decode("utf-8").splitlines()]
        self.inserts.append({"table": table, "rows": rows, "fmt": fmt})

    def close(self):
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error


class FakeClientFactory:
    def __init__(self):
        self.client = FakeClient()
        self.connect_calls: List[Dict[str, Any]] = []
        self.connect_error: Optional[Exception] = None

    def __call__(self, **kwargs):
        self.connect_calls.append(kwargs)
        if self.connect_error is not None:
            raise self.connect_error
        self.client.kwargs = kwargs
        return self.client


@pytest.fixture
def clickhouse(monkeypatch) -> FakeClientFactory:
    """Replace clickhouse_connect.get_client with a recording fake."""
    factory = FakeClientFactory()
    monkeypatch.setattr(clickhouse_connect, "get_client", factory)
    return factory


@pytest.fixture
def credential_data() -> Dict[str, Any]:
    return {
        "url": "http://localhost:8123",
        "database": "test",
        "user": "root",
        "password": "secret",
    }


@pytest.fixture
def make_context(credential_data):
    def _make(input_items=None, **parameters) -> StaticExecutionContext:
        return StaticExecutionContext(
            parameters=parameters,
            credentials={"clickhouse": credential_data},
            input_items=list(input_items or []),
        )

    return _make
