# Copyright 2025-present DatusAI, Inc.
# Licensed under the Apache License, Version 2.0.
# See http://www.apache.org/licenses/LICENSE-2.0 for details.

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Tuple, Union

from .config import QueryOptions
from .context import ExecutionContext, JsonObject
from .exceptions import ValidationError
from .sql import prepare_query


class Operation(str, Enum):
    QUERY = "query"
    INSERT = "insert"


@dataclass(frozen=True)
class QueryOperation:
    """Run one SQL statement and return its rows."""

    sql: str
    statement: str
    options: QueryOptions = field(default_factory=QueryOptions)

    @classmethod
    def build(cls, sql: str, options: QueryOptions) -> "QueryOperation":
        """Apply the read-only guard and LIMIT injection; ``statement`` is what ClickHouse runs."""
        return cls(sql=sql, statement=prepare_query(sql, options.read_only_mode, options.max_results), options=options)


@dataclass(frozen=True)
class InsertOperation:
    """Bulk insert the input item payloads into ``table``."""

    table: str
    rows: Tuple[JsonObject, ...] = ()


NodeOperation = Union[QueryOperation, InsertOperation]


def _require_text(value: Any, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Parameter '{name}' must be a non-empty string")
    return value


def _payloads(items: List[Any]) -> Tuple[JsonObject, ...]:
    rows = []
    for index, item in enumerate(items):
        payload = item.get("json") if isinstance(item, dict) else None
        if not isinstance(payload, dict):
            raise ValidationError(f"Input item {index} has no JSON object payload")
        rows.append(payload)
    return tuple(rows)


def parse_operation(context: ExecutionContext) -> NodeOperation:
    """Read the node parameters from the host and build the operation to run.

    All parameter checks, including the read-only guard, happen here so that a
    rejected request never opens a connection.
    """
    raw = context.get_node_parameter("operation", 0)
    try:
        operation = Operation(raw)
    except ValueError:
        raise ValidationError(f"The operation '{raw}' is not supported") from None

    if operation is Operation.QUERY:
        sql = _require_text(context.get_node_parameter("query", 0), "query")
        options = QueryOptions.from_mapping(context.get_node_parameter("options", 0, {}))
        return QueryOperation.build(sql, options)

    table = _require_text(context.get_node_parameter("table", 0), "table")
    return InsertOperation(table=table, rows=_payloads(context.get_input_data()))
