# Copyright 2025-present DatusAI, Inc.
# Licensed under the Apache License, Version 2.0.
# See http://www.apache.org/licenses/LICENSE-2.0 for details.

"""Property schema the workflow host renders for the ClickHouse node."""

from typing import Any, Dict

from .operations import Operation

CREDENTIAL_TYPE = "clickhouse"
CREDENTIAL_TEST = "clickhouseConnectionTest"

NODE_DESCRIPTION: Dict[str, Any] = {
    "displayName": "ClickHouse",
    "name": "clickhouse",
    "icon": "file:clickhouse.svg",
    "group": ["input"],
    "version": 1,
    "description": "Query and ingest data into ClickHouse",
    "defaults": {"name": "clickhouse"},
    "inputs": ["main"],
    "outputs": ["main"],
    "credentials": [{"name": CREDENTIAL_TYPE, "required": True, "testedBy": CREDENTIAL_TEST}],
    "usableAsTool": True,
    "properties": [
        {
            "displayName": "Operation",
            "name": "operation",
            "type": "options",
            "noDataExpression": True,
            "options": [
                {
                    "name": "Query",
                    "value": Operation.QUERY.value,
                    "description": "Execute an SQL query",
                    "action": "Execute a SQL query",
                },
                {
                    "name": "Insert",
                    "value": Operation.INSERT.value,
                    "description": "Insert rows in database",
                    "action": "Insert rows in database",
                },
            ],
            "default": Operation.INSERT.value,
        },
        {
            "displayName": "Query",
            "name": "query",
            "type": "string",
            "displayOptions": {"show": {"operation": [Operation.QUERY.value]}},
            "default": "",
            "placeholder": "SELECT id, name FROM product WHERE quantity > {quantity:Int32} AND price <= {price:Int32}",
            "required": True,
            "description": "The SQL query to execute. You can use expressions or ClickHouse query parameters.",
        },
        {
            "displayName": "Table Name",
            "name": "table",
            "type": "string",
            "displayOptions": {"show": {"operation": [Operation.INSERT.value]}},
            "default": "",
            "placeholder": "product",
            "required": True,
            "description": "The table name to insert data. You can use expressions.",
        },
        {
            "displayName": "Options",
            "name": "options",
            "type": "collection",
            "placeholder": "Add Option",
            "default": {},
            "displayOptions": {"show": {"operation": [Operation.QUERY.value]}},
            "options": [
                {
                    "displayName": "Schema Description",
                    "name": "schemaDescription",
                    "type": "string",
                    "default": "",
                    "placeholder": "e.g., Available tables: users (ID, name, email), orders (ID, user_id, amount, date)",
                    "description": "Describe your database schema to help AI agents generate better queries",
                    "typeOptions": {"rows": 3},
                },
                {
                    "displayName": "Read-Only Mode",
                    "name": "readOnlyMode",
                    "type": "boolean",
                    "default": False,
                    "description": "Whether to allow only SELECT queries "
                    "(recommended for AI tools to prevent accidental data modification)",
                },
                {
                    "displayName": "Max Results",
                    "name": "maxResults",
                    "type": "number",
                    "default": 0,
                    "description": "Maximum number of rows to return (0 = no limit)",
                },
            ],
        },
    ],
}
