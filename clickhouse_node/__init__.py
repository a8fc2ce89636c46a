# Copyright 2025-present DatusAI, Inc.
# Licensed under the Apache License, Version 2.0.
# See http://www.apache.org/licenses/LICENSE-2.0 for details.

from .config import ClickHouseCredentials, QueryOptions
from .context import ExecutionContext, StaticExecutionContext
from .exceptions import ConnectivityError, CredentialTestError, NodeError, ValidationError
from .node import ClickHouseNode, CredentialTestResult, CredentialTestStatus

__version__ = "0.1.0"
__all__ = [
    "ClickHouseNode",
    "ClickHouseCredentials",
    "QueryOptions",
    "CredentialTestResult",
    "CredentialTestStatus",
    "ExecutionContext",
    "StaticExecutionContext",
    "NodeError",
    "ValidationError",
    "ConnectivityError",
    "CredentialTestError",
    "register",
]


def register(registry):
    """Register the ClickHouse node with a workflow host's node registry."""
    registry.register("clickhouse", ClickHouseNode)
