# Copyright 2025-present DatusAI, Inc.
# Licensed under the Apache License, Version 2.0.
# See http://www.apache.org/licenses/LICENSE-2.0 for details.

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from .client import ClickHouseSession
from .config import ClickHouseCredentials
from .context import ExecutionContext, NodeItem, to_item
from .description import CREDENTIAL_TEST, CREDENTIAL_TYPE, NODE_DESCRIPTION
from .exceptions import CredentialTestError
from .operations import InsertOperation, NodeOperation, QueryOperation, parse_operation

logger = logging.getLogger(__name__)

PROBE_QUERY = "SELECT 1"


class CredentialTestStatus(str, Enum):
    OK = "OK"
    ERROR = "Error"


@dataclass(frozen=True)
class CredentialTestResult:
    status: CredentialTestStatus
    message: str


class ClickHouseNode:
    """Workflow node that queries ClickHouse or bulk inserts the incoming items.

    Each ``execute`` call opens one client from the ``clickhouse`` credentials,
    runs exactly one operation and closes the client on every exit path.
    """

    description: Dict[str, Any] = NODE_DESCRIPTION

    @property
    def credential_tests(self) -> Dict[str, Any]:
        """Credential test callables keyed by the name the description refers to."""
        return {CREDENTIAL_TEST: self.test_credentials}

    def execute(self, context: ExecutionContext) -> List[List[NodeItem]]:
        operation = parse_operation(context)
        credentials = ClickHouseCredentials.from_mapping(context.get_credentials(CREDENTIAL_TYPE))
        with ClickHouseSession(credentials) as session:
            items = self.run(session, operation)
        return context.prepare_output_data(items)

    def run(self, session: ClickHouseSession, operation: NodeOperation) -> List[NodeItem]:
        if isinstance(operation, QueryOperation):
            if operation.options.schema_description:
                logger.debug("Schema description supplied: %s", operation.options.schema_description)
            return [to_item(row) for row in session.query_rows(operation.statement)]
        if isinstance(operation, InsertOperation):
            session.insert_rows(operation.table, operation.rows)
            return []
        raise TypeError(f"Unsupported operation: {operation!r}")

    def test_credentials(self, credential_data: Mapping[str, Any]) -> CredentialTestResult:
        """Probe ClickHouse with ``SELECT 1`` using candidate credentials."""
        try:
            self._probe(credential_data)
        except CredentialTestError as exc:
            logger.info("ClickHouse credential test failed: %s", exc.message)
            return CredentialTestResult(status=CredentialTestStatus.ERROR, message=exc.message)
        return CredentialTestResult(status=CredentialTestStatus.OK, message="Connection successful!")

    def _probe(self, credential_data: Mapping[str, Any]) -> None:
        session: Optional[ClickHouseSession] = None
        try:
            session = ClickHouseSession(ClickHouseCredentials.from_mapping(credential_data))
            session.query_rows(PROBE_QUERY)
        except Exception as exc:
            raise CredentialTestError(str(exc) or type(exc).__name__) from exc
        finally:
            if session is not None:
                session.close()
