# Copyright 2025-present DatusAI, Inc.
# Licensed under the Apache License, Version 2.0.
# See http://www.apache.org/licenses/LICENSE-2.0 for details.


class NodeError(Exception):
    """Base error raised by the ClickHouse node."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(NodeError):
    """Node parameters, credentials or input items were rejected before execution."""


class ConnectivityError(NodeError):
    """The ClickHouse client failed to connect or to run a request."""


class CredentialTestError(NodeError):
    """The credential probe failed."""
