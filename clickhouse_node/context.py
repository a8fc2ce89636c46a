# Copyright 2025-present DatusAI, Inc.
# Licensed under the Apache License, Version 2.0.
# See http://www.apache.org/licenses/LICENSE-2.0 for details.

"""Host capabilities the node needs, expressed as an injected interface."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Protocol, Sequence, runtime_checkable

JsonObject = Dict[str, Any]
NodeItem = Dict[str, Any]

_MISSING = object()


def to_item(payload: JsonObject) -> NodeItem:
    return {"json": payload}


@runtime_checkable
class ExecutionContext(Protocol):
    """What the node asks of the workflow host during one invocation."""

    def get_node_parameter(self, name: str, item_index: int = 0, default: Any = ...) -> Any:
        ...

    def get_credentials(self, name: str) -> Mapping[str, Any]:
        ...

    def get_input_data(self) -> List[NodeItem]:
        ...

    def prepare_output_data(self, items: List[NodeItem]) -> List[List[NodeItem]]:
        ...


@dataclass
class StaticExecutionContext:
    """In-memory ``ExecutionContext`` for embedding the node outside a workflow host.

    Parameters are the same for every item index.
    """

    parameters: Dict[str, Any] = field(default_factory=dict)
    credentials: Dict[str, Mapping[str, Any]] = field(default_factory=dict)
    input_items: Sequence[NodeItem] = field(default_factory=list)

    def get_node_parameter(self, name: str, item_index: int = 0, default: Any = _MISSING) -> Any:
        if name in self.parameters:
            return self.parameters[name]
        if default is _MISSING:
            raise KeyError(f"Node parameter {name!r} is not set")
        return default

    def get_credentials(self, name: str) -> Mapping[str, Any]:
        try:
            return self.credentials[name]
        except KeyError:
            raise KeyError(f"No credentials of type {name!r}") from None

    def get_input_data(self) -> List[NodeItem]:
        return list(self.input_items)

    def prepare_output_data(self, items: List[NodeItem]) -> List[List[NodeItem]]:
        return [list(items)]
