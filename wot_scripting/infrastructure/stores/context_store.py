"""In-memory flow and global context stores - Infrastructure layer."""

from __future__ import annotations

import copy
from typing import Any, Dict, List

from wot_scripting.domain.ports.context_store import IContextStore, NodeContext


class InMemoryContextStore(IContextStore):
    """Process-local key/value store. Contents are lost on restart."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._values: Dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def keys(self) -> List[str]:
        return list(self._values)

    def snapshot(self) -> Dict[str, Any]:
        return copy.deepcopy(self._values)


class ContextRegistry:
    """Owns the global store and one flow store per flow id."""

    DEFAULT_FLOW = "default"

    def __init__(self) -> None:
        self.global_store = InMemoryContextStore("global")
        self._flows: Dict[str, InMemoryContextStore] = {}

    def flow(self, flow_id: str = DEFAULT_FLOW) -> InMemoryContextStore:
        store = self._flows.get(flow_id)
        if store is None:
            store = self._flows[flow_id] = InMemoryContextStore(f"flow:{flow_id}")
        return store

    def flow_ids(self) -> List[str]:
        return list(self._flows)

    def node_context(self, flow_id: str = DEFAULT_FLOW) -> NodeContext:
        return NodeContext(flow=self.flow(flow_id), global_=self.global_store)
