"""Domain abstraction for shared flow and global context state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Protocol


class IContextStore(Protocol):
    """Key/value store shared between requests."""

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def keys(self) -> List[str]:
        ...

    def snapshot(self) -> Dict[str, Any]:
        """Return a copy of every stored value."""
        ...


@dataclass(slots=True, frozen=True)
class NodeContext:
    """Context stores visible to one request."""

    flow: IContextStore
    global_: IContextStore
