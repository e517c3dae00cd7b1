from .context_store import ContextRegistry, InMemoryContextStore

__all__ = ["ContextRegistry", "InMemoryContextStore"]
