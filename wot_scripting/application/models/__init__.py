from .node_defaults import NodeDefaults
from .system_info import SystemInfo

__all__ = ["NodeDefaults", "SystemInfo"]
