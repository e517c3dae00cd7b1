"""Configured defaults applied to every incoming operation message."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class NodeDefaults:
    """Values used when an incoming message does not set a field itself."""

    operation_type: Optional[str] = None
    affordance_name: Optional[str] = None
    affordance_type: Optional[str] = None
    filter_mode: str = "affordanceName"
    input_value: Any = None
    input_value_type: str = "str"
    output_var: str = "payload"
    output_var_type: str = "msg"
    output_payload: bool = False
    cache_minutes: float = 15
