from .affordance_selector import normalize_semantic_types, select_affordances
from .thing_description import get_affordances, get_const_input, get_thing_identifier

__all__ = [
    "get_affordances",
    "get_const_input",
    "get_thing_identifier",
    "normalize_semantic_types",
    "select_affordances",
]
