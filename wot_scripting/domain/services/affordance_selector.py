"""Domain service selecting the affordances an operation targets."""

from typing import Any, FrozenSet, List, Mapping, Optional

from wot_scripting.domain.entities.errors import IllegalFilterModeError
from wot_scripting.domain.entities.operation import (
    AffordanceFilter,
    FilterMode,
    OperationKind,
)
from wot_scripting.domain.services.thing_description import get_affordances

SEMANTIC_TYPE_MEMBER = "@type"


def normalize_semantic_types(raw: Any) -> Optional[FrozenSet[str]]:
    """Normalize an ``@type`` member to a set of strings.

    A single string becomes a one-element set and a list keeps its string
    members. Any other shape (missing member included) yields ``None`` so the
    caller can skip the affordance.
    """

    if isinstance(raw, str):
        return frozenset((raw,))
    if isinstance(raw, list):
        return frozenset(item for item in raw if isinstance(item, str))
    return None


def _select_by_type(affordances: Mapping[str, Any], semantic_type: Any) -> List[str]:
    selected: List[str] = []
    for name, affordance in affordances.items():
        if not isinstance(affordance, Mapping):
            continue
        types = normalize_semantic_types(affordance.get(SEMANTIC_TYPE_MEMBER))
        if types is None:
            continue
        if semantic_type in types:
            selected.append(name)
    return selected


def select_affordances(
    thing_description: Mapping[str, Any],
    operation_kind: Any,
    affordance_filter: AffordanceFilter,
) -> List[str]:
    """Return the names of the affordances an operation should run on.

    The order is the order of the affordances in the Thing Description. An
    empty list means the request is dropped without error.

    Raises:
        UnknownOperationKindError: If the operation kind is not known.
        IllegalFilterModeError: If the filter mode is not supported.
    """

    category = OperationKind.parse(operation_kind).category
    affordances = get_affordances(thing_description, category)
    mode = affordance_filter.mode

    if mode == FilterMode.BY_NAME:
        if affordance_filter.name in affordances:
            return [affordance_filter.name]
        return []

    if mode not in (FilterMode.BY_TYPE, FilterMode.BOTH):
        raise IllegalFilterModeError(mode)

    selected = _select_by_type(affordances, affordance_filter.type)
    if mode == FilterMode.BOTH:
        # name is the precise target, type only guards it
        if affordance_filter.name in selected:
            return [affordance_filter.name]
        return []
    return selected
