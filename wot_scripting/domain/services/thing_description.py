"""Domain helpers reading the few Thing Description members the core needs."""

from typing import Any, Mapping, Optional, Tuple

from wot_scripting.domain.entities.errors import MissingThingIdentityError
from wot_scripting.domain.entities.operation import AffordanceCategory

IDENTITY_MEMBERS = ("id", "base", "title")


def get_thing_identifier(thing_description: Mapping[str, Any]) -> str:
    """Return the first truthy value among ``id``, ``base`` and ``title``.

    Raises:
        MissingThingIdentityError: If none of them is set.
    """

    for member in IDENTITY_MEMBERS:
        value = thing_description.get(member)
        if value:
            return str(value)
    raise MissingThingIdentityError()


def get_affordances(
    thing_description: Mapping[str, Any], category: AffordanceCategory
) -> Mapping[str, Any]:
    affordances = thing_description.get(category.value)
    if not isinstance(affordances, Mapping):
        return {}
    return affordances


def get_const_input(
    thing_description: Mapping[str, Any], action_name: str
) -> Tuple[bool, Optional[Any]]:
    """Look up the constant input value declared by an action.

    Returns:
        ``(True, value)`` when the action's input schema declares ``const``
        (whatever its value), ``(False, None)`` otherwise.
    """

    action = get_affordances(thing_description, AffordanceCategory.ACTIONS).get(
        action_name
    )
    if not isinstance(action, Mapping):
        return False, None
    input_schema = action.get("input")
    if not isinstance(input_schema, Mapping) or "const" not in input_schema:
        return False, None
    return True, input_schema["const"]
