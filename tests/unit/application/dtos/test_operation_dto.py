from __future__ import annotations

from wot_scripting.application.dtos.operation_dto import (
    OperationMessageDTO,
    OperationOutcomeDTO,
)
from wot_scripting.domain.entities.operation import OperationOutcome, RequestState


def test_message_dto_accepts_field_names_and_aliases() -> None:
    by_alias = OperationMessageDTO.model_validate({"cacheMinutes": 0})
    by_name = OperationMessageDTO(cache_minutes=0)

    assert by_alias.cache_minutes == by_name.cache_minutes == 0
    assert by_name.to_message() == {"cacheMinutes": 0}


def test_message_dto_passes_negative_cache_minutes_through() -> None:
    dto = OperationMessageDTO.model_validate({"cacheMinutes": -1})

    assert dto.to_message() == {"cacheMinutes": -1}


def test_outcome_dto_from_domain_copies_lists() -> None:
    outcome = OperationOutcome(
        state=RequestState.DONE,
        messages=[{"payload": 1}],
        errors=["readProperty on 'x' failed: timeout"],
        affordances=["temperature", "x"],
    )

    dto = OperationOutcomeDTO.from_domain(outcome)
    outcome.messages.append({"payload": 2})

    assert dto.state is RequestState.DONE
    assert dto.messages == [{"payload": 1}]
    assert dto.affordances == ["temperature", "x"]
    assert dto.errors == ["readProperty on 'x' failed: timeout"]
