from typing import Any, Dict
from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest
from yarl import URL

from app.exceptions import FetchError, NotFoundError, PrerequisiteMissingError
from app.models.action import ActionConfiguration
from app.services.entity.object_service import ObjectService
from app.services.entity.synchronization_service import SynchronizationService
from app.services.sync.betrokkene_service import AssigneeToBetrokkeneService, RequestorToBetrokkeneService
from tests.mock_data import (
    ASSIGNEE_REFERENCE,
    BETROKKENE_SCHEMA,
    CASE_UUID,
    REQUESTOR_REFERENCE,
    SOURCE_V1,
    TAAK_SCHEMA,
    assignee_configuration,
    requestor_configuration,
)
from tests.utils import mock_response

PATCHED_MODULE = "app.services.api.api_service.request"


@pytest.fixture()
def taak_id(object_service: ObjectService) -> str:
    return str(object_service.create(TAAK_SCHEMA, {"titel": "Bel de aanvrager"}).id)


@pytest.fixture()
def payload(taak_id: str) -> Dict[str, Any]:
    return {"case_uuid": CASE_UUID, "taakId": taak_id}


@patch(PATCHED_MODULE)
def test_requestor_should_become_betrokkene_of_taak(
    mock_request: MagicMock,
    requestor_service: RequestorToBetrokkeneService,
    object_service: ObjectService,
    synchronization_service: SynchronizationService,
    payload: Dict[str, Any],
    mock_case: Dict[str, Any],
) -> None:
    mock_request.return_value = mock_response(200, mock_case)

    result = requestor_service.synchronize(payload, ActionConfiguration.from_dict(requestor_configuration))

    assert URL(mock_request.call_args.kwargs["url"]).path == f"/api/v1/case/{CASE_UUID}"

    betrokkene = object_service.get_object(result["requestorBetrokkeneId"])
    assert betrokkene is not None
    assert betrokkene.schema_ref == BETROKKENE_SCHEMA
    assert betrokkene.data == {
        "naam": "J. Jansen",
        "bsn": "999993653",
        "email": "j.jansen@example.com",
        "telefoonnummer": "0612345678",
    }

    taak = object_service.get_object(payload["taakId"])
    assert taak is not None
    assert taak.data["betrokkenen"] == [result["requestorBetrokkeneId"]]

    links = synchronization_service.find(source_ref=SOURCE_V1, external_id=REQUESTOR_REFERENCE)
    assert len(links) == 1


@patch(PATCHED_MODULE)
def test_requestor_twice_should_not_duplicate_betrokkene(
    mock_request: MagicMock,
    requestor_service: RequestorToBetrokkeneService,
    object_service: ObjectService,
    payload: Dict[str, Any],
    mock_case: Dict[str, Any],
) -> None:
    mock_request.return_value = mock_response(200, mock_case)
    configuration = ActionConfiguration.from_dict(requestor_configuration)

    first = requestor_service.synchronize(payload, configuration)
    second = requestor_service.synchronize(payload, configuration)

    assert first["requestorBetrokkeneId"] == second["requestorBetrokkeneId"]
    assert len(object_service.find(schema_ref=BETROKKENE_SCHEMA)) == 1
    taak = object_service.get_object(payload["taakId"])
    assert taak is not None
    assert taak.data["betrokkenen"] == [first["requestorBetrokkeneId"]]


@patch(PATCHED_MODULE)
def test_requestor_without_personal_number_should_stop(
    mock_request: MagicMock,
    requestor_service: RequestorToBetrokkeneService,
    object_service: ObjectService,
    payload: Dict[str, Any],
    mock_case: Dict[str, Any],
) -> None:
    del mock_case["result"]["instance"]["requestor"]["instance"]["subject"]["instance"]["personal_number"]
    mock_request.return_value = mock_response(200, mock_case)

    with pytest.raises(PrerequisiteMissingError):
        requestor_service.synchronize(payload, ActionConfiguration.from_dict(requestor_configuration))

    assert object_service.find(schema_ref=BETROKKENE_SCHEMA) == []


@patch(PATCHED_MODULE)
def test_assignee_should_become_betrokkene_of_taak(
    mock_request: MagicMock,
    assignee_service: AssigneeToBetrokkeneService,
    object_service: ObjectService,
    synchronization_service: SynchronizationService,
    payload: Dict[str, Any],
    mock_case: Dict[str, Any],
) -> None:
    mock_request.return_value = mock_response(200, mock_case)

    result = assignee_service.synchronize(payload, ActionConfiguration.from_dict(assignee_configuration))

    betrokkene = object_service.get_object(result["assigneeBetrokkeneId"])
    assert betrokkene is not None
    # An email equal to its own key name is dropped
    assert betrokkene.data == {"naam": "Behandelaar"}
    assert synchronization_service.find(external_id=ASSIGNEE_REFERENCE)[0].local_id == betrokkene.id


@pytest.mark.parametrize("missing", ["case_uuid", "taakId"])
@patch(PATCHED_MODULE)
def test_betrokkene_should_require_ids(
    mock_request: MagicMock,
    missing: str,
    assignee_service: AssigneeToBetrokkeneService,
    payload: Dict[str, Any],
) -> None:
    del payload[missing]

    with pytest.raises(PrerequisiteMissingError):
        assignee_service.synchronize(payload, ActionConfiguration.from_dict(assignee_configuration))

    mock_request.assert_not_called()


@patch(PATCHED_MODULE)
def test_betrokkene_should_stop_for_unknown_taak_before_fetching_case(
    mock_request: MagicMock,
    requestor_service: RequestorToBetrokkeneService,
    synchronization_service: SynchronizationService,
    object_service: ObjectService,
) -> None:
    with pytest.raises(NotFoundError):
        requestor_service.synchronize(
            {"case_uuid": CASE_UUID, "taakId": str(uuid4())},
            ActionConfiguration.from_dict(requestor_configuration),
        )

    mock_request.assert_not_called()
    assert synchronization_service.find() == []
    assert object_service.find(BETROKKENE_SCHEMA) == []


@pytest.mark.parametrize("key, value", [("case_uuid", {"id": CASE_UUID}), ("taakId", 42)])
@patch(PATCHED_MODULE)
def test_betrokkene_should_reject_malformed_ids(
    mock_request: MagicMock,
    key: str,
    value: Any,
    assignee_service: AssigneeToBetrokkeneService,
    payload: Dict[str, Any],
) -> None:
    payload[key] = value

    with pytest.raises(PrerequisiteMissingError):
        assignee_service.synchronize(payload, ActionConfiguration.from_dict(assignee_configuration))

    mock_request.assert_not_called()


@patch(PATCHED_MODULE)
def test_betrokkene_should_raise_fetch_error(
    mock_request: MagicMock,
    requestor_service: RequestorToBetrokkeneService,
    payload: Dict[str, Any],
) -> None:
    mock_request.return_value = mock_response(404, {"error": "not found"})

    with pytest.raises(FetchError):
        requestor_service.synchronize(payload, ActionConfiguration.from_dict(requestor_configuration))
