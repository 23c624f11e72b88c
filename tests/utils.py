import json
from typing import Any
from unittest.mock import MagicMock

from app.db.db import Database
from app.db.entities.object_entity import ObjectEntity
from app.db.entities.synchronization import Synchronization


def mock_response(status_code: int = 200, body: Any = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    if body is None:
        response.json.side_effect = json.JSONDecodeError("Expecting value", "", 0)
        response.text = ""
    else:
        response.json.return_value = body
        response.text = json.dumps(body)
    return response


def insert_object(db: Database, object_id: Any, schema_ref: str, data: dict[str, Any]) -> ObjectEntity:
    with db.get_db_session() as db_session:
        entity = ObjectEntity(id=object_id, schema_ref=schema_ref, data=data)
        db_session.add(entity)
        db_session.commit()
    return entity


def insert_synchronization(
    db: Database,
    source_ref: str,
    schema_ref: str,
    local_id: Any,
    external_id: str | None,
    is_removed: bool = False,
) -> Synchronization:
    with db.get_db_session() as db_session:
        link = Synchronization(
            source_ref=source_ref,
            schema_ref=schema_ref,
            local_id=local_id,
            external_id=external_id,
            is_removed=is_removed,
        )
        db_session.add(link)
        db_session.commit()
    return link
