# telemetry/pipeline.py
# validate -> build_statements -> execute_atomically, parameterized per payload type

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

from telemetry.errors import PersistenceError, ValidationError
from telemetry.models import CommonFields
from telemetry.statements import (
    Statement,
    build_answer_statements,
    build_event_statement,
    build_result_statement,
)
from telemetry.store import TelemetryStore
from telemetry.validators import (
    validate_answers,
    validate_common,
    validate_event,
    validate_test_result,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayloadType:
    name: str
    validate: Callable[[Dict[str, Any]], Any]
    build_statements: Callable[[CommonFields, Any], List[Statement]]
    status_code: int
    success_message: Callable[[Any], str]
    failure_message: Callable[[Any], str]


PAYLOAD_TYPES: Dict[str, PayloadType] = {
    "event": PayloadType(
        name="event",
        validate=validate_event,
        build_statements=build_event_statement,
        status_code=200,
        success_message=lambda event: f"{event.event_name} event received (logged server-side)",
        failure_message=lambda event: f"Error logging {event.event_name} event",
    ),
    "answers": PayloadType(
        name="answers",
        validate=lambda payload: validate_answers(payload.get("answers")),
        build_statements=build_answer_statements,
        status_code=201,
        success_message=lambda answers: f"Successfully logged {len(answers)} answers.",
        failure_message=lambda answers: "Database error inserting answers",
    ),
    "result": PayloadType(
        name="result",
        validate=validate_test_result,
        build_statements=build_result_statement,
        status_code=201,
        success_message=lambda result: "Test result logged successfully.",
        failure_message=lambda result: "Database error inserting test result",
    ),
}


def resolve_payload_type(payload: Dict[str, Any]) -> PayloadType:
    type_name = payload.get("type")
    payload_type = PAYLOAD_TYPES.get(type_name) if isinstance(type_name, str) else None
    if payload_type is None:
        raise ValidationError(f"Invalid payload type specified: '{type_name}'")
    return payload_type


def process_payload(payload: Any, store: TelemetryStore) -> Tuple[int, str]:
    """
    Validate and persist one telemetry payload.
    Every statement is built before the first one runs, so a validation
    failure never leaves rows behind. Returns (status_code, message).
    """
    if not isinstance(payload, dict):
        raise ValidationError("Invalid payload format. Expected JSON object.")

    common = validate_common(payload)
    payload_type = resolve_payload_type(payload)
    data = payload_type.validate(payload)
    statements = payload_type.build_statements(common, data)

    logger.info(
        "Logging %s payload (%d row(s)) for User: %s, Session: %s",
        payload_type.name, len(statements), common.user_id, common.session_id,
    )

    try:
        store.execute_atomically(statements)
    except PersistenceError as exc:
        logger.error("Database error logging %s payload: %s", payload_type.name, exc.detail)
        raise PersistenceError(payload_type.failure_message(data), detail=exc.detail) from exc

    return payload_type.status_code, payload_type.success_message(data)
