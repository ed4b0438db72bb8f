# telemetry/statements.py
# Validated DTOs -> parameterized INSERT statements

from datetime import datetime, timezone
from typing import Any, Dict, List, NamedTuple, Tuple

from telemetry.errors import ValidationError
from telemetry.models import TRAIT_NAMES, Answer, CommonFields, Event, TestResult

EVENTS_TABLE = "test_events"
ANSWERS_TABLE = "test_answers"
RESULTS_TABLE = "test_results"


class Statement(NamedTuple):
    sql: str
    params: Tuple[Any, ...]


def parse_timestamp(value: str) -> datetime:
    """ISO-8601 string -> naive UTC datetime, as MySQL DATETIME expects"""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(
            "Missing or invalid required fields: timestamp must be ISO-8601",
            detail=f"Unparseable timestamp: {value}",
        )

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def build_event_statement(common: CommonFields, event: Event) -> List[Statement]:
    query = f"""
        INSERT INTO {EVENTS_TABLE} (user_id, session_id, event_name, event_timestamp)
        VALUES (%s, %s, %s, %s)
    """
    return [Statement(query, (
        common.user_id,
        common.session_id,
        event.event_name,
        parse_timestamp(common.timestamp),
    ))]


def build_answer_statements(common: CommonFields, answers: List[Dict[str, Any]]) -> List[Statement]:
    """One statement per answer, all stamped with the request's ids and timestamp"""
    event_timestamp = parse_timestamp(common.timestamp)
    query = f"""
        INSERT INTO {ANSWERS_TABLE}
        (user_id, session_id, question_number, question_text,
         answer_value, answer_label, event_timestamp)
        VALUES (%s, %s, %s, %s, %s, %s, %s)
    """

    statements = []
    for raw in answers:
        answer = Answer(**raw)
        statements.append(Statement(query, (
            common.user_id,
            common.session_id,
            answer.question_number,
            answer.question_text,
            answer.answer_value,
            answer.label,
            event_timestamp,
        )))
    return statements


def build_result_statement(common: CommonFields, result: TestResult) -> List[Statement]:
    trait_columns = []
    trait_params = []
    for name in TRAIT_NAMES:
        score = getattr(result.traits, name)
        trait_columns += [f"{name}_percent", f"{name}_type"]
        trait_params += [score.percent, score.type]

    columns = ["user_id", "session_id", "mbti_type", "profile_url", *trait_columns, "result_timestamp"]
    placeholders = ", ".join(["%s"] * len(columns))
    query = f"""
        INSERT INTO {RESULTS_TABLE} ({", ".join(columns)})
        VALUES ({placeholders})
    """
    return [Statement(query, (
        common.user_id,
        common.session_id,
        result.mbti_code,
        result.profile_url,
        *trait_params,
        parse_timestamp(common.timestamp),
    ))]
