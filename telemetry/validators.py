# telemetry/validators.py
# Shape checks over decoded JSON. Nothing here touches the database.

import json
import logging
import math
from typing import Any, Dict, List

from telemetry.errors import ValidationError
from telemetry.models import (
    EVENT_NAMES,
    PROFILE_URL_PREFIX,
    TRAIT_NAMES,
    CommonFields,
    Event,
    TestResult,
    Traits,
)

logger = logging.getLogger(__name__)

COMMON_FIELDS_MESSAGE = (
    "Missing or invalid required fields: userId (string), sessionId (string), timestamp (string)"
)


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def validate_common(payload: Dict[str, Any]) -> CommonFields:
    """Check userId, sessionId and timestamp are present, non-empty strings."""
    missing = [
        field for field in ("userId", "sessionId", "timestamp")
        if not _is_non_empty_str(payload.get(field))
    ]
    if missing:
        raise ValidationError(COMMON_FIELDS_MESSAGE, detail=f"Invalid fields: {', '.join(missing)}")

    return CommonFields(
        user_id=payload["userId"],
        session_id=payload["sessionId"],
        timestamp=payload["timestamp"],
    )


def validate_event(payload: Dict[str, Any]) -> Event:
    event_name = payload.get("eventName")
    if event_name not in EVENT_NAMES:
        raise ValidationError(f"Invalid payload type specified: '{payload.get('type')}'")
    return Event(event_name=event_name)


def _is_valid_percent(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and 0 <= value <= 100


def validate_traits(traits: Any) -> bool:
    """
    True iff all five traits are present, each with a percent in [0, 100]
    and a non-blank type label. Never raises.
    """
    if not isinstance(traits, dict):
        return False

    for name in TRAIT_NAMES:
        trait = traits.get(name)
        if (
            not isinstance(trait, dict)
            or not _is_valid_percent(trait.get("percent"))
            or not isinstance(trait.get("type"), str)
            or not trait["type"].strip()
        ):
            logger.warning("Trait validation failed for %s: %r", name, trait)
            return False

    return True


def _is_valid_answer(answer: Any) -> bool:
    if not isinstance(answer, dict):
        return False
    # question_number 0 and answer_value null/0/"" are all legitimate answers
    if answer.get("question_number") is None:
        return False
    if not answer.get("question_text"):
        return False
    return "answer_value" in answer


def validate_answers(answers: Any) -> List[Dict[str, Any]]:
    """
    Full pre-pass over the answers array. Raises on the first bad element,
    naming its position; returns the list untouched otherwise.
    """
    if not isinstance(answers, list) or not answers:
        raise ValidationError('Missing or empty "answers" array.')

    for index, answer in enumerate(answers):
        if not _is_valid_answer(answer):
            raise ValidationError(
                "Data validation failed for answers",
                detail=f"Invalid answer format in array at index {index}: {json.dumps(answer, default=str)}",
            )

    return answers


def validate_test_result(payload: Dict[str, Any]) -> TestResult:
    profile_url = payload.get("profileUrl")
    if not isinstance(profile_url, str) or not profile_url.startswith(PROFILE_URL_PREFIX):
        raise ValidationError("Missing or invalid profileUrl format.")

    mbti_result = payload.get("mbtiResult")
    if not _is_non_empty_str(mbti_result):
        raise ValidationError("Missing or invalid mbtiResult (full string).")

    mbti_code = payload.get("mbtiCode")
    if mbti_code is not None and not isinstance(mbti_code, str):
        raise ValidationError("Invalid mbtiCode format (should be string or null).")

    traits = payload.get("traits")
    if not validate_traits(traits):
        logger.error("Invalid traits object received: %r", traits)
        raise ValidationError("Invalid or incomplete traits object.")

    return TestResult(
        profile_url=profile_url,
        mbti_result=mbti_result,
        mbti_code=mbti_code,
        traits=Traits(**{name: traits[name] for name in TRAIT_NAMES}),
    )
