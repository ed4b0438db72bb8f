# telemetry/models.py
# Request DTOs; each lives for a single request

from typing import Any, Literal, Optional

from pydantic import BaseModel

# ==================== CONSTANTS ====================

EVENT_NAMES = ("test_started", "test_finished")
TRAIT_NAMES = ("mind", "energy", "nature", "tactics", "identity")
PROFILE_URL_PREFIX = "https://www.16personalities.com/profiles/"
DEFAULT_ANSWER_LABEL = "N/A"

# ==================== PAYLOAD MODELS ====================

class CommonFields(BaseModel):
    user_id: str
    session_id: str
    timestamp: str

class Event(BaseModel):
    event_name: Literal["test_started", "test_finished"]

class Answer(BaseModel):
    question_number: Any
    question_text: Any
    answer_value: Any
    answer_label: Optional[Any] = None

    @property
    def label(self) -> Any:
        return self.answer_label or DEFAULT_ANSWER_LABEL

class TraitScore(BaseModel):
    percent: float
    type: str

class Traits(BaseModel):
    mind: TraitScore
    energy: TraitScore
    nature: TraitScore
    tactics: TraitScore
    identity: TraitScore

class TestResult(BaseModel):
    profile_url: str
    mbti_result: str
    mbti_code: Optional[str] = None
    traits: Traits

# ==================== RESPONSE MODELS ====================

class MessageResponse(BaseModel):
    message: str
    error: Optional[str] = None
