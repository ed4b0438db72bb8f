import copy
import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from telemetry.api import create_app
from telemetry.config import Settings
from telemetry.store import TelemetryStore

ORIGIN = "https://www.16personalities.com"

COMMON = {"userId": "u1", "sessionId": "s1", "timestamp": "2024-01-01T00:00:00Z"}

TRAITS = {
    "mind": {"percent": 60, "type": "Introverted"},
    "energy": {"percent": 55, "type": "Intuitive"},
    "nature": {"percent": 70, "type": "Thinking"},
    "tactics": {"percent": 40, "type": "Judging"},
    "identity": {"percent": 50, "type": "Assertive"},
}

RESULT_PAYLOAD = {
    "type": "result",
    "profileUrl": "https://www.16personalities.com/profiles/abcd",
    "mbtiResult": "INTJ Architect",
    "mbtiCode": "INTJ",
    "traits": TRAITS,
    **COMMON,
}


@pytest.fixture
def settings():
    return Settings(environment="test", allowed_origin=ORIGIN)


@pytest.fixture
def mock_store():
    store = MagicMock(spec=TelemetryStore)
    store.execute_atomically.side_effect = lambda statements: len(statements)
    return store


@pytest.fixture
def client(settings, mock_store):
    app = create_app(settings, store=mock_store)
    return TestClient(app)


@pytest.fixture
def result_payload():
    return copy.deepcopy(RESULT_PAYLOAD)


@pytest.fixture
def traits():
    return copy.deepcopy(TRAITS)
