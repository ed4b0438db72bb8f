"""
Lambda entry points driven with API Gateway (REST) proxy events
"""

import json

from lambda_handler import check_time, health_check, hello, log_answers


def _api_gateway_event(method, path, body=None, headers=None):
    return {
        "resource": path,
        "path": path,
        "httpMethod": method,
        "headers": headers or {},
        "multiValueHeaders": {},
        "queryStringParameters": None,
        "multiValueQueryStringParameters": None,
        "pathParameters": None,
        "stageVariables": None,
        "requestContext": {
            "resourcePath": path,
            "httpMethod": method,
            "path": path,
            "stage": "prod",
            "identity": {"sourceIp": "127.0.0.1"},
        },
        "body": body,
        "isBase64Encoded": False,
    }


def test_health_check():
    response = health_check({}, {})

    assert response["statusCode"] == 200
    body = json.loads(response["body"])
    assert body["status"] == "healthy"
    assert body["service"] == "Personality Test Telemetry"


def test_hello_lambda():
    response = hello(_api_gateway_event("GET", "/api/hello"), {})

    assert response["statusCode"] == 200
    assert json.loads(response["body"])["message"] == "Hello, World!"


def test_check_time_lambda():
    response = check_time(_api_gateway_event("GET", "/api/check-time"), {})

    assert response["statusCode"] == 200
    assert json.loads(response["body"])["status"] == "online"


def test_log_answers_lambda_rejects_bad_payload():
    event = _api_gateway_event(
        "POST",
        "/api/log-answers",
        body=json.dumps({"type": "answers", "userId": "u1"}),
        headers={"Content-Type": "application/json"},
    )
    response = log_answers(event, {})

    assert response["statusCode"] == 400
    assert json.loads(response["body"])["message"].startswith("Missing or invalid required fields")


def test_unrecognised_event_becomes_internal_error():
    response = log_answers({"unexpected": True}, {})

    assert response["statusCode"] == 500
    assert json.loads(response["body"])["error_code"] == "INTERNAL_ERROR"
