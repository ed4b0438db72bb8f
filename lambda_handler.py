# lambda_handler.py
# AWS Lambda handlers for the telemetry and diagnostic APIs

from mangum import Mangum
import os
import json
import logging

from telemetry.api import app as telemetry_app
from telemetry.diagnostics import hello_app, check_time_app

logger = logging.getLogger(__name__)

# Wrap FastAPI apps with Mangum for Lambda compatibility
telemetry_handler = Mangum(telemetry_app, lifespan="off")
hello_handler = Mangum(hello_app, lifespan="off")
check_time_handler = Mangum(check_time_app, lifespan="off")


def _internal_error(exc: Exception) -> dict:
    return {
        "statusCode": 500,
        "body": json.dumps({
            "message": "Internal Server Error processing request.",
            "error": str(exc),
            "error_code": "INTERNAL_ERROR"
        }),
        "headers": {
            "Content-Type": "application/json"
        }
    }


def _invoke(asgi_handler: Mangum, event, context) -> dict:
    try:
        return asgi_handler(event, context)
    except Exception as e:
        logger.exception("Lambda invocation failed")
        return _internal_error(e)


# Lambda handlers
def log_answers(event, context):
    """
    Lambda handler for the telemetry API
    Handles /api/log-answers
    """
    return _invoke(telemetry_handler, event, context)


def hello(event, context):
    """Handles /api/hello"""
    return _invoke(hello_handler, event, context)


def check_time(event, context):
    """Handles /api/check-time"""
    return _invoke(check_time_handler, event, context)


# Health check handler
def health_check(event, context):
    """
    Simple health check endpoint
    """
    return {
        "statusCode": 200,
        "body": json.dumps({
            "status": "healthy",
            "service": "Personality Test Telemetry",
            "version": "1.0.0",
            "environment": os.getenv("AWS_LAMBDA_FUNCTION_NAME", "local")
        }),
        "headers": {
            "Content-Type": "application/json",
            "Access-Control-Allow-Origin": "*"
        }
    }
