# telemetry/web.py
# HTTP plumbing shared by every endpoint app: CORS, preflight and error mapping

import logging
from typing import List

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException

from telemetry.errors import MethodError, TelemetryError

logger = logging.getLogger(__name__)


class FixedOriginCORSMiddleware(CORSMiddleware):
    """
    CORSMiddleware that answers every preflight with 200 and an empty body.
    The fixed CORS headers are sent regardless of the requested origin or headers.
    """

    def preflight_response(self, request_headers: Headers) -> Response:
        headers = dict(self.preflight_headers)
        if "Access-Control-Allow-Origin" not in headers:
            headers["Access-Control-Allow-Origin"] = self.allow_origins[0]
        return Response(status_code=200, headers=headers)


def install_cors(app: FastAPI, origins: List[str], methods: List[str], allow_credentials: bool = False) -> None:
    app.add_middleware(
        FixedOriginCORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=methods,
        allow_headers=["Content-Type"],
    )


def preflight_response() -> Response:
    """OPTIONS short-circuit: 200, empty body, no business logic"""
    return Response(status_code=200)


def error_response(exc: TelemetryError) -> JSONResponse:
    headers = {"Allow": exc.allow} if isinstance(exc, MethodError) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=headers)


def install_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(TelemetryError)
    async def telemetry_error_handler(request: Request, exc: TelemetryError):
        if exc.kind == "validation":
            logger.warning("Rejected %s %s: %s (%s)", request.method, request.url.path, exc.message, exc.detail)
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Routing errors (unknown path, wrong verb) keep the {message} body shape
        if exc.status_code == 405:
            allow = (exc.headers or {}).get("Allow", "")
            return error_response(MethodError(allow=allow))
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)
