# telemetry/diagnostics.py
# GET /api/hello and GET /api/check-time: no input, no persistence

import os
import platform
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Optional

from fastapi import FastAPI, Request

from telemetry.config import Settings, load_settings
from telemetry.logging_config import setup_logging
from telemetry.web import install_cors, install_error_handlers, preflight_response

ZONEINFO_DIR = "zoneinfo/"


def _utc_iso(now: datetime) -> str:
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def local_timezone_name(local: datetime) -> str:
    """IANA name of the server zone (TZ, then /etc/localtime), else the abbreviation"""
    name = os.getenv("TZ", "").lstrip(":")
    if not name:
        name = os.path.realpath("/etc/localtime")
    if ZONEINFO_DIR in name:
        name = name.split(ZONEINFO_DIR, 1)[1]
    if name and not name.startswith("/"):
        return name
    return local.tzname()


def build_time_report(settings: Settings, now: Optional[datetime] = None) -> dict:
    """Current server time in several formats plus runtime metadata"""
    now = now or datetime.now(timezone.utc)
    local = now.astimezone()

    return {
        "status": "online",
        "time": {
            "iso": _utc_iso(now),
            "utc": format_datetime(now, usegmt=True),
            "local": local.strftime("%a %b %d %Y %H:%M:%S GMT%z (%Z)"),
            "unixTimestamp": int(now.timestamp()),
        },
        "serverInfo": {
            "timezone": local_timezone_name(local),
            "pythonVersion": platform.python_version(),
            "env": settings.environment,
        },
    }


def create_hello_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(title="Hello API", version="1.0.0")
    install_cors(app, origins=["*"], methods=["GET", "OPTIONS"])
    install_error_handlers(app)

    @app.api_route("/api/hello", methods=["GET", "OPTIONS"])
    def hello(request: Request):
        if request.method == "OPTIONS":
            return preflight_response()

        return {
            "message": "Hello, World!",
            "timestamp": _utc_iso(datetime.now(timezone.utc)),
            "environment": settings.environment,
        }

    return app


def create_check_time_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(title="Server Time API", version="1.0.0")
    install_cors(app, origins=[settings.allowed_origin], methods=["GET", "OPTIONS"])
    install_error_handlers(app)

    @app.api_route("/api/check-time", methods=["GET", "OPTIONS"])
    def check_time(request: Request):
        if request.method == "OPTIONS":
            return preflight_response()
        return build_time_report(settings)

    return app


settings = load_settings()
setup_logging(settings.log_level)
hello_app = create_hello_app(settings)
check_time_app = create_check_time_app(settings)
