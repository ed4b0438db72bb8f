# telemetry/api.py
# POST /api/log-answers: events, answers and test results from the test page

import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from telemetry.config import Settings, load_settings
from telemetry.errors import TelemetryError, ValidationError
from telemetry.logging_config import setup_logging
from telemetry.models import MessageResponse
from telemetry.pipeline import process_payload
from telemetry.store import TelemetryStore
from telemetry.web import install_cors, install_error_handlers, preflight_response

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(request: Request) -> TelemetryStore:
    """The store built once in create_app()"""
    return request.app.state.store


@router.api_route("/api/log-answers", methods=["POST", "OPTIONS"])
async def log_answers(request: Request, store: TelemetryStore = Depends(get_store)):
    """
    Log one telemetry payload.

    - type "event": test_started / test_finished marker -> 200
    - type "answers": every answer committed in one transaction -> 201
    - type "result": final personality result with trait scores -> 201
    """
    if request.method == "OPTIONS":
        return preflight_response()

    try:
        payload = await request.json()
    except ValueError as exc:
        raise ValidationError("Data validation or parsing failed", detail=str(exc))

    try:
        status_code, message = await run_in_threadpool(process_payload, payload, store)
    except TelemetryError:
        raise
    except Exception as exc:
        logger.exception("Error processing request")
        raise TelemetryError("Internal Server Error processing request.", detail=str(exc)) from exc

    body = MessageResponse(message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def create_app(settings: Optional[Settings] = None, store: Optional[TelemetryStore] = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(
        title="Personality Test Telemetry API",
        description="Collects test events, answers and results from the 16personalities test page",
        version="1.0.0",
    )
    install_cors(app, origins=[settings.allowed_origin], methods=["POST", "OPTIONS"], allow_credentials=True)
    install_error_handlers(app)

    app.state.store = store if store is not None else TelemetryStore(settings.database)
    app.include_router(router)
    return app


settings = load_settings()
setup_logging(settings.log_level)
app = create_app(settings)

# ==================== RUN SERVER ====================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("telemetry.api:app", host="0.0.0.0", port=8000, reload=True)
