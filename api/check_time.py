import os
import sys

# Add project root to sys.path for local imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from telemetry.diagnostics import check_time_app as app


def handler(request):
    """Vercel serverless handler for the server time diagnostics."""
    from mangum import Mangum

    asgi_handler = Mangum(app, lifespan="off")
    return asgi_handler(request, None)
