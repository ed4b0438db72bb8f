import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class TelemetryFormatter(logging.Formatter):
    def __init__(self):
        super().__init__(LOG_FORMAT)


def setup_logging(log_level_str: str = "INFO") -> None:
    """Configure a single stdout handler on the root logger."""
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Serverless runtimes may import the app more than once per container
    if any(isinstance(h.formatter, TelemetryFormatter) for h in root_logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(TelemetryFormatter())
    root_logger.addHandler(handler)
    root_logger.info("Logging configured with level: %s", logging.getLevelName(log_level))
