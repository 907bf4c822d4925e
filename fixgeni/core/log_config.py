import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Loggers this service writes to; uvicorn's own access log is left as is.
APP_LOGGERS = ("fixgeni", "seed", "access", "maintenance")


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler for the app loggers. Safe to call more than once."""
    lvl = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    if not isinstance(lvl, int):
        lvl = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    for name in APP_LOGGERS:
        lg = logging.getLogger(name)
        lg.handlers = [handler]
        lg.setLevel(lvl)
        lg.propagate = False
