# garden_advisor/log.py

import logging
import sys

# ------------------------------------------------
# Package logger: modules log via getLogger(__name__)
# and propagate here.
# ------------------------------------------------
logger = logging.getLogger("garden_advisor")

_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stdout handler once and set the package log level."""
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)

    resolved = logging.getLevelName(str(level).upper())
    logger.setLevel(resolved if isinstance(resolved, int) else logging.INFO)
    return logger
