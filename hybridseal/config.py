import os
import logging

logger = logging.getLogger(__name__)


def env_int(name, default):
    """Integer from environment variable *name*, or *default* if unset or not a number."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default


# ---------------------------------------------------------------------------
# Key generation
# ---------------------------------------------------------------------------
DEFAULT_KEY_STRENGTH = env_int("HYBRIDSEAL_KEY_STRENGTH", 2048)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("HYBRIDSEAL_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s  %(name)-24s  %(levelname)-7s  %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level=None):
    """
    Install a root handler with the project format.  Library modules only
    create loggers; applications (the CLI) decide where records go.
    """
    name = (level or LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
