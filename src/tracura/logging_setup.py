"""
Tracura - Logging Setup
"""
import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """
    Configure root logging for applications embedding the core.

    Args:
        level: Logging level (name or number)
    """
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # Connection chatter from requests/urllib3
    logging.getLogger("urllib3").setLevel(logging.WARNING)
