"""
Logging setup for the onboarding service
"""

import logging
import sys

LOG_FORMAT = '%(asctime)s %(levelname)s [{service}] %(name)s: %(message)s'


def setup_logging(service_name: str, log_level: str = 'INFO') -> logging.Logger:
    """
    Configure root logging once for the service

    Args:
        service_name: Name stamped on every log line
        log_level: Level name (e.g. 'DEBUG', 'INFO')

    Returns:
        Logger named after the service
    """
    root = logging.getLogger()
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    root.setLevel(level)

    # Replace our own handler on repeated calls
    for handler in list(root.handlers):
        if getattr(handler, '_onboarding_handler', False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT.format(service=service_name)))
    handler._onboarding_handler = True
    root.addHandler(handler)

    return logging.getLogger(service_name)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger"""
    return logging.getLogger(name)
