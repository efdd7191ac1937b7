"""
Configuration for the onboarding form.
Values are read from the environment at call time so a missing endpoint
surfaces when a submission is attempted, not at import.
"""

import os
from typing import Optional

ONBOARD_URL_ENV = 'ONBOARD_URL'
ONBOARD_TIMEOUT_ENV = 'ONBOARD_TIMEOUT'


def get_onboard_url() -> Optional[str]:
    """Submission endpoint, or None when not configured"""
    url = os.getenv(ONBOARD_URL_ENV, '').strip()
    return url or None


def get_onboard_timeout() -> Optional[float]:
    """Transport timeout in seconds; None leaves it to the transport"""
    raw = os.getenv(ONBOARD_TIMEOUT_ENV, '').strip()
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"{ONBOARD_TIMEOUT_ENV} must be a number of seconds, got {raw!r}")
    return timeout if timeout > 0 else None
