"""
Submission Controller for Client Onboarding
Owns one form instance: the draft, validation errors, and the outcome of
sending the validated record to the onboarding endpoint.
"""

import threading
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import requests

from .config import get_onboard_url
from .log import get_logger
from .validation import FIELD_NAMES, NormalizedRecord, empty_draft, validate_onboarding_form

logger = get_logger(__name__)

DEFAULT_SUCCESS_MESSAGE = 'Form submitted successfully!'
NETWORK_ERROR_MESSAGE = 'Network error occurred. Please check your connection and try again.'
MISSING_ENDPOINT_MESSAGE = 'Onboarding endpoint is not configured. Set ONBOARD_URL in your environment.'


class FormState(str, Enum):
    IDLE = 'idle'
    VALIDATING = 'validating'
    INVALID = 'invalid'
    VALID = 'valid'
    SUBMITTING = 'submitting'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'


EDITABLE_STATES = (FormState.IDLE, FormState.INVALID, FormState.FAILED)
BUSY_STATES = (FormState.VALIDATING, FormState.VALID, FormState.SUBMITTING)
RESETTABLE_STATES = (FormState.SUCCEEDED, FormState.FAILED)


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of the current (or last) submit attempt"""
    kind: str
    message: str = ''
    record: Optional[NormalizedRecord] = None

    IDLE = 'idle'
    IN_FLIGHT = 'in_flight'
    SUCCESS = 'success'
    FAILURE = 'failure'

    @classmethod
    def idle(cls) -> 'SubmissionOutcome':
        return cls(cls.IDLE)

    @classmethod
    def in_flight(cls) -> 'SubmissionOutcome':
        return cls(cls.IN_FLIGHT)

    @classmethod
    def success(cls, record: NormalizedRecord, message: str) -> 'SubmissionOutcome':
        return cls(cls.SUCCESS, message, record)

    @classmethod
    def failure(cls, message: str) -> 'SubmissionOutcome':
        return cls(cls.FAILURE, message)


Listener = Callable[['SubmissionController'], None]


class SubmissionController:
    """
    State machine for one onboarding form

    idle -> validating -> invalid (editable)
    idle -> validating -> valid -> submitting -> succeeded | failed

    Args:
        endpoint: Submission URL; read from ONBOARD_URL at submit time when None
        http: Transport with a requests-style post() (default: requests.Session)
        clock: Returns today's date for the start-date rule
        timeout: Passed to the transport; None means no internal timeout
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        http: Any = None,
        clock: Optional[Callable[[], date]] = None,
        timeout: Optional[float] = None
    ):
        self.endpoint = endpoint
        self.http = http if http is not None else requests.Session()
        self.clock = clock or date.today
        self.timeout = timeout

        self.state = FormState.IDLE
        self.draft: Dict[str, Any] = empty_draft()
        self.errors: Dict[str, str] = {}
        self.outcome = SubmissionOutcome.idle()

        self._listeners: List[Listener] = []
        self._in_flight = threading.Lock()

    # Observers

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """
        Register a callback run after every state transition

        Returns:
            Function that removes the callback
        """
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _transition(self, state: FormState) -> None:
        logger.debug("Form state %s -> %s", self.state.value, state.value)
        self.state = state
        # A failing observer must not change the state or the outcome
        for callback in list(self._listeners):
            try:
                callback(self)
            except Exception:
                logger.exception("Form state listener failed on %s", state.value)

    # Editing

    @property
    def is_dirty(self) -> bool:
        return self.draft != empty_draft()

    @property
    def inputs_disabled(self) -> bool:
        return self.state in BUSY_STATES

    def update_field(self, name: str, value: Any) -> bool:
        """
        Set one draft field. Errors and outcome are left alone until the
        next submit.

        Returns:
            False when the form is not editable in its current state
        """
        if name not in FIELD_NAMES:
            raise ValueError(f"Unknown form field: {name}")

        if self.state not in EDITABLE_STATES:
            logger.debug("Ignoring edit of %s while %s", name, self.state.value)
            return False

        if name == 'services' and value is not None and not isinstance(value, (str, bytes)):
            value = list(value)

        self.draft[name] = value
        return True

    def toggle_service(self, tag: str, selected: bool) -> bool:
        """Checkbox-style add/remove of one service tag"""
        services = self.draft.get('services')
        current = list(services) if isinstance(services, (list, tuple)) else []
        if selected and tag not in current:
            current.append(tag)
        elif not selected:
            current = [existing for existing in current if existing != tag]
        return self.update_field('services', current)

    # Submission

    def submit(self) -> SubmissionOutcome:
        """
        Validate the draft and, when valid, send it once

        A no-op (returning the current outcome) when the form is untouched,
        already submitting, or already succeeded.
        """
        if not self._in_flight.acquire(blocking=False):
            logger.info("Submit ignored: a submission is already in flight")
            return self.outcome

        try:
            if self.state not in EDITABLE_STATES:
                logger.info("Submit ignored in state %s", self.state.value)
                return self.outcome

            if not self.is_dirty:
                logger.info("Submit ignored: form has not been filled in")
                return self.outcome

            self._transition(FormState.VALIDATING)
            record, errors = validate_onboarding_form(self.draft, today=self.clock())

            if errors:
                self.errors = errors
                logger.info("Onboarding form invalid: %s", ', '.join(sorted(errors)))
                self._transition(FormState.INVALID)
                return self.outcome

            self.errors = {}
            self._transition(FormState.VALID)
            self._send(record)
            return self.outcome

        finally:
            self._in_flight.release()

    def _send(self, record: NormalizedRecord) -> None:
        self.outcome = SubmissionOutcome.in_flight()
        self._transition(FormState.SUBMITTING)

        try:
            endpoint = self.endpoint or get_onboard_url()
            if not endpoint:
                logger.warning("Onboarding submission failed: ONBOARD_URL not configured")
                self._fail(MISSING_ENDPOINT_MESSAGE)
                return

            try:
                response = self.http.post(
                    endpoint,
                    json=record.to_payload(),
                    headers={'Content-Type': 'application/json'},
                    timeout=self.timeout
                )
            except (requests.RequestException, OSError) as e:
                logger.warning("Onboarding submission network error: %s", e)
                self._fail(NETWORK_ERROR_MESSAGE)
                return

            self._handle_response(response, record)

        except Exception as e:
            logger.exception("Unexpected error submitting onboarding form")
            self._fail(f'An unexpected error occurred: {str(e)}')

    def _handle_response(self, response: Any, record: NormalizedRecord) -> None:
        message = _response_message(response)

        if 200 <= response.status_code < 300:
            self.outcome = SubmissionOutcome.success(record, message or DEFAULT_SUCCESS_MESSAGE)
            self.draft = empty_draft()
            self.errors = {}
            logger.info("Onboarding submitted for %s (%s)", record.company_name, response.status_code)
            self._transition(FormState.SUCCEEDED)
            return

        if not message:
            reason = getattr(response, 'reason', '') or ''
            message = f'Error: {response.status_code} {reason}'.strip()

        logger.warning("Onboarding endpoint rejected submission: %s - %s", response.status_code, message)
        self._fail(message)

    def _fail(self, message: str) -> None:
        self.outcome = SubmissionOutcome.failure(message)
        self._transition(FormState.FAILED)

    def reset(self) -> bool:
        """Clear draft, errors and outcome after a finished attempt"""
        if self.state not in RESETTABLE_STATES:
            return False

        self.draft = empty_draft()
        self.errors = {}
        self.outcome = SubmissionOutcome.idle()
        self._transition(FormState.IDLE)
        return True


def _response_message(response: Any) -> Optional[str]:
    """The 'message' field of a JSON response body, if any"""
    try:
        data = response.json()
    except ValueError:
        return None

    if isinstance(data, dict):
        message = data.get('message')
        if isinstance(message, str) and message.strip():
            return message
    return None
