import sys
from datetime import date
from pathlib import Path

import pytest
import requests

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

TODAY = date(2026, 3, 10)


class FakeResponse:
    """Just enough of requests.Response for the controller"""

    def __init__(self, status_code, body=None, reason=''):
        self.status_code = status_code
        self.reason = reason
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeHttp:
    """Records posts and replies with a canned response or error"""

    def __init__(self, response=None, error=None, on_post=None):
        self.response = response
        self.error = error
        self.on_post = on_post
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({'url': url, 'json': json, 'headers': headers, 'timeout': timeout})
        if self.on_post:
            self.on_post()
        if self.error:
            raise self.error
        return self.response


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def valid_draft():
    return {
        'full_name': 'Jane Doe',
        'email': 'jane@acme.com',
        'company_name': 'Acme Inc',
        'services': ['UI/UX'],
        'budget_usd': None,
        'project_start_date': TODAY.isoformat(),
        'accept_terms': True,
    }


@pytest.fixture
def make_controller(valid_draft):
    from onboarding.controller import SubmissionController

    def _make(http, endpoint='https://api.example.com/api/onboard', draft=None):
        controller = SubmissionController(endpoint=endpoint, http=http, clock=lambda: TODAY)
        for name, value in (draft if draft is not None else valid_draft).items():
            controller.update_field(name, value)
        return controller

    return _make


@pytest.fixture
def app(monkeypatch):
    monkeypatch.delenv('ONBOARD_URL', raising=False)
    from main import app as flask_app
    flask_app.config.update(TESTING=True, ONBOARD_URL='https://api.example.com/api/onboard')
    yield flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def network_error():
    return requests.ConnectionError("Connection refused")
