"""
Form Validation for Client Onboarding
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

# Fixed service catalog: tag -> display label
SERVICE_CATALOG = {
    'UI/UX': 'UI/UX Design',
    'Branding': 'Branding',
    'Web Dev': 'Web Development',
    'Mobile App': 'Mobile App Development',
}

FULL_NAME_MIN, FULL_NAME_MAX = 2, 80
COMPANY_NAME_MIN, COMPANY_NAME_MAX = 2, 100
BUDGET_MIN, BUDGET_MAX = 100, 1_000_000

FIELD_NAMES = (
    'full_name',
    'email',
    'company_name',
    'services',
    'budget_usd',
    'project_start_date',
    'accept_terms',
)

# Letters (any script), spaces, hyphen, apostrophe
FULL_NAME_PATTERN = re.compile(r"^(?:[^\W\d_]|[ '-])+\Z")
EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9-]+(?:\.[a-zA-Z0-9-]+)*\.[a-zA-Z]{2,}$')
DATE_FORMAT = '%Y-%m-%d'
DATE_PATTERN = re.compile(r'^[0-9]{4}-[0-9]{2}-[0-9]{2}\Z')


@dataclass(frozen=True)
class NormalizedRecord:
    """Validated onboarding data, ready to send"""
    full_name: str
    email: str
    company_name: str
    services: Tuple[str, ...]
    project_start_date: date
    budget_usd: Optional[int] = None
    accept_terms: bool = True

    def to_payload(self) -> Dict[str, Any]:
        """JSON request body (camelCase keys, budgetUsd omitted when absent)"""
        payload = {
            'fullName': self.full_name,
            'email': self.email,
            'companyName': self.company_name,
            'services': list(self.services),
        }
        if self.budget_usd is not None:
            payload['budgetUsd'] = self.budget_usd
        payload['projectStartDate'] = self.project_start_date.strftime(DATE_FORMAT)
        payload['acceptTerms'] = self.accept_terms
        return payload

    def service_labels(self) -> List[str]:
        return [SERVICE_CATALOG[tag] for tag in self.services]


def empty_draft() -> Dict[str, Any]:
    """Initial state of the form"""
    return {
        'full_name': '',
        'email': '',
        'company_name': '',
        'services': [],
        'budget_usd': None,
        'project_start_date': '',
        'accept_terms': False,
    }


def validate_onboarding_form(
    data: Dict[str, Any],
    today: Optional[date] = None
) -> Tuple[Optional[NormalizedRecord], Dict[str, str]]:
    """
    Validate onboarding form data

    Every field is checked; each failing field gets one message (the first
    rule it breaks).

    Args:
        data: Draft form data keyed by field name
        today: Reference date for the start-date rule (defaults to today)

    Returns:
        Tuple of (normalized record or None, field error map)
    """
    if today is None:
        today = date.today()

    errors: Dict[str, str] = {}
    values: Dict[str, Any] = {}

    checks = (
        ('full_name', _check_full_name),
        ('email', _check_email),
        ('company_name', _check_company_name),
        ('services', _check_services),
        ('budget_usd', _check_budget),
        ('project_start_date', lambda value: _check_start_date(value, today)),
        ('accept_terms', _check_accept_terms),
    )

    for field, check in checks:
        value, error = check(data.get(field))
        if error:
            errors[field] = error
        else:
            values[field] = value

    if errors:
        return None, errors

    return NormalizedRecord(**values), {}


def _text(value: Any) -> str:
    if value is None:
        return ''
    if not isinstance(value, str):
        return str(value).strip()
    return value.strip()


def _check_full_name(value: Any) -> Tuple[Optional[str], Optional[str]]:
    name = _text(value)
    if not name:
        return None, 'Full name is required'
    if len(name) < FULL_NAME_MIN:
        return None, f'Full name must be at least {FULL_NAME_MIN} characters'
    if len(name) > FULL_NAME_MAX:
        return None, f'Full name must be no more than {FULL_NAME_MAX} characters'
    if not FULL_NAME_PATTERN.match(name):
        return None, 'Full name can only contain letters, spaces, hyphens, and apostrophes'
    return name, None


def _check_email(value: Any) -> Tuple[Optional[str], Optional[str]]:
    email = _text(value)
    if not email:
        return None, 'Email is required'
    if '..' in email or not EMAIL_PATTERN.match(email):
        return None, 'Please enter a valid email address'
    return email, None


def _check_company_name(value: Any) -> Tuple[Optional[str], Optional[str]]:
    company = _text(value)
    if not company:
        return None, 'Company name is required'
    if len(company) < COMPANY_NAME_MIN:
        return None, f'Company name must be at least {COMPANY_NAME_MIN} characters'
    if len(company) > COMPANY_NAME_MAX:
        return None, f'Company name must be no more than {COMPANY_NAME_MAX} characters'
    return company, None


def _check_services(value: Any) -> Tuple[Optional[Tuple[str, ...]], Optional[str]]:
    if value is None:
        value = []
    if isinstance(value, (str, bytes, dict)) or not hasattr(value, '__iter__'):
        return None, 'Services must be a list of service names'

    services = list(value)
    if not all(isinstance(tag, str) for tag in services):
        return None, 'Services must be a list of service names'
    if not services:
        return None, 'Please select at least one service'

    unknown = [tag for tag in services if tag not in SERVICE_CATALOG]
    if unknown:
        return None, (
            f'Unknown service(s): {", ".join(unknown)}. '
            f'Choose from: {", ".join(SERVICE_CATALOG)}'
        )

    # Collapse duplicates, keep first-seen order
    return tuple(dict.fromkeys(services)), None


def _check_budget(value: Any) -> Tuple[Optional[int], Optional[str]]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None, None

    # bool is an int subclass; a checkbox value is never a budget
    if isinstance(value, bool):
        return None, 'Budget must be a number'

    if isinstance(value, str):
        raw = value.strip().replace(',', '').lstrip('$')
        try:
            value = int(raw)
        except ValueError:
            try:
                value = float(raw)
            except ValueError:
                return None, 'Budget must be a number'

    if isinstance(value, float):
        if value != value or value in (float('inf'), float('-inf')):
            return None, 'Budget must be a number'
        if not value.is_integer():
            return None, 'Budget must be a whole number'
        value = int(value)

    if not isinstance(value, int):
        return None, 'Budget must be a number'
    if value < BUDGET_MIN:
        return None, f'Budget must be at least ${BUDGET_MIN:,}'
    if value > BUDGET_MAX:
        return None, f'Budget cannot exceed ${BUDGET_MAX:,}'
    return value, None


def _check_start_date(value: Any, today: date) -> Tuple[Optional[date], Optional[str]]:
    if isinstance(value, datetime):
        start = value.date()
    elif isinstance(value, date):
        start = value
    else:
        raw = _text(value)
        if not raw:
            return None, 'Project start date is required'
        if not DATE_PATTERN.match(raw):
            return None, 'Project start date must be a valid date (YYYY-MM-DD)'
        try:
            start = datetime.strptime(raw, DATE_FORMAT).date()
        except ValueError:
            return None, 'Project start date must be a valid date (YYYY-MM-DD)'

    if start < today:
        return None, 'Project start date must be today or later'
    return start, None


def _check_accept_terms(value: Any) -> Tuple[Optional[bool], Optional[str]]:
    if value is not True:
        return None, 'You must accept the terms and conditions'
    return True, None
