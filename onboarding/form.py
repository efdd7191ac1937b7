"""
Client Onboarding Form Routes
Web form for collecting client project information and submitting it to the
onboarding endpoint.
"""

from datetime import date

from flask import Blueprint, current_app, render_template, request

from .config import get_onboard_timeout
from .controller import FormState, SubmissionController
from .log import get_logger
from .validation import SERVICE_CATALOG, empty_draft

logger = get_logger(__name__)

# Create Blueprint
onboarding_bp = Blueprint('onboarding', __name__,
                          template_folder='templates',
                          url_prefix='/onboard')

UNTOUCHED_FORM_MESSAGE = 'Please fill out the form before submitting.'

TEXT_FIELDS = ('full_name', 'email', 'company_name', 'budget_usd', 'project_start_date')


def build_controller() -> SubmissionController:
    """New controller for one request, configured from the app"""
    timeout = current_app.config.get('ONBOARD_TIMEOUT')
    if timeout is None:
        timeout = get_onboard_timeout()

    return SubmissionController(
        endpoint=current_app.config.get('ONBOARD_URL'),
        timeout=timeout
    )


def read_form_fields(form) -> dict:
    """Map posted form values onto draft fields"""
    fields = {name: form.get(name, '') for name in TEXT_FIELDS}
    fields['services'] = form.getlist('services')
    fields['accept_terms'] = form.get('accept_terms') is not None
    if not fields['budget_usd'].strip():
        fields['budget_usd'] = None
    return fields


def _render_form(draft=None, errors=None, submit_error=None, notice=None, status=200):
    return render_template('onboarding.html',
                           draft=draft or empty_draft(),
                           errors=errors or {},
                           submit_error=submit_error,
                           notice=notice,
                           services=SERVICE_CATALOG,
                           today=date.today().isoformat()), status


@onboarding_bp.route('/', methods=['GET'])
def show_onboarding_form():
    """Display an empty onboarding form"""
    return _render_form()


@onboarding_bp.route('/', methods=['POST'])
def process_onboarding_form():
    """
    Process the submitted onboarding form
    """
    fields = read_form_fields(request.form)

    try:
        controller = build_controller()
        for name, value in fields.items():
            controller.update_field(name, value)

        outcome = controller.submit()

        if controller.state is FormState.SUCCEEDED:
            return render_template('onboarding_success.html',
                                   message=outcome.message,
                                   record=outcome.record)

        if controller.state is FormState.INVALID:
            return _render_form(draft=controller.draft, errors=controller.errors, status=400)

        if controller.state is FormState.FAILED:
            return _render_form(draft=controller.draft, submit_error=outcome.message, status=502)

        # Untouched form: nothing was validated or sent
        return _render_form(draft=controller.draft, notice=UNTOUCHED_FORM_MESSAGE, status=400)

    except Exception as e:
        logger.exception("Error processing onboarding form")
        return _render_form(draft=fields,
                            submit_error=f'An unexpected error occurred: {str(e)}',
                            status=500)


@onboarding_bp.app_template_filter('usd')
def format_usd(amount) -> str:
    """12500 -> $12,500"""
    return f'${amount:,}'
