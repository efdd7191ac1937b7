"""
Onboarding API
Receiving endpoint for onboarding form submissions.
"""

from flask import Blueprint, jsonify, request

from onboarding.log import get_logger

logger = get_logger(__name__)

# Create blueprint
onboard_api_bp = Blueprint('onboard_api', __name__, url_prefix='/api')

REQUIRED_FIELDS = ('fullName', 'email', 'companyName')


@onboard_api_bp.after_request
def add_cors_headers(response):
    """Allow the form to be served from any origin"""
    response.headers['Access-Control-Allow-Origin'] = '*'
    return response


@onboard_api_bp.route('/onboard', methods=['POST', 'OPTIONS'])
def receive_onboarding():
    """
    Accept an onboarding submission.

    Request body:
    {
        "fullName": "Jane Doe",
        "email": "jane@acme.com",
        "companyName": "Acme Inc",
        "services": ["UI/UX"],
        "budgetUsd": 5000,            (optional)
        "projectStartDate": "2026-01-01",
        "acceptTerms": true
    }

    Returns:
    {
        "message": "OK",
        "receivedData": {...}
    }
    """
    # Handle CORS preflight
    if request.method == 'OPTIONS':
        return _cors_response()

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    missing = [field for field in REQUIRED_FIELDS if not _present(data.get(field))]
    if missing:
        logger.info("Rejected onboarding submission, missing: %s", ', '.join(missing))
        return jsonify({'message': 'Missing required fields'}), 400

    logger.info("Received onboarding data: %s", data)

    return jsonify({'message': 'OK', 'receivedData': data}), 200


def _present(value) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def _cors_response():
    """Handle CORS preflight requests"""
    headers = {
        'Access-Control-Allow-Methods': 'POST, OPTIONS',
        'Access-Control-Allow-Headers': 'Content-Type',
        'Access-Control-Max-Age': '3600'
    }
    return ('', 204, headers)
