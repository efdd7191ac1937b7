"""
Client Onboarding Service

Serves the client onboarding form and the endpoint that receives its submissions.
"""

import os
import secrets

from dotenv import load_dotenv
from flask import Flask, jsonify, redirect, url_for

from onboarding import onboarding_bp
from onboarding.config import get_onboard_timeout, get_onboard_url
from onboarding.log import setup_logging
from onboard_api import onboard_api_bp

load_dotenv()

logger = setup_logging('client-onboarding', log_level=os.environ.get('LOG_LEVEL', 'INFO'))

# Create Flask app
app = Flask(__name__)

app.config['SECRET_KEY'] = os.getenv('FLASK_SECRET_KEY', secrets.token_hex(32))
app.config['ONBOARD_URL'] = get_onboard_url()
app.config['ONBOARD_TIMEOUT'] = get_onboard_timeout()

if not app.config['ONBOARD_URL']:
    logger.warning("ONBOARD_URL is not set; form submissions will fail until it is configured")

# Register blueprints
app.register_blueprint(onboarding_bp)
app.register_blueprint(onboard_api_bp)


@app.route('/', methods=['GET'])
def index():
    """Send visitors to the onboarding form"""
    return redirect(url_for('onboarding.show_onboarding_form'))


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint"""
    return jsonify({'status': 'healthy', 'service': 'client-onboarding'}), 200


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=int(os.getenv('PORT', 8080)))
