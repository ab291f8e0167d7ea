"""Login page."""

import logging

from flask import Blueprint, redirect, render_template, request, url_for

from ...client import ServerError, TransportError, UnauthorizedError
from ..forms import validate_login
from ..views import current_browser_session

logger = logging.getLogger(__name__)

bp = Blueprint('auth', __name__)

INVALID_CREDENTIALS = 'Invalid email or password'
SERVER_FAILURE = 'Server error. Please try again later.'
NETWORK_FAILURE = 'Network error. Please check your connection.'

@bp.route('/', methods=['GET', 'POST'])
@bp.route('/login', methods=['GET', 'POST'])
def login():
    """Render the login form and submit it to the event service."""
    if request.method == 'GET':
        return render_template('login.html', form={}, errors={})

    form = {
        'email': request.form.get('email', ''),
        'password': request.form.get('password', '')
    }
    errors = validate_login(form)
    if errors:
        return render_template('login.html', form=form, errors=errors), 400

    browser_session = current_browser_session()
    try:
        browser_session.client.login(form['email'], form['password'])
    except UnauthorizedError:
        errors = {'general': INVALID_CREDENTIALS}
        status = 401
    except ServerError as e:
        logger.error(f"Login failed: {e}")
        errors = {'general': SERVER_FAILURE}
        status = 502
    except TransportError as e:
        logger.error(f"Login failed: {e}")
        errors = {'general': NETWORK_FAILURE}
        status = 502
    else:
        logger.info(f"Login successful for {form['email']}")
        # A previous user's view must not survive a new login
        browser_session.view = None
        return redirect(url_for('events.evento'))

    return render_template('login.html', form={'email': form['email']}, errors=errors), status
