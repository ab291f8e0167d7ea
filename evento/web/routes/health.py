"""Health check endpoint."""

from flask import Blueprint, current_app, jsonify

from ..views import get_registry

bp = Blueprint('health', __name__)

@bp.route('/health')
def health_check():
    """Check that the front-end is up. Does not contact the event service."""
    return jsonify({
        'status': 'healthy',
        'api_base_url': current_app.config['API_BASE_URL'],
        'sessions': len(get_registry())
    }), 200
