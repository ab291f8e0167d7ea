from typing import Optional

from flask import Flask, render_template

from .routes import events_bp, auth_bp, health_bp
from .views import ViewRegistry, ClientFactory, default_client_factory
from ..config import Config, DEFAULT_SECRET_KEY
from ..utils.timeformat import format_event_time
import logging

# Module logger
logger = logging.getLogger(__name__)

def create_app(config_class=Config, client_factory: Optional[ClientFactory] = None):
    """Create and configure the Flask application."""
    # Initialize Flask app
    app = Flask(__name__)
    app.config.from_object(config_class)
    
    # The session cookie keys the remote-service cookie jar, so it must not be forgeable
    if app.config['PRODUCTION'] and app.config['SECRET_KEY'] in (None, '', DEFAULT_SECRET_KEY):
        raise ValueError("SECRET_KEY must be set in the environment when in production environment")
    
    if client_factory is None:
        client_factory = default_client_factory(
            base_url=app.config['API_BASE_URL'],
            timeout=app.config['API_TIMEOUT']
        )
    app.extensions['evento'] = ViewRegistry(
        client_factory,
        optimistic=app.config['OPTIMISTIC_UPDATES'],
        mount_timeout=app.config['MOUNT_TIMEOUT'],
        max_sessions=app.config['MAX_SESSIONS'],
        idle_timeout=app.config['SESSION_IDLE_TIMEOUT']
    )
    
    app.jinja_env.filters['event_time'] = format_event_time
    
    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(events_bp)
    app.register_blueprint(health_bp)
    
    # Error handlers
    @app.errorhandler(404)
    def not_found_error(error):
        return render_template('errors/404.html'), 404
    
    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Unhandled error: {error}")
        return render_template('errors/500.html'), 500
    
    logger.info(f"Evento front-end configured for {app.config['API_BASE_URL']}")
    return app
