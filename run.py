import os
import sys

from evento.config.environment import IS_PRODUCTION_ENVIRONMENT
from evento.utils.logging_config import setup_logging
from evento.web import create_app

setup_logging()
app = create_app()

if __name__ == '__main__':
    """
    Development vs Production Configuration:
    
    Development:
        - Set FLASK_ENV=development to enable:
            * Debug mode with detailed error pages
            * Interactive debugger
            * Auto-reload on code changes
        - Uses localhost (127.0.0.1) by default
        Example: FLASK_ENV=development python run.py
    
    Production:
        - Uses Gunicorn WSGI server
        - Set FLASK_ENV=production or don't set it at all
        - Uses 0.0.0.0 to accept external connections
        Example: FLASK_ENV=production python run.py
        
    The view registry lives in process memory, so production runs a single
    worker process and scales with threads instead.
    """
    env = os.environ.get('FLASK_ENV', 'production' if IS_PRODUCTION_ENVIRONMENT else 'development')
    port = int(os.environ.get('PORT', 5001))
    
    if env == 'development':
        # Development mode - use Flask's built-in server
        app.run(
            host='localhost',
            port=port,
            debug=True
        )
    else:
        # Production mode - use Gunicorn
        try:
            from gunicorn.app.base import BaseApplication

            class GunicornApp(BaseApplication):
                def __init__(self, app, options=None):
                    self.options = options or {}
                    self.application = app
                    super().__init__()

                def load_config(self):
                    for key, value in self.options.items():
                        self.cfg.set(key.lower(), value)

                def load(self):
                    return self.application

            options = {
                'bind': f'0.0.0.0:{port}',
                'workers': 1,
                'threads': os.environ.get('GUNICORN_THREADS', '8'),
                'worker_class': 'gthread',
                'timeout': 120
            }
            
            GunicornApp(app, options).run()
        except ImportError:
            print("Error: Gunicorn is required for production mode.")
            print("Please install it with: pip install gunicorn")
            sys.exit(1)
