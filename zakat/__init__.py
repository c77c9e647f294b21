"""Flask application factory for Zakat Calculator."""
import logging
import os
from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


logger = logging.getLogger('zakat')


def create_app(config: dict | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Optional configuration dictionary to override defaults.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Trust X-Forwarded-For from reverse proxy
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    # Default configuration
    app.config.update(
        SECRET_KEY=os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production'),
        JSON_SORT_KEYS=False,
    )

    # Override with provided config
    if config:
        app.config.update(config)

    # Snapshot and rate stores
    from zakat import context
    context.init_app(app)

    # Register CLI commands
    from zakat import cli
    cli.register_cli(app)

    # Register blueprints
    from zakat.routes.health import health_bp
    from zakat.routes.api import api_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(api_bp, url_prefix='/api/v1')

    # Start background rate refresh (for single-container deployments)
    from zakat.services.config import is_background_sync_enabled
    if is_background_sync_enabled():
        from zakat.services.background_sync import start_background_sync
        start_background_sync(app.extensions['zakat_rates'])

    logger.info("Zakat calculator app created")
    return app
