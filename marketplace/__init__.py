import logging
import os

import sentry_sdk
from flask import Flask, jsonify
from flask_cors import CORS
from sentry_sdk.integrations.flask import FlaskIntegration

from marketplace.extensions import db, limiter, login_manager

LOG_FORMAT = '%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s'
LOG_HANDLER_NAME = 'marketplace'

logger = logging.getLogger(__name__)


def configure_logging(app):
    """Install a single request-aware stream handler on the root logger"""
    from marketplace.middleware import RequestIdFilter

    root = logging.getLogger()
    if not any(handler.get_name() == LOG_HANDLER_NAME for handler in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(LOG_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.addFilter(RequestIdFilter())
        root.addHandler(handler)

    logging.getLogger('marketplace').setLevel(app.config.get('LOG_LEVEL', 'INFO'))


def create_app(config_name=None):
    """Flask application factory"""
    app = Flask(__name__)

    # Load configuration
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    from config import config
    app.config.from_object(config.get(config_name, config['default']))

    configure_logging(app)

    # Sentry error monitoring (only active when SENTRY_DSN is set)
    if app.config.get('SENTRY_DSN'):
        sentry_sdk.init(
            dsn=app.config['SENTRY_DSN'],
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,
        )

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    limiter.init_app(app)
    CORS(app, origins=app.config['CORS_ORIGINS'], supports_credentials=True)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Unauthorized'}), 401

    from marketplace.middleware import RequestIdMiddleware
    app.wsgi_app = RequestIdMiddleware(app.wsgi_app)

    # Models and the session user loader register themselves on import
    from marketplace import models  # noqa: F401
    from marketplace.core import identity  # noqa: F401
    from marketplace.core.payments import StripeGateway

    app.extensions['payment_gateway'] = StripeGateway(app.config.get('STRIPE_SECRET_KEY'))
    if not app.extensions['payment_gateway'].configured:
        logger.warning('STRIPE_SECRET_KEY is not set; payment intents will be refused')

    # Register blueprints
    from marketplace.routes import (
        auth_bp,
        bookings_bp,
        payments_bp,
        providers_bp,
        services_bp,
        users_bp,
    )

    api_prefix = app.config['API_PREFIX']
    app.register_blueprint(auth_bp, url_prefix=api_prefix)
    app.register_blueprint(users_bp, url_prefix=f'{api_prefix}/user')
    app.register_blueprint(services_bp, url_prefix=f'{api_prefix}/services')
    app.register_blueprint(providers_bp, url_prefix=f'{api_prefix}/provider')
    app.register_blueprint(bookings_bp, url_prefix=f'{api_prefix}/bookings')
    app.register_blueprint(payments_bp, url_prefix=api_prefix)

    from marketplace.errors import register_error_handlers
    register_error_handlers(app)

    # Health check endpoint
    @app.route('/health')
    def health():
        return {'status': 'healthy', 'service': 'marketplace-backend'}, 200

    @app.cli.command('init-db')
    def init_db():
        """Create all database tables"""
        db.create_all()
        logger.info('Database tables created')

    return app
