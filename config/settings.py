"""
Configuration settings for different environments
"""
import logging
import os
import secrets
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


def _database_url():
    """Read DATABASE_URL, normalising the legacy postgres:// scheme"""
    url = os.environ.get('DATABASE_URL', '')
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url or 'sqlite:///marketplace.db'


def _require_in_production(var_name, default):
    """Return env var value. Outside development, warn loudly if still using the default."""
    value = os.environ.get(var_name, '')
    if value:
        return value
    env = os.environ.get('FLASK_ENV', 'development')
    if env not in ('development', 'testing') and default:
        logging.getLogger(__name__).warning(
            '%s is using an insecure default. Set it via environment variable!', var_name
        )
    return default


def _env_flag(var_name, default):
    return os.environ.get(var_name, default).lower() in ['true', 'on', '1']


class Config:
    """Base configuration"""
    SECRET_KEY = _require_in_production('SECRET_KEY', 'dev-only-' + secrets.token_hex(16))

    # Database
    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
    }

    # Session cookie issued after identity login
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)
    REMEMBER_COOKIE_DURATION = timedelta(days=7)
    REMEMBER_COOKIE_HTTPONLY = True

    # CORS
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')

    API_PREFIX = '/api'
    MAX_CONTENT_LENGTH = 1 * 1024 * 1024  # 1MB

    # Identity provider tokens exchanged at /api/login
    IDENTITY_TOKEN_SECRET = _require_in_production(
        'IDENTITY_TOKEN_SECRET', 'dev-only-' + secrets.token_hex(32)
    )
    IDENTITY_TOKEN_ALGORITHMS = os.environ.get('IDENTITY_TOKEN_ALGORITHMS', 'HS256').split(',')
    IDENTITY_TOKEN_AUDIENCE = os.environ.get('IDENTITY_TOKEN_AUDIENCE') or None
    IDENTITY_TOKEN_ISSUER = os.environ.get('IDENTITY_TOKEN_ISSUER') or None

    # Stripe
    STRIPE_SECRET_KEY = os.environ.get('STRIPE_SECRET_KEY', '')
    PAYMENT_CURRENCY = os.environ.get('PAYMENT_CURRENCY', 'usd')

    # Bookings
    BOOKING_STRICT_TRANSITIONS = _env_flag('BOOKING_STRICT_TRANSITIONS', 'true')

    # Rate limiting
    RATELIMIT_ENABLED = _env_flag('RATELIMIT_ENABLED', 'true')
    RATELIMIT_STORAGE_URI = os.environ.get('REDIS_URL') or 'memory://'

    # Observability
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    SENTRY_DSN = os.environ.get('SENTRY_DSN')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    SESSION_COOKIE_SECURE = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    # Enforce HTTPS
    SESSION_COOKIE_SECURE = True
    REMEMBER_COOKIE_SECURE = True

    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 20,
        'max_overflow': 40,
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }


class TestingConfig(Config):
    """Testing configuration with isolated database and safe defaults"""
    TESTING = True
    DEBUG = False

    # Use in-memory SQLite for fast tests
    SQLALCHEMY_DATABASE_URI = os.getenv('TEST_DATABASE_URL', 'sqlite://')
    SQLALCHEMY_ENGINE_OPTIONS = {}

    SECRET_KEY = 'test-secret-key'
    SESSION_COOKIE_SECURE = False

    IDENTITY_TOKEN_SECRET = 'test-identity-secret'
    IDENTITY_TOKEN_ALGORITHMS = ['HS256']
    IDENTITY_TOKEN_AUDIENCE = None
    IDENTITY_TOKEN_ISSUER = None

    # Use test Stripe keys
    STRIPE_SECRET_KEY = 'sk_test_mock'
    PAYMENT_CURRENCY = 'usd'

    BOOKING_STRICT_TRANSITIONS = True

    # Disable rate limiting in tests
    RATELIMIT_ENABLED = False
    RATELIMIT_STORAGE_URI = 'memory://'

    LOG_LEVEL = 'WARNING'
    SENTRY_DSN = None

    CORS_ORIGINS = ['http://localhost:5173', 'http://localhost:3000']


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
