"""API blueprints"""
from .auth import auth_bp
from .users import users_bp
from .services import services_bp
from .providers import providers_bp
from .bookings import bookings_bp
from .payments import payments_bp

__all__ = [
    'auth_bp',
    'users_bp',
    'services_bp',
    'providers_bp',
    'bookings_bp',
    'payments_bp',
]
