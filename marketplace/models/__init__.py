"""SQLAlchemy models package"""
from .base import BaseModel, generate_uuid, utcnow
from .user import User, UserRole
from .provider_profile import ProviderProfile
from .service import Service, SERVICE_CATEGORIES
from .booking import Booking, BookingStatus, ALLOWED_TRANSITIONS
from .payment import Payment, PaymentStatus

__all__ = [
    'BaseModel',
    'generate_uuid',
    'utcnow',
    'User',
    'UserRole',
    'ProviderProfile',
    'Service',
    'SERVICE_CATEGORIES',
    'Booking',
    'BookingStatus',
    'ALLOWED_TRANSITIONS',
    'Payment',
    'PaymentStatus',
]
