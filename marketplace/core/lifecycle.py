"""
Booking lifecycle and the write-side rules around it.

Identity-bearing fields (customer_id, provider_id, a service's owner) are
always derived server-side from the principal or the referenced service;
whatever the client sent for them is discarded.
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal

from flask import current_app

from marketplace.errors import NotFound, ValidationError
from marketplace.extensions import db
from marketplace.models import (
    Booking,
    BookingStatus,
    ProviderProfile,
    Service,
    SERVICE_CATEGORIES,
    UserRole,
)
from marketplace.utils import (
    missing_fields,
    parse_datetime,
    quantize_hours,
    quantize_money,
    safe_decimal,
    validate_choice,
    validate_max_length,
)
from . import projections
from .access import Action, ensure

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ('bio', 'phone', 'location', 'years_experience')
MAX_PRICE_PER_HOUR = Decimal('100000000')
MAX_ESTIMATED_HOURS = Decimal('1000')


def _optional_text(data, field, max_length=None):
    value = data.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f'{field} must be a string')
    if max_length is not None and not validate_max_length(value, max_length):
        raise ValidationError(f'{field} must be at most {max_length} characters')
    return value


def _bounded_hours(hours):
    if hours >= MAX_ESTIMATED_HOURS:
        raise ValidationError(f'estimated_hours must be less than {MAX_ESTIMATED_HOURS}')
    hours = quantize_hours(hours)
    if hours <= 0:
        raise ValidationError('estimated_hours must be at least 0.1')
    if hours >= MAX_ESTIMATED_HOURS:
        raise ValidationError(f'estimated_hours must be less than {MAX_ESTIMATED_HOURS}')
    return hours


# Users and provider profiles

def set_role(user, role):
    """
    Record the role chosen during onboarding

    Raises:
        ValidationError: role is not customer or provider
    """
    if not validate_choice(role, UserRole.values()):
        raise ValidationError('Invalid user type')

    if user.role != role:
        logger.info('User %s changed role %s -> %s', user.id, user.role, role)
    user.role = role
    user.touch()
    db.session.commit()
    return user


def create_provider_profile(data, user):
    """
    Create the caller's provider profile

    Any user_id in the payload is ignored. A user has at most one profile.
    """
    if projections.find_profile_for_user(user.id) is not None:
        raise ValidationError('Provider profile already exists')

    fields = {field: _optional_text(data, field) for field in PROFILE_FIELDS}
    if not validate_max_length(fields['phone'], 20):
        raise ValidationError('phone must be at most 20 characters')

    profile = ProviderProfile(user_id=user.id, **fields)
    db.session.add(profile)
    db.session.commit()

    logger.info('Created provider profile %s for user %s', profile.id, user.id)
    return profile


# Services

def create_service(data, principal):
    """
    Publish a service owned by the caller's provider profile

    Raises:
        NotFound: Caller has no provider profile
        ValidationError: Missing or malformed fields
    """
    if principal.profile_id is None:
        raise NotFound('Provider profile not found')
    ensure(principal, Action.CREATE_SERVICE)

    missing = missing_fields(data, ['category', 'title', 'price_per_hour'])
    if missing:
        raise ValidationError(f'Missing required fields: {", ".join(missing)}')

    if not validate_choice(data['category'], SERVICE_CATEGORIES):
        raise ValidationError(f'Invalid category. Must be one of: {", ".join(SERVICE_CATEGORIES)}')

    title = _optional_text(data, 'title', max_length=200)
    if not title.strip():
        raise ValidationError('title is required')

    price = safe_decimal(data['price_per_hour'])
    if price is None or price <= 0:
        raise ValidationError('price_per_hour must be a positive number')
    if price >= MAX_PRICE_PER_HOUR:
        raise ValidationError(f'price_per_hour must be less than {MAX_PRICE_PER_HOUR}')
    price = quantize_money(price)
    if price <= 0:
        raise ValidationError('price_per_hour must be at least 0.01')
    if price >= MAX_PRICE_PER_HOUR:
        raise ValidationError(f'price_per_hour must be less than {MAX_PRICE_PER_HOUR}')

    service = Service(
        provider_id=principal.profile_id,
        category=data['category'],
        title=title,
        description=_optional_text(data, 'description'),
        price_per_hour=price,
        image_url=_optional_text(data, 'image_url', max_length=500),
    )
    db.session.add(service)
    db.session.commit()

    if data.get('provider_id') not in (None, principal.profile_id):
        logger.warning(
            'Ignored client-supplied provider_id=%s for service %s', data.get('provider_id'), service.id
        )
    logger.info('Provider %s published service %s', principal.profile_id, service.id)
    return service


# Bookings

def create_booking(data, principal):
    """
    Create a pending booking for the caller

    customer_id is the caller and provider_id comes from the service;
    total_price is computed here from the service's hourly rate.

    Raises:
        NotFound: service_id does not resolve
        ValidationError: Missing or malformed fields, or a past date
    """
    service_id = data.get('service_id')
    if not service_id:
        raise ValidationError('Missing required fields: service_id')
    if not isinstance(service_id, str):
        raise ValidationError('service_id must be a string')

    service = projections.find_service(service_id)
    if service is None:
        raise NotFound('Service not found')

    if not data.get('scheduled_date'):
        raise ValidationError('Missing required fields: scheduled_date')
    scheduled_date = parse_datetime(data['scheduled_date'])
    if scheduled_date is None:
        raise ValidationError('Invalid scheduled_date. Use an ISO-8601 date or datetime')
    if scheduled_date.astimezone(timezone.utc).date() < datetime.now(timezone.utc).date():
        raise ValidationError('scheduled_date cannot be in the past')

    estimated_hours = None
    total_price = None
    if data.get('estimated_hours') not in (None, ''):
        estimated_hours = safe_decimal(data['estimated_hours'])
        if estimated_hours is None or estimated_hours <= 0:
            raise ValidationError('estimated_hours must be a positive number')
        estimated_hours = _bounded_hours(estimated_hours)
        total_price = service.calculate_price(estimated_hours)

    booking = Booking(
        customer_id=principal.user_id,
        provider_id=service.provider_id,
        service_id=service.id,
        scheduled_date=scheduled_date,
        status=BookingStatus.PENDING.value,
        estimated_hours=estimated_hours,
        total_price=total_price,
        notes=_optional_text(data, 'notes'),
        address=_optional_text(data, 'address'),
    )
    db.session.add(booking)
    db.session.commit()

    logger.info(
        'Customer %s booked service %s (booking=%s, total=%s)',
        principal.user_id, service.id, booking.id, total_price
    )
    return booking


def transition(booking, new_status, principal):
    """
    Move a booking to new_status on behalf of its provider

    With BOOKING_STRICT_TRANSITIONS enabled only moves listed in
    ALLOWED_TRANSITIONS are accepted; otherwise any known status is.

    Raises:
        Forbidden: Caller is not the booking's provider
        ValidationError: Missing, unknown or illegal status
    """
    ensure(principal, Action.UPDATE_BOOKING_STATUS, booking)

    if not new_status:
        raise ValidationError('Status is required')
    if not validate_choice(new_status, BookingStatus.values()):
        raise ValidationError(f'Invalid status. Must be one of: {", ".join(BookingStatus.values())}')

    strict = current_app.config.get('BOOKING_STRICT_TRANSITIONS', True)
    if strict and not booking.can_transition_to(new_status):
        raise ValidationError(f'Cannot change booking status from {booking.status} to {new_status}')

    previous = booking.status
    booking.status = new_status
    booking.touch()
    db.session.commit()

    logger.info('Booking %s status %s -> %s by provider %s', booking.id, previous, new_status, principal.profile_id)
    return booking
