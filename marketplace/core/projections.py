"""
Read-side views.

Each listing is one joined query (service -> profile -> user, booking ->
profile -> user -> service, booking -> customer -> service) flattened into
explicit view types, so read endpoints never fetch related rows one by one.
"""
from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import aliased

from marketplace.extensions import db
from marketplace.models import Booking, ProviderProfile, Service, User
from marketplace.models.base import serialize_value


def _serialize(data):
    if isinstance(data, dict):
        return {key: _serialize(value) for key, value in data.items()}
    return serialize_value(data)


class View:
    """Mixin giving dataclass views a JSON-ready dict"""

    def to_dict(self):
        return _serialize(asdict(self))


@dataclass(frozen=True)
class UserSummary(View):
    id: str
    email: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    profile_image_url: Optional[str]

    @classmethod
    def from_user(cls, user):
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            profile_image_url=user.profile_image_url,
        )


@dataclass(frozen=True)
class ProviderView(View):
    id: str
    user_id: str
    bio: Optional[str]
    phone: Optional[str]
    location: Optional[str]
    years_experience: Optional[str]
    verified: bool
    user: UserSummary


@dataclass(frozen=True)
class ServiceView(View):
    id: str
    provider_id: str
    category: str
    title: str
    description: Optional[str]
    price_per_hour: Decimal
    image_url: Optional[str]
    created_at: datetime
    provider: ProviderView


@dataclass(frozen=True)
class ServiceSummary(View):
    id: str
    title: str
    category: str


@dataclass(frozen=True)
class BookingProviderUser(View):
    id: str
    first_name: Optional[str]
    last_name: Optional[str]
    profile_image_url: Optional[str]


@dataclass(frozen=True)
class BookingProvider(View):
    id: str
    user_id: str
    location: Optional[str]
    user: BookingProviderUser


@dataclass(frozen=True)
class BookingCustomer(View):
    id: str
    first_name: Optional[str]
    last_name: Optional[str]
    email: Optional[str]


@dataclass(frozen=True)
class CustomerBookingView(View):
    """Booking as shown to its customer: with provider and service"""
    id: str
    customer_id: str
    provider_id: str
    service_id: str
    scheduled_date: datetime
    status: str
    estimated_hours: Optional[Decimal]
    total_price: Optional[Decimal]
    notes: Optional[str]
    address: Optional[str]
    created_at: datetime
    provider: BookingProvider
    service: ServiceSummary


@dataclass(frozen=True)
class ProviderBookingView(View):
    """Booking as shown to its provider: with customer and service"""
    id: str
    customer_id: str
    provider_id: str
    service_id: str
    scheduled_date: datetime
    status: str
    estimated_hours: Optional[Decimal]
    total_price: Optional[Decimal]
    notes: Optional[str]
    address: Optional[str]
    created_at: datetime
    customer: BookingCustomer
    service: ServiceSummary


def _booking_fields(booking):
    return dict(
        id=booking.id,
        customer_id=booking.customer_id,
        provider_id=booking.provider_id,
        service_id=booking.service_id,
        scheduled_date=booking.scheduled_date,
        status=booking.status,
        estimated_hours=booking.estimated_hours,
        total_price=booking.total_price,
        notes=booking.notes,
        address=booking.address,
        created_at=booking.created_at,
    )


def _service_summary(service):
    return ServiceSummary(id=service.id, title=service.title, category=service.category)


def _service_view(service, profile, user):
    return ServiceView(
        id=service.id,
        provider_id=service.provider_id,
        category=service.category,
        title=service.title,
        description=service.description,
        price_per_hour=service.price_per_hour,
        image_url=service.image_url,
        created_at=service.created_at,
        provider=ProviderView(
            id=profile.id,
            user_id=profile.user_id,
            bio=profile.bio,
            phone=profile.phone,
            location=profile.location,
            years_experience=profile.years_experience,
            verified=bool(profile.verified),
            user=UserSummary.from_user(user),
        ),
    )


def _customer_booking_view(booking, profile, user, service):
    return CustomerBookingView(
        **_booking_fields(booking),
        provider=BookingProvider(
            id=profile.id,
            user_id=profile.user_id,
            location=profile.location,
            user=BookingProviderUser(
                id=user.id,
                first_name=user.first_name,
                last_name=user.last_name,
                profile_image_url=user.profile_image_url,
            ),
        ),
        service=_service_summary(service),
    )


def _provider_booking_view(booking, customer, service):
    return ProviderBookingView(
        **_booking_fields(booking),
        customer=BookingCustomer(
            id=customer.id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            email=customer.email,
        ),
        service=_service_summary(service),
    )


# Services

def _service_query():
    return (
        db.session.query(Service, ProviderProfile, User)
        .join(ProviderProfile, Service.provider_id == ProviderProfile.id)
        .join(User, ProviderProfile.user_id == User.id)
    )


def list_services() -> List[ServiceView]:
    """All services with their provider, newest first"""
    rows = _service_query().order_by(Service.created_at.desc()).all()
    return [_service_view(*row) for row in rows]


def get_service(service_id) -> Optional[ServiceView]:
    row = _service_query().filter(Service.id == service_id).first()
    return _service_view(*row) if row else None


def list_provider_services(profile_id) -> List[Service]:
    """A provider's own services as plain records, newest first"""
    return (
        Service.query.filter_by(provider_id=profile_id)
        .order_by(Service.created_at.desc())
        .all()
    )


def find_service(service_id) -> Optional[Service]:
    if not service_id:
        return None
    return db.session.get(Service, service_id)


# Bookings

def _customer_booking_query():
    provider_user = aliased(User)
    return (
        db.session.query(Booking, ProviderProfile, provider_user, Service)
        .join(ProviderProfile, Booking.provider_id == ProviderProfile.id)
        .join(provider_user, ProviderProfile.user_id == provider_user.id)
        .join(Service, Booking.service_id == Service.id)
    )


def get_booking(booking_id) -> Optional[CustomerBookingView]:
    """Booking detail in the customer-facing shape"""
    row = _customer_booking_query().filter(Booking.id == booking_id).first()
    return _customer_booking_view(*row) if row else None


def list_customer_bookings(customer_id) -> List[CustomerBookingView]:
    rows = (
        _customer_booking_query()
        .filter(Booking.customer_id == customer_id)
        .order_by(Booking.created_at.desc())
        .all()
    )
    return [_customer_booking_view(*row) for row in rows]


def list_provider_bookings(profile_id) -> List[ProviderBookingView]:
    customer = aliased(User)
    rows = (
        db.session.query(Booking, customer, Service)
        .join(customer, Booking.customer_id == customer.id)
        .join(Service, Booking.service_id == Service.id)
        .filter(Booking.provider_id == profile_id)
        .order_by(Booking.created_at.desc())
        .all()
    )
    return [_provider_booking_view(*row) for row in rows]


def find_booking(booking_id) -> Optional[Booking]:
    if not booking_id:
        return None
    return db.session.get(Booking, booking_id)


# Profiles

def find_profile_for_user(user_id) -> Optional[ProviderProfile]:
    return ProviderProfile.query.filter_by(user_id=user_id).first()
