"""
Pytest configuration and fixtures for the marketplace backend tests
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace

import jwt
import pytest

from marketplace import create_app, db
from marketplace.core.payments import PaymentIntent
from marketplace.models import Booking, ProviderProfile, Service, User


class FakePaymentGateway:
    """Records payment intent requests instead of calling Stripe"""

    def __init__(self, configured=True, error=None):
        self.configured = configured
        self.error = error
        self.calls = []

    def create_payment_intent(self, amount, currency, metadata):
        self.calls.append({'amount': amount, 'currency': currency, 'metadata': metadata})
        if self.error is not None:
            raise self.error
        intent_id = f'pi_test_{len(self.calls)}'
        return PaymentIntent(id=intent_id, client_secret=f'{intent_id}_secret_test')


@pytest.fixture
def gateway():
    return FakePaymentGateway()


@pytest.fixture
def app(gateway):
    """Create application instance for testing"""
    app = create_app('testing')
    app.extensions['payment_gateway'] = gateway

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Anonymous test client"""
    return app.test_client()


def make_identity_token(app, sub, expires_in=timedelta(hours=1), **claims):
    payload = {'sub': sub, 'exp': datetime.now(timezone.utc) + expires_in}
    payload.update(claims)
    return jwt.encode(payload, app.config['IDENTITY_TOKEN_SECRET'], algorithm='HS256')


@pytest.fixture
def login_as(app):
    """Return a test client with a session for the given user id"""
    def _login(user_id, **claims):
        client = app.test_client()
        response = client.post('/api/login', json={'id_token': make_identity_token(app, user_id, **claims)})
        assert response.status_code == 200, response.data
        return client

    return _login


@pytest.fixture
def user_factory(app):
    """Factory for creating users; returns the new user's id"""
    counter = {'n': 0}

    def _create_user(role='customer', **kwargs):
        counter['n'] += 1
        defaults = {
            'email': f'user{counter["n"]}@example.com',
            'first_name': 'Test',
            'last_name': f'User{counter["n"]}',
            'role': role,
        }
        defaults.update(kwargs)
        with app.app_context():
            user = User(**defaults)
            db.session.add(user)
            db.session.commit()
            return user.id

    return _create_user


@pytest.fixture
def provider_factory(app, user_factory):
    """Factory for provider users with a profile"""
    def _create_provider(**profile_kwargs):
        user_id = user_factory(role='provider')
        defaults = {
            'bio': 'Licensed and insured handyman',
            'phone': '555-0100',
            'location': 'Springfield',
            'years_experience': '10',
        }
        defaults.update(profile_kwargs)
        with app.app_context():
            profile = ProviderProfile(user_id=user_id, **defaults)
            db.session.add(profile)
            db.session.commit()
            return SimpleNamespace(user_id=user_id, profile_id=profile.id)

    return _create_provider


@pytest.fixture
def service_factory(app):
    def _create_service(profile_id, **kwargs):
        defaults = {
            'category': 'Plumbing',
            'title': 'Leak repair',
            'description': 'Fix leaking taps and pipes',
            'price_per_hour': Decimal('50.00'),
        }
        defaults.update(kwargs)
        with app.app_context():
            service = Service(provider_id=profile_id, **defaults)
            db.session.add(service)
            db.session.commit()
            return service.id

    return _create_service


@pytest.fixture
def booking_factory(app):
    def _create_booking(customer_id, service_id, **kwargs):
        with app.app_context():
            service = db.session.get(Service, service_id)
            defaults = {
                'scheduled_date': datetime.now(timezone.utc) + timedelta(days=2),
                'status': 'pending',
                'estimated_hours': Decimal('2.0'),
                'total_price': Decimal('100.00'),
                'address': '12 Elm St',
            }
            defaults.update(kwargs)
            booking = Booking(
                customer_id=customer_id,
                provider_id=service.provider_id,
                service_id=service_id,
                **defaults
            )
            db.session.add(booking)
            db.session.commit()
            return booking.id

    return _create_booking


@pytest.fixture
def customer_id(user_factory):
    return user_factory(role='customer', first_name='Casey', last_name='Customer')


@pytest.fixture
def provider(provider_factory):
    return provider_factory()


@pytest.fixture
def service_id(service_factory, provider):
    return service_factory(provider.profile_id)


@pytest.fixture
def booking_id(booking_factory, customer_id, service_id):
    return booking_factory(customer_id, service_id)


@pytest.fixture
def identity_token(app):
    """Sign identity-provider tokens with the test secret"""
    def _token(sub, **kwargs):
        return make_identity_token(app, sub, **kwargs)

    return _token
