"""
Service catalogue and provider profile tests
"""
import json
from datetime import datetime

import pytest

from marketplace import db
from marketplace.models import ProviderProfile, Service


class TestPublicCatalogue:
    """Test the unauthenticated service endpoints"""

    def test_list_services_is_public(self, client, service_id, provider):
        response = client.get('/api/services')

        assert response.status_code == 200
        data = json.loads(response.data)
        assert len(data) == 1
        service = data[0]
        assert service['id'] == service_id
        assert service['price_per_hour'] == '50.00'
        assert service['provider']['id'] == provider.profile_id
        assert service['provider']['user']['id'] == provider.user_id
        assert 'email' in service['provider']['user']

    def test_list_services_newest_first(self, client, provider, service_factory):
        older = service_factory(provider.profile_id, title='Older', created_at=datetime(2025, 1, 1))
        newer = service_factory(provider.profile_id, title='Newer', created_at=datetime(2025, 6, 1))

        data = json.loads(client.get('/api/services').data)

        assert [s['id'] for s in data] == [newer, older]

    def test_service_detail(self, client, service_id):
        response = client.get(f'/api/services/{service_id}')

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['title'] == 'Leak repair'
        assert data['provider']['location'] == 'Springfield'

    def test_service_detail_not_found(self, client):
        response = client.get('/api/services/does-not-exist')

        assert response.status_code == 404
        assert json.loads(response.data)['error'] == 'Service not found'

    def test_categories(self, client):
        data = json.loads(client.get('/api/services/categories').data)

        assert 'Plumbing' in data
        assert 'HVAC' in data


class TestCreateService:
    """Test publishing services"""

    payload = {
        'category': 'Electrical',
        'title': 'Outlet installation',
        'description': 'New outlets and switches',
        'price_per_hour': '75.5',
    }

    def test_create_service(self, app, login_as, provider):
        client = login_as(provider.user_id)

        response = client.post('/api/services', json=self.payload)

        assert response.status_code == 201
        data = json.loads(response.data)
        assert data['provider_id'] == provider.profile_id
        assert data['price_per_hour'] == '75.50'

    def test_forged_provider_id_is_replaced(self, app, login_as, provider, provider_factory):
        """Test the service is owned by the caller's profile, not the forged one"""
        victim = provider_factory()
        client = login_as(provider.user_id)

        response = client.post('/api/services', json=dict(self.payload, provider_id=victim.profile_id))

        assert response.status_code == 201
        service_id = json.loads(response.data)['id']
        with app.app_context():
            service = db.session.get(Service, service_id)
            assert service.provider_id == provider.profile_id
            assert Service.query.filter_by(provider_id=victim.profile_id).count() == 0

    def test_provider_without_profile_gets_404(self, login_as, user_factory):
        client = login_as(user_factory(role='provider'))

        response = client.post('/api/services', json=self.payload)

        assert response.status_code == 404
        assert json.loads(response.data)['error'] == 'Provider profile not found'

    def test_provider_services_route_creates_too(self, login_as, provider):
        client = login_as(provider.user_id)

        response = client.post('/api/provider/services', json=self.payload)

        assert response.status_code == 201

    def test_invalid_category(self, login_as, provider):
        client = login_as(provider.user_id)

        response = client.post('/api/services', json=dict(self.payload, category='Rocketry'))

        assert response.status_code == 400

    def test_missing_price(self, login_as, provider):
        client = login_as(provider.user_id)
        payload = {k: v for k, v in self.payload.items() if k != 'price_per_hour'}

        response = client.post('/api/services', json=payload)

        assert response.status_code == 400
        assert 'price_per_hour' in json.loads(response.data)['error']

    @pytest.mark.parametrize('price', ['-5', '0', '0.001', '0.004', '99999999.995', '1e30'])
    def test_non_positive_price(self, app, login_as, provider, price):
        client = login_as(provider.user_id)

        response = client.post('/api/services', json=dict(self.payload, price_per_hour=price))

        assert response.status_code == 400
        with app.app_context():
            assert Service.query.count() == 0

    def test_price_rounds_half_up(self, login_as, provider):
        client = login_as(provider.user_id)

        response = client.post('/api/services', json=dict(self.payload, price_per_hour='0.005'))

        assert response.status_code == 201
        assert json.loads(response.data)['price_per_hour'] == '0.01'

    def test_create_requires_session(self, client):
        response = client.post('/api/services', json=self.payload)

        assert response.status_code == 401


class TestProviderServices:
    """Test a provider's own service listing"""

    def test_lists_only_own_services(self, login_as, provider, provider_factory, service_factory, service_id):
        other = provider_factory()
        service_factory(other.profile_id, title='Not mine')
        client = login_as(provider.user_id)

        response = client.get('/api/provider/services')

        assert response.status_code == 200
        data = json.loads(response.data)
        assert [s['id'] for s in data] == [service_id]

    def test_without_profile(self, login_as, user_factory):
        client = login_as(user_factory(role='provider'))

        response = client.get('/api/provider/services')

        assert response.status_code == 404


class TestProviderProfile:
    """Test provider profile setup"""

    def test_profile_not_found(self, login_as, user_factory):
        client = login_as(user_factory(role='provider'))

        response = client.get('/api/provider/profile')

        assert response.status_code == 404

    def test_create_and_fetch_profile(self, app, login_as, user_factory):
        user_id = user_factory(role='provider')
        client = login_as(user_id)

        response = client.post('/api/provider/profile', json={
            'bio': 'Twenty years of fixing things around the house',
            'phone': '555-123-4567',
            'location': 'Shelbyville',
            'years_experience': '20',
            'user_id': 'someone-else',
            'verified': True,
        })

        assert response.status_code == 201
        created = json.loads(response.data)
        assert created['user_id'] == user_id
        assert created['verified'] is False

        fetched = json.loads(client.get('/api/provider/profile').data)
        assert fetched['id'] == created['id']
        assert fetched['location'] == 'Shelbyville'

    def test_second_profile_rejected(self, app, login_as, provider):
        client = login_as(provider.user_id)

        response = client.post('/api/provider/profile', json={'bio': 'Again'})

        assert response.status_code == 400
        with app.app_context():
            assert ProviderProfile.query.filter_by(user_id=provider.user_id).count() == 1
