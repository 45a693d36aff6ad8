"""
Authentication tests
Tests identity-token login, user upsert, sessions and onboarding role choice
"""
import json
from datetime import timedelta

import jwt

from marketplace import db
from marketplace.models import User


class TestLogin:
    """Test exchanging identity tokens for a session"""

    def test_first_login_creates_user(self, app, client, identity_token):
        """Test first login inserts a customer user from the token claims"""
        token = identity_token(
            'idp-user-1',
            email='new@example.com', first_name='New', last_name='Person',
            profile_image_url='https://example.com/avatar.png'
        )

        response = client.post('/api/login', json={'id_token': token})

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['user']['id'] == 'idp-user-1'
        assert data['user']['email'] == 'new@example.com'
        assert data['user']['role'] == 'customer'

        with app.app_context():
            assert db.session.get(User, 'idp-user-1') is not None

    def test_login_updates_existing_user_and_keeps_role(self, app, client, user_factory, identity_token):
        """Test login upserts identity fields without touching the role"""
        user_id = user_factory(role='provider', email='old@example.com')
        token = identity_token(user_id, email='renamed@example.com', first_name='Renamed')

        response = client.post('/api/login', json={'id_token': token})

        assert response.status_code == 200
        with app.app_context():
            user = db.session.get(User, user_id)
            assert user.email == 'renamed@example.com'
            assert user.first_name == 'Renamed'
            assert user.role == 'provider'
            assert User.query.count() == 1

    def test_login_missing_token(self, client):
        response = client.post('/api/login', json={})

        assert response.status_code == 400

    def test_login_invalid_signature(self, client):
        """Test a token signed with the wrong secret is rejected"""
        token = jwt.encode({'sub': 'intruder'}, 'wrong-secret', algorithm='HS256')

        response = client.post('/api/login', json={'id_token': token})

        assert response.status_code == 401

    def test_login_expired_token(self, client, identity_token):
        token = identity_token('late-user', expires_in=timedelta(hours=-1))

        response = client.post('/api/login', json={'id_token': token})

        assert response.status_code == 401
        assert 'expired' in json.loads(response.data)['error'].lower()


class TestSession:
    """Test session-protected endpoints"""

    def test_current_user_requires_session(self, client):
        response = client.get('/api/auth/user')

        assert response.status_code == 401
        assert json.loads(response.data)['error'] == 'Unauthorized'

    def test_current_user(self, login_as, customer_id):
        client = login_as(customer_id)

        response = client.get('/api/auth/user')

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['id'] == customer_id
        assert data['full_name'] == 'Casey Customer'

    def test_logout_ends_session(self, login_as, customer_id):
        client = login_as(customer_id)

        assert client.post('/api/logout').status_code == 200

        assert client.get('/api/auth/user').status_code == 401


class TestUserType:
    """Test the onboarding role choice"""

    def test_become_provider(self, app, login_as, customer_id):
        client = login_as(customer_id)

        response = client.post('/api/user/type', json={'user_type': 'provider'})

        assert response.status_code == 200
        assert json.loads(response.data)['role'] == 'provider'
        with app.app_context():
            assert db.session.get(User, customer_id).role == 'provider'

    def test_role_can_be_changed_again(self, login_as, customer_id):
        client = login_as(customer_id)
        client.post('/api/user/type', json={'user_type': 'provider'})

        response = client.post('/api/user/type', json={'user_type': 'customer'})

        assert response.status_code == 200
        assert json.loads(response.data)['role'] == 'customer'

    def test_invalid_user_type(self, login_as, customer_id):
        client = login_as(customer_id)

        response = client.post('/api/user/type', json={'user_type': 'admin'})

        assert response.status_code == 400
        assert json.loads(response.data)['error'] == 'Invalid user type'

    def test_user_type_requires_session(self, client):
        response = client.post('/api/user/type', json={'user_type': 'provider'})

        assert response.status_code == 401
