"""
Authentication tests
Tests registration, login, token refresh, password reset,
email verification and OAuth token exchange
"""
import json
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

import jwt

from marketplace.models import Notification, ProviderProfile, User
from marketplace.utils.tokens import generate_purpose_token

from conftest import PASSWORD


def _register_body(**overrides):
    body = {
        'email': 'new.user@example.com',
        'password': 'SecurePass123',
        'firstName': 'Liga',
        'lastName': 'Kalnina',
    }
    body.update(overrides)
    return body


class TestRegistration:
    """Test user registration flows"""

    def test_register_customer_success(self, client):
        response = client.post('/api/auth/register', json=_register_body(phone='+37120000000'))

        assert response.status_code == 201
        data = json.loads(response.data)
        assert data['success'] is True
        assert data['message'] == 'User registered successfully'
        assert data['token']
        assert data['user']['email'] == 'new.user@example.com'
        assert data['user']['role'] == 'CUSTOMER'
        assert data['user']['language'] == 'LATVIAN'
        assert data['user']['isVerified'] is False
        assert 'password' not in data['user']
        assert 'passwordHash' not in data['user']

        user = User.query.filter_by(email='new.user@example.com').one()
        assert user.provider_profile is None
        assert user.password_hash != 'SecurePass123'

    def test_register_creates_welcome_notification(self, client):
        response = client.post('/api/auth/register', json=_register_body())
        user_id = json.loads(response.data)['user']['id']

        notifications = Notification.query.filter_by(user_id=user_id).all()
        assert len(notifications) == 1
        assert notifications[0].title == 'Welcome to VisiPakalpojumi!'

    def test_register_provider_creates_one_profile(self, client):
        response = client.post('/api/auth/register', json=_register_body(role='PROVIDER'))

        assert response.status_code == 201
        user_id = json.loads(response.data)['user']['id']
        assert ProviderProfile.query.filter_by(user_id=user_id).count() == 1

    def test_register_duplicate_email(self, client, customer):
        """Test registration with existing email fails and creates nothing"""
        before = User.query.count()
        response = client.post('/api/auth/register', json=_register_body(email='ANNA@example.com'))

        assert response.status_code == 400
        data = json.loads(response.data)
        assert data['success'] is False
        assert data['message'] == 'User with this email already exists'
        assert User.query.count() == before

    def test_register_normalizes_email(self, client):
        response = client.post('/api/auth/register', json=_register_body(email='  Mixed.Case@Example.COM '))

        assert response.status_code == 201
        assert json.loads(response.data)['user']['email'] == 'mixed.case@example.com'

    def test_register_weak_password(self, client):
        response = client.post('/api/auth/register', json=_register_body(password='lowercase1'))

        assert response.status_code == 400
        data = json.loads(response.data)
        assert data['message'] == 'Validation failed'
        assert [e['field'] for e in data['errors']] == ['password']

    def test_register_invalid_fields(self, client):
        response = client.post('/api/auth/register', json=_register_body(
            email='not-an-email', firstName='A', role='ADMIN',
        ))

        assert response.status_code == 400
        fields = {e['field'] for e in json.loads(response.data)['errors']}
        assert fields == {'email', 'firstName', 'role'}

    def test_register_missing_body(self, client):
        response = client.post('/api/auth/register')

        assert response.status_code == 400
        fields = {e['field'] for e in json.loads(response.data)['errors']}
        assert {'email', 'password', 'firstName', 'lastName'} <= fields


class TestLogin:
    """Test login flows"""

    def test_login_success(self, client, customer):
        response = client.post('/api/auth/login', json={
            'email': 'anna@example.com', 'password': PASSWORD,
        })

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['message'] == 'Login successful'
        assert data['user']['id'] == customer.id

        payload = jwt.decode(data['token'], options={'verify_signature': False})
        assert payload['userId'] == customer.id
        assert payload['email'] == customer.email
        assert payload['role'] == 'CUSTOMER'

    def test_login_wrong_password(self, client, customer):
        response = client.post('/api/auth/login', json={
            'email': 'anna@example.com', 'password': 'WrongPass123',
        })

        assert response.status_code == 401
        assert json.loads(response.data)['message'] == 'Invalid credentials'

    def test_login_unknown_email(self, client):
        response = client.post('/api/auth/login', json={
            'email': 'nobody@example.com', 'password': PASSWORD,
        })

        assert response.status_code == 401
        assert json.loads(response.data)['message'] == 'Invalid credentials'

    def test_login_deactivated_account_same_message(self, client, user_factory):
        user_factory(email='gone@example.com', is_active=False)

        response = client.post('/api/auth/login', json={
            'email': 'gone@example.com', 'password': PASSWORD,
        })

        assert response.status_code == 401
        assert json.loads(response.data)['message'] == 'Invalid credentials'

    def test_login_oauth_only_account(self, client, db_session):
        db_session.add(User(email='oauth@example.com', first_name='O', last_name='Auth', google_id='g-1'))
        db_session.commit()

        response = client.post('/api/auth/login', json={
            'email': 'oauth@example.com', 'password': PASSWORD,
        })

        assert response.status_code == 401

    def test_login_requires_password(self, client):
        response = client.post('/api/auth/login', json={'email': 'anna@example.com', 'password': ''})

        assert response.status_code == 400
        assert json.loads(response.data)['errors'][0]['field'] == 'password'


class TestProtectedRoutes:
    """Test bearer token checks"""

    def test_missing_token(self, client):
        response = client.get('/api/users/profile')

        assert response.status_code == 401
        assert json.loads(response.data)['message'] == 'Access token required'

    def test_garbage_token(self, client):
        response = client.get('/api/users/profile', headers={'Authorization': 'Bearer not.a.token'})

        assert response.status_code == 401
        assert json.loads(response.data)['message'] == 'Invalid or expired token'

    def test_expired_token(self, app, client, customer):
        token = _token_for(app, customer, exp_delta=timedelta(minutes=-1))
        response = client.get('/api/users/profile', headers={'Authorization': f'Bearer {token}'})

        assert response.status_code == 401

    def test_purpose_token_is_not_an_access_token(self, app, client, customer):
        token = generate_purpose_token(customer, 'email_verification', timedelta(hours=1))
        response = client.get('/api/users/profile', headers={'Authorization': f'Bearer {token}'})

        assert response.status_code == 401


def _token_for(app, user, exp_delta, secret=None):
    now = datetime.now(timezone.utc)
    return jwt.encode(
        {
            'userId': user.id,
            'email': user.email,
            'role': user.role,
            'iat': now + exp_delta - timedelta(minutes=5),
            'exp': now + exp_delta,
        },
        secret or app.config['JWT_SECRET_KEY'],
        algorithm='HS256',
    )


class TestRefreshToken:
    """Test token refresh"""

    def test_refresh_valid_token(self, client, auth_headers, customer):
        response = client.post('/api/auth/refresh-token', headers=auth_headers)

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['token']
        assert data['user']['id'] == customer.id

    def test_refresh_expired_token_within_grace(self, app, client, customer):
        token = _token_for(app, customer, exp_delta=timedelta(days=-1))

        response = client.post('/api/auth/refresh-token', headers={'Authorization': f'Bearer {token}'})

        assert response.status_code == 200
        new_token = json.loads(response.data)['token']
        assert client.get(
            '/api/users/profile', headers={'Authorization': f'Bearer {new_token}'}
        ).status_code == 200

    def test_refresh_expired_beyond_grace(self, app, client, customer):
        token = _token_for(app, customer, exp_delta=timedelta(days=-8))

        response = client.post('/api/auth/refresh-token', headers={'Authorization': f'Bearer {token}'})

        assert response.status_code == 401

    def test_refresh_rejects_bad_signature(self, app, client, customer):
        token = _token_for(app, customer, exp_delta=timedelta(days=-1), secret='someone-elses-secret')

        response = client.post('/api/auth/refresh-token', headers={'Authorization': f'Bearer {token}'})

        assert response.status_code == 401

    def test_refresh_inactive_user(self, client, auth_headers, customer, db_session):
        customer.is_active = False
        db_session.commit()

        response = client.post('/api/auth/refresh-token', headers=auth_headers)

        assert response.status_code == 401

    def test_refresh_without_token(self, client):
        assert client.post('/api/auth/refresh-token').status_code == 401


class TestPasswordReset:
    """Test forgot / reset password"""

    def test_forgot_password_same_reply_for_unknown_email(self, client, customer):
        known = client.post('/api/auth/forgot-password', json={'email': 'anna@example.com'})
        unknown = client.post('/api/auth/forgot-password', json={'email': 'nobody@example.com'})

        assert known.status_code == unknown.status_code == 200
        assert json.loads(known.data)['message'] == json.loads(unknown.data)['message']

    def test_forgot_password_logs_reset_link(self, client, customer):
        with patch('marketplace.routes.auth.mailer.send_password_reset_email') as send:
            client.post('/api/auth/forgot-password', json={'email': 'anna@example.com'})

        send.assert_called_once()
        assert send.call_args[0][0].id == customer.id

    def test_reset_password_flow(self, app, client, customer):
        token = generate_purpose_token(customer, 'password_reset', timedelta(hours=1))

        response = client.post('/api/auth/reset-password', json={
            'token': token, 'newPassword': 'BrandNew123',
        })
        assert response.status_code == 200

        login = client.post('/api/auth/login', json={
            'email': 'anna@example.com', 'password': 'BrandNew123',
        })
        assert login.status_code == 200

    def test_reset_token_works_once(self, client, customer):
        token = generate_purpose_token(customer, 'password_reset', timedelta(hours=1))
        client.post('/api/auth/reset-password', json={'token': token, 'newPassword': 'BrandNew123'})

        response = client.post('/api/auth/reset-password', json={
            'token': token, 'newPassword': 'Another123',
        })

        assert response.status_code == 400

    def test_reset_rejects_wrong_purpose(self, client, customer):
        token = generate_purpose_token(customer, 'email_verification', timedelta(hours=1))

        response = client.post('/api/auth/reset-password', json={
            'token': token, 'newPassword': 'BrandNew123',
        })

        assert response.status_code == 400

    def test_reset_rejects_expired_token(self, client, customer):
        token = generate_purpose_token(customer, 'password_reset', timedelta(seconds=-1))

        response = client.post('/api/auth/reset-password', json={
            'token': token, 'newPassword': 'BrandNew123',
        })

        assert response.status_code == 400

    def test_reset_requires_strong_password(self, client, customer):
        token = generate_purpose_token(customer, 'password_reset', timedelta(hours=1))

        response = client.post('/api/auth/reset-password', json={'token': token, 'newPassword': 'short'})

        assert response.status_code == 400
        assert json.loads(response.data)['errors'][0]['field'] == 'newPassword'


class TestVerifyEmail:

    def test_verify_email(self, client, customer, db_session):
        token = generate_purpose_token(customer, 'email_verification', timedelta(hours=24))

        response = client.post('/api/auth/verify-email', json={'token': token})

        assert response.status_code == 200
        db_session.refresh(customer)
        assert customer.is_verified is True

    def test_verify_email_bad_token(self, client):
        response = client.post('/api/auth/verify-email', json={'token': 'nope'})

        assert response.status_code == 400


def _provider_reply(status=200, payload=None):
    response = MagicMock()
    response.status_code = status
    response.json.return_value = payload or {}
    return response


class TestOAuth:
    """Test OAuth access-token exchange (provider HTTP calls are mocked)"""

    GOOGLE_PROFILE = {
        'sub': 'google-123',
        'email': 'Maris@Example.com',
        'given_name': 'Maris',
        'family_name': 'Egle',
        'picture': 'https://example.com/maris.png',
    }

    @patch('marketplace.services.oauth.requests.get')
    def test_google_creates_verified_customer(self, mock_get, client):
        mock_get.return_value = _provider_reply(payload=self.GOOGLE_PROFILE)

        response = client.post('/api/auth/oauth/google', json={'accessToken': 'ya29.token'})

        assert response.status_code == 201
        data = json.loads(response.data)
        assert data['user']['email'] == 'maris@example.com'
        assert data['user']['role'] == 'CUSTOMER'
        assert data['user']['isVerified'] is True
        user = User.query.filter_by(google_id='google-123').one()
        assert user.password_hash is None

        _, kwargs = mock_get.call_args
        assert kwargs['headers'] == {'Authorization': 'Bearer ya29.token'}

    @patch('marketplace.services.oauth.requests.get')
    def test_google_links_existing_account_by_email(self, mock_get, client, customer, db_session):
        mock_get.return_value = _provider_reply(payload=dict(self.GOOGLE_PROFILE, email='anna@example.com'))

        response = client.post('/api/auth/oauth/google', json={'accessToken': 'ya29.token'})

        assert response.status_code == 200
        assert json.loads(response.data)['user']['id'] == customer.id
        db_session.refresh(customer)
        assert customer.google_id == 'google-123'

    @patch('marketplace.services.oauth.requests.get')
    def test_facebook_login(self, mock_get, client):
        mock_get.return_value = _provider_reply(payload={
            'id': 'fb-9', 'email': 'zane@example.com', 'first_name': 'Zane', 'last_name': 'Vitola',
        })

        response = client.post('/api/auth/oauth/facebook', json={'accessToken': 'EAAB'})

        assert response.status_code == 201
        assert User.query.filter_by(facebook_id='fb-9').count() == 1
        _, kwargs = mock_get.call_args
        assert kwargs['params']['access_token'] == 'EAAB'

    @patch('marketplace.services.oauth.requests.get')
    def test_provider_rejects_token(self, mock_get, client):
        mock_get.return_value = _provider_reply(status=401)

        response = client.post('/api/auth/oauth/google', json={'accessToken': 'expired'})

        assert response.status_code == 401

    @patch('marketplace.services.oauth.requests.get')
    def test_inactive_user_rejected(self, mock_get, client, user_factory):
        user_factory(email='maris@example.com', is_active=False)
        mock_get.return_value = _provider_reply(payload=self.GOOGLE_PROFILE)

        response = client.post('/api/auth/oauth/google', json={'accessToken': 'ya29.token'})

        assert response.status_code == 401

    def test_unknown_provider(self, client):
        response = client.post('/api/auth/oauth/myspace', json={'accessToken': 'x'})

        assert response.status_code == 404
