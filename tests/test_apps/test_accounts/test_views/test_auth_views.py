"""Tests for authentication HTTP endpoints."""

import json

import pytest

from server.apps.accounts.logic import google_auth


def _post_json(client, path, payload):
    return client.post(path, data=json.dumps(payload), content_type='application/json')


@pytest.mark.django_db
class TestAuthViews:
    """Tests for /api/auth routes."""

    def test_register_then_profile(self, client):
        """Test registration returns a token that opens the profile."""
        registered = _post_json(client, '/api/auth/register', {
            'email': 'new@example.com',
            'password': 'secret123',
            'name': 'New User',
        })

        assert registered.status_code == 201
        body = registered.json()['data']
        assert body['user']['email'] == 'new@example.com'
        assert body['user']['emailVerified'] is False

        profile = client.get(
            '/api/auth/profile',
            headers={'Authorization': f'Bearer {body["token"]}'},
        )
        assert profile.status_code == 200
        assert profile.json()['data']['name'] == 'New User'
        assert 'createdAt' in profile.json()['data']

    def test_register_duplicate(self, client, user):
        """Test duplicate email is a 409."""
        response = _post_json(client, '/api/auth/register', {
            'email': user.email,
            'password': 'secret123',
        })

        assert response.status_code == 409

    @pytest.mark.parametrize('payload', [
        {'password': 'secret123'},
        {'email': 'a@example.com'},
        {'email': 'a@example.com', 'password': 'secret123', 'name': 5},
    ])
    def test_register_requires_fields(self, client, payload):
        """Test missing or mistyped fields are a 400."""
        assert _post_json(client, '/api/auth/register', payload).status_code == 400

    def test_register_rejects_malformed_json(self, client):
        """Test non-JSON bodies are a 400."""
        response = client.post(
            '/api/auth/register',
            data='{not json',
            content_type='application/json',
        )

        assert response.status_code == 400

    def test_login(self, client, user):
        """Test login success and failure envelopes."""
        ok = _post_json(client, '/api/auth/login', {
            'email': user.email,
            'password': 'testpass123',
        })
        bad = _post_json(client, '/api/auth/login', {
            'email': user.email,
            'password': 'nope',
        })

        assert ok.status_code == 200
        assert ok.json()['data']['user']['id'] == str(user.id)
        assert bad.status_code == 401
        assert bad.json() == {
            'error': {'message': 'Invalid email or password', 'statusCode': 401},
        }

    def test_google_login(self, client, monkeypatch):
        """Test ID token exchange."""
        monkeypatch.setattr(
            google_auth.google_id_token,
            'verify_oauth2_token',
            lambda token, request, audience: {
                'sub': 'google-9',
                'email': 'g@example.com',
                'email_verified': True,
            },
        )

        response = _post_json(client, '/api/auth/google', {'idToken': 'abc'})

        assert response.status_code == 200
        assert response.json()['data']['user']['email'] == 'g@example.com'

    def test_google_url(self, client, settings):
        """Test consent URL endpoint."""
        settings.GOOGLE_CLIENT_ID = 'client-1'

        response = client.get('/api/auth/google/url')

        assert response.json()['data']['authUrl'].startswith(
            'https://accounts.google.com/',
        )

    def test_profile_requires_token(self, client):
        """Test profile is private."""
        assert client.get('/api/auth/profile').status_code == 401
