"""Tests for Google sign-in."""

from urllib.parse import parse_qs, urlparse

import pytest

from server.apps.accounts.logic import google_auth
from server.apps.accounts.models import User
from server.common.exceptions import ConflictError, ServiceError, UnauthenticatedError


def _claims(**overrides):
    claims = {
        'sub': 'google-123',
        'email': 'test@example.com',
        'name': 'Test User',
        'picture': 'https://example.com/avatar.png',
        'email_verified': True,
    }
    claims.update(overrides)
    return claims


@pytest.fixture
def google_claims(monkeypatch):
    """Replace Google token verification with a fixed claim set."""
    claims = _claims()

    def fake_verify(token, request, audience):
        if token != 'valid-google-token':
            raise ValueError('Wrong number of segments in token')
        return claims

    monkeypatch.setattr(
        google_auth.google_id_token,
        'verify_oauth2_token',
        fake_verify,
    )
    return claims


@pytest.mark.django_db
class TestAuthenticateWithGoogle:
    """Tests for authenticate_with_google function."""

    def test_creates_oauth_only_user(self, google_claims):
        """Test first sign-in creates a user without a password."""
        google_claims['email'] = 'fresh@example.com'

        user, token = google_auth.authenticate_with_google('valid-google-token')

        assert token
        assert user.google_id == 'google-123'
        assert user.email_verified is True
        assert user.avatar == 'https://example.com/avatar.png'
        assert not user.has_usable_password()

    def test_links_existing_credential_account(self, user, google_claims):
        """Test matching email links Google to the existing account."""
        linked, _ = google_auth.authenticate_with_google('valid-google-token')

        assert linked.id == user.id
        linked.refresh_from_db()
        assert linked.google_id == 'google-123'
        assert linked.google_email == 'test@example.com'
        assert linked.check_password('testpass123')
        assert User.objects.count() == 1

    def test_refreshes_profile_on_later_sign_in(self, google_claims):
        """Test display fields follow the latest Google profile."""
        google_auth.authenticate_with_google('valid-google-token')
        google_claims['name'] = 'Renamed'

        user, _ = google_auth.authenticate_with_google('valid-google-token')

        assert user.name == 'Renamed'
        assert User.objects.count() == 1

    def test_refuses_relinking_to_another_subject(self, user, google_claims):
        """Test an account linked to one Google subject keeps it."""
        User.objects.filter(id=user.id).update(google_id='google-other')

        with pytest.raises(ConflictError):
            google_auth.authenticate_with_google('valid-google-token')

        user.refresh_from_db()
        assert user.google_id == 'google-other'

    def test_invalid_token(self, google_claims):
        """Test verification failures become 401s."""
        with pytest.raises(UnauthenticatedError, match='Invalid Google token'):
            google_auth.authenticate_with_google('forged')

    def test_token_without_email(self, google_claims):
        """Test claims without email are refused."""
        google_claims['email'] = ''

        with pytest.raises(UnauthenticatedError):
            google_auth.authenticate_with_google('valid-google-token')


class TestBuildGoogleAuthUrl:
    """Tests for build_google_auth_url function."""

    def test_url_contains_client_and_scopes(self, settings):
        """Test consent URL carries configured client id."""
        settings.GOOGLE_CLIENT_ID = 'client-1'
        settings.GOOGLE_REDIRECT_URI = 'http://localhost:3000/cb'

        query = parse_qs(urlparse(google_auth.build_google_auth_url()).query)

        assert query['client_id'] == ['client-1']
        assert query['redirect_uri'] == ['http://localhost:3000/cb']
        assert 'userinfo.email' in query['scope'][0]

    def test_unconfigured_client(self, settings):
        """Test missing client id is a server error."""
        settings.GOOGLE_CLIENT_ID = ''

        with pytest.raises(ServiceError):
            google_auth.build_google_auth_url()
