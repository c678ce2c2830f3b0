"""Tests for credential registration and login."""

import pytest

from server.apps.accounts.logic.auth_operations import get_profile, login, register
from server.apps.accounts.logic.tokens import decode_token
from server.apps.accounts.models import User
from server.common.exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    UnauthenticatedError,
)


@pytest.mark.django_db
class TestRegister:
    """Tests for register function."""

    def test_register_creates_user_and_token(self):
        """Test new account is unverified and gets a token."""
        user, token = register('New@Example.com', 'secret123', name='New User')

        assert user.email == 'New@example.com'
        assert user.name == 'New User'
        assert user.email_verified is False
        assert user.check_password('secret123')
        assert decode_token(token).user_id == str(user.id)

    def test_register_duplicate_email(self, user):
        """Test emails are unique regardless of case."""
        with pytest.raises(ConflictError):
            register(user.email.upper(), 'secret123')

    @pytest.mark.parametrize(('email', 'password'), [
        ('not-an-email', 'secret123'),
        ('valid@example.com', '123'),
    ])
    def test_register_validation(self, email, password):
        """Test malformed email and short password are rejected."""
        with pytest.raises(InvalidArgumentError):
            register(email, password)

        assert not User.objects.exists()


@pytest.mark.django_db
class TestLogin:
    """Tests for login function."""

    def test_login_success(self, user):
        """Test correct credentials return a token for the user."""
        logged_in, token = login('test@example.com', 'testpass123')

        assert logged_in == user
        assert decode_token(token).email == user.email

    @pytest.mark.parametrize(('email', 'password'), [
        ('test@example.com', 'wrong-password'),
        ('nobody@example.com', 'testpass123'),
    ])
    def test_login_failure_is_uniform(self, user, email, password):
        """Test unknown email and wrong password look the same."""
        with pytest.raises(UnauthenticatedError, match='Invalid email or password'):
            login(email, password)

    def test_google_only_account(self):
        """Test accounts without a password are sent to Google sign-in."""
        User.objects.create_user(email='oauth@example.com', google_id='g-1')

        with pytest.raises(
            UnauthenticatedError,
            match='This account requires Google authentication',
        ):
            login('oauth@example.com', 'anything')

    def test_inactive_user(self, user):
        """Test deactivated accounts cannot sign in."""
        User.objects.filter(id=user.id).update(is_active=False)

        with pytest.raises(UnauthenticatedError):
            login('test@example.com', 'testpass123')


@pytest.mark.django_db
def test_get_profile_of_missing_user():
    """Test profile lookup for a deleted account."""
    with pytest.raises(NotFoundError):
        get_profile('00000000-0000-0000-0000-000000000000')
