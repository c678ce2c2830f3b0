"""Tests for bearer token helpers."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from django.conf import settings

from server.apps.accounts.logic.tokens import decode_token, issue_token
from server.common.exceptions import UnauthenticatedError


@pytest.mark.django_db
class TestTokens:
    """Tests for issue_token and decode_token."""

    def test_round_trip_carries_identity(self, user):
        """Test issued token decodes to the same user."""
        claims = decode_token(issue_token(user))

        assert claims.user_id == str(user.id)
        assert claims.email == user.email

    def test_expired_token(self, user):
        """Test expired tokens are reported as such."""
        token = jwt.encode(
            {
                'id': str(user.id),
                'email': user.email,
                'exp': datetime.now(tz=UTC) - timedelta(seconds=1),
            },
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )

        with pytest.raises(UnauthenticatedError, match='Token expired'):
            decode_token(token)

    def test_wrong_secret(self, user):
        """Test tokens signed with another key are invalid."""
        token = jwt.encode(
            {
                'id': str(user.id),
                'email': user.email,
                'exp': datetime.now(tz=UTC) + timedelta(days=1),
            },
            'some-other-secret-of-sufficient-length',
            algorithm=settings.JWT_ALGORITHM,
        )

        with pytest.raises(UnauthenticatedError, match='Invalid token'):
            decode_token(token)

    def test_missing_claims(self):
        """Test tokens without identity claims are invalid."""
        token = jwt.encode(
            {'exp': datetime.now(tz=UTC) + timedelta(days=1)},
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )

        with pytest.raises(UnauthenticatedError):
            decode_token(token)
