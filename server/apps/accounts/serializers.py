"""JSON projections of account data."""

from typing import Any

from server.apps.accounts.models import User


def serialize_user(user: User) -> dict[str, Any]:
    """Public projection returned with auth responses."""
    return {
        'id': user.id,
        'email': user.email,
        'name': user.name or None,
        'avatar': user.avatar or None,
        'emailVerified': user.email_verified,
    }


def serialize_profile(user: User) -> dict[str, Any]:
    """Profile projection including timestamps."""
    return {
        **serialize_user(user),
        'createdAt': user.created_at,
        'updatedAt': user.updated_at,
    }


def serialize_auth(user: User, token: str) -> dict[str, Any]:
    """Envelope payload for register, login and Google sign-in."""
    return {'user': serialize_user(user), 'token': token}
