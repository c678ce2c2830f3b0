"""Database models for accounts app."""

import uuid
from typing import Any, ClassVar, Final, final, override

from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.contrib.auth.models import PermissionsMixin
from django.db import models

_NAME_MAX_LENGTH: Final = 255
_GOOGLE_ID_MAX_LENGTH: Final = 255
_AVATAR_MAX_LENGTH: Final = 1024


class UserManager(BaseUserManager):
    """Manager creating users keyed by email."""

    use_in_migrations = True

    def create_user(
        self,
        email: str,
        password: str | None = None,
        **extra_fields: Any,
    ) -> 'User':
        """Create a user.

        Users without a password (Google-only accounts) get an
        unusable password and can only sign in through OAuth.

        Args:
            email: Unique email address.
            password: Raw password or None.
            extra_fields: Other model fields.

        Returns:
            Saved User instance.
        """
        if not email:
            raise ValueError('Email is required')
        user = self.model(email=self.normalize_email(email), **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(
        self,
        email: str,
        password: str | None = None,
        **extra_fields: Any,
    ) -> 'User':
        """Create a staff superuser for the admin site."""
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        return self.create_user(email, password, **extra_fields)


@final
class User(AbstractBaseUser, PermissionsMixin):
    """Account owning files, tags and shares.

    Created on registration or on the first Google sign-in. Google
    profile fields are refreshed on every later Google sign-in.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    email = models.EmailField(unique=True)

    name = models.CharField(max_length=_NAME_MAX_LENGTH, blank=True, default='')

    google_id = models.CharField(
        max_length=_GOOGLE_ID_MAX_LENGTH,
        unique=True,
        null=True,
        blank=True,
        help_text='Subject of the Google ID token',
    )

    google_email = models.EmailField(blank=True, default='')

    avatar = models.URLField(max_length=_AVATAR_MAX_LENGTH, blank=True, default='')

    email_verified = models.BooleanField(default=False)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects: ClassVar[UserManager] = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS: ClassVar[list[str]] = []

    class Meta:
        """Model metadata."""

        verbose_name = 'User'  # type: ignore[mutable-override]
        verbose_name_plural = 'Users'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-created_at']

    @override
    def __str__(self) -> str:
        """String representation."""
        return self.email
