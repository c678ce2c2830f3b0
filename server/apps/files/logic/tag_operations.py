"""Business logic for the per-user tag palette."""

import logging
import re
import uuid
from typing import TYPE_CHECKING, Final

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import QuerySet

from server.apps.files.models import Tag
from server.common.exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
)

if TYPE_CHECKING:
    from server.apps.accounts.models import User

logger = logging.getLogger(__name__)

_COLOR_PATTERN: Final = re.compile(r'^#[0-9A-Fa-f]{6}$')
_NAME_MAX_LENGTH: Final = 100


def list_tags(user: 'User') -> QuerySet[Tag]:
    """List the user's tags ordered by name."""
    return Tag.objects.filter(user=user).order_by('name')


def create_tag(user: 'User', name: str, color: str = '') -> Tag:
    """Create a tag in the user's palette.

    Args:
        user: Tag owner.
        name: Tag name, unique per user.
        color: Hex color '#RRGGBB' or empty.

    Returns:
        Created Tag.

    Raises:
        InvalidArgumentError: If name or color is malformed.
        ConflictError: If the user already has a tag with this name.
    """
    name = (name or '').strip()
    if not name:
        raise InvalidArgumentError('Tag name is required')
    if len(name) > _NAME_MAX_LENGTH:
        raise InvalidArgumentError(
            f'Tag name must be at most {_NAME_MAX_LENGTH} characters',
        )
    if color and not _COLOR_PATTERN.match(color):
        raise InvalidArgumentError('Tag color must look like #RRGGBB')

    if Tag.objects.filter(user=user, name=name).exists():
        raise ConflictError('Tag with this name already exists')

    try:
        with transaction.atomic():
            tag = Tag.objects.create(user=user, name=name, color=color)
    except IntegrityError as error:
        raise ConflictError('Tag with this name already exists') from error

    logger.info('Tag created: %s (user: %s)', name, user.id)
    return tag


def delete_tag(user: 'User', tag_id: uuid.UUID | str) -> None:
    """Delete a tag from the user's palette.

    File tags are free text and are left untouched.

    Args:
        user: Tag owner.
        tag_id: Tag primary key.

    Raises:
        NotFoundError: If tag does not exist or belongs to another user.
    """
    try:
        deleted, _ = Tag.objects.filter(id=tag_id, user=user).delete()
    except ValidationError as error:
        raise NotFoundError('Tag not found') from error

    if not deleted:
        raise NotFoundError('Tag not found')

    logger.info('Tag deleted: %s (user: %s)', tag_id, user.id)
