"""Tests for File model."""

import pytest

from server.apps.files.models import File


@pytest.mark.django_db
def test_file_model_str(user, make_file):
    """Test File __str__ method."""
    file_instance = make_file(user)

    assert str(file_instance) == f'{user.id}:{file_instance.storage_key}'


@pytest.mark.django_db
def test_file_get_category(user):
    """Test get_category reads the category from the storage key."""
    file_instance = File.objects.create(
        owner=user,
        name='cat.png',
        original_name='cat.png',
        size=100,
        mime_type='image/png',
        storage_key=f'{user.id}/image/cat.png',
    )

    assert file_instance.get_category() == 'image'


@pytest.mark.django_db
def test_file_get_extension(user, make_file):
    """Test get_extension method extracts extension correctly."""
    file_instance = make_file(user, 'report.PDF', mime_type='application/pdf')

    # Should return lowercase without dot
    assert file_instance.get_extension() == 'pdf'


@pytest.mark.django_db
def test_default_manager_hides_trash(user, make_file):
    """Test objects hides soft-deleted files and all_objects does not."""
    make_file(user, 'live.txt')
    make_file(user, 'gone.txt', deleted=True)

    assert File.objects.count() == 1
    assert File.all_objects.count() == 2


@pytest.mark.django_db
def test_file_tags_in_insertion_order(user, make_file):
    """Test get_tags returns tags as attached."""
    file_instance = make_file(user, tags=['work', 'important'])

    assert file_instance.get_tags() == ['work', 'important']


@pytest.mark.django_db
def test_file_cascade_delete_with_user(user, make_file):
    """Test files are deleted when user is deleted."""
    make_file(user)

    assert File.objects.count() == 1

    user.delete()

    assert File.all_objects.count() == 0
