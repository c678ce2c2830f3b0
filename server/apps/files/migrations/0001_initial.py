import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='File',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(help_text='Resolved storage-facing name', max_length=255)),
                ('original_name', models.CharField(help_text='Filename as sent by the client', max_length=255)),
                ('size', models.BigIntegerField(help_text='File size in bytes')),
                ('mime_type', models.CharField(max_length=255)),
                ('storage_key', models.CharField(help_text='Path in storage: {owner_id}/{category}/{name}', max_length=1024, unique=True)),
                ('preview_key', models.CharField(blank=True, default='', help_text='Path of the JPEG thumbnail, empty when none', max_length=1024)),
                ('folder', models.CharField(blank=True, max_length=1024, null=True)),
                ('visibility', models.CharField(choices=[('visible', 'Visible'), ('hidden_from_trash', 'Hidden from trash')], default='visible', max_length=32)),
                ('is_deleted', models.BooleanField(db_index=True, default=False)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'File',
                'verbose_name_plural': 'Files',
                'ordering': ['-created_at'],
                'base_manager_name': 'all_objects',
                'indexes': [
                    models.Index(fields=['owner', 'is_deleted', '-created_at'], name='files_owner_recent_idx'),
                    models.Index(fields=['is_deleted', 'deleted_at'], name='files_trash_age_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='FileTag',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('file', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='file_tags', to='files.file')),
            ],
            options={
                'verbose_name': 'File tag',
                'verbose_name_plural': 'File tags',
                'ordering': ['id'],
                'indexes': [
                    models.Index(fields=['name'], name='file_tags_name_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('file', 'name'), name='file_tags_file_name_unique'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Tag',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('color', models.CharField(blank=True, default='', help_text='Hex color code for UI display (e.g., #FF5733)', max_length=7)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tags', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Tag',
                'verbose_name_plural': 'Tags',
                'ordering': ['name'],
                'constraints': [
                    models.UniqueConstraint(fields=('user', 'name'), name='tags_user_name_unique'),
                ],
            },
        ),
    ]
