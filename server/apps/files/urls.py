"""URL configuration for files app."""

from django.urls import path

from server.apps.files import views

app_name = 'files'

urlpatterns = [
    path('files', views.file_list, name='list'),
    path('files/upload', views.upload, name='upload'),
    path('files/search', views.search, name='search'),
    path('files/storage/health', views.storage_health, name='storage_health'),
    path('files/trash/hide', views.trash_hide, name='trash_hide'),
    path('files/trash/delete', views.trash_delete, name='trash_delete'),
    path('files/<uuid:file_id>', views.file_detail, name='detail'),
    path('files/<uuid:file_id>/download', views.download, name='download'),
    path('files/<uuid:file_id>/preview', views.preview, name='preview'),
    path('files/<uuid:file_id>/restore', views.restore, name='restore'),
]
