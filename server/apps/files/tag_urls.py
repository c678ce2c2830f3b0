"""URL configuration for the tag palette."""

from django.urls import path

from server.apps.files import views

app_name = 'tags'

urlpatterns = [
    path('tags', views.tag_list, name='list'),
    path('tags/<uuid:tag_id>', views.tag_detail, name='detail'),
]
