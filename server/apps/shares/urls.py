"""URL configuration for shares app."""

from django.urls import path

from server.apps.shares import views

app_name = 'shares'

urlpatterns = [
    path('shares', views.share_list, name='list'),
    # Ids are matched before tokens
    path('shares/<uuid:object_id>', views.share_by_id, name='by_id'),
    path('shares/<str:token>', views.resolve, name='resolve'),
]
