"""URL configuration for accounts app."""

from django.urls import path

from server.apps.accounts import views

app_name = 'accounts'

urlpatterns = [
    path('auth/register', views.register, name='register'),
    path('auth/login', views.login, name='login'),
    path('auth/google', views.google_login, name='google'),
    path('auth/google/url', views.google_url, name='google_url'),
    path('auth/profile', views.profile, name='profile'),
]
