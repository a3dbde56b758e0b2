"""
URL mappings for the sangat registration API.

Paths have no trailing slash (``APPEND_SLASH = False``) to
match the front-end client.
"""
from django.urls import path, include

from .auth_views import login_view, signup_view, session_view, jwt_refresh_view, logout_view
from .views import health
from .views.badges import badge_list, print_cards, id_card
from .views.dashboard import admin_dashboard
from .views.registrations import (
    register_public,
    registrations,
    registration_detail,
    registration_photo,
    export_registrations,
)


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),
    # Authentication
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/signup', signup_view, name='signup_view'),
    path('api/auth/session', session_view, name='session_view'),
    path('api/auth/refresh', jwt_refresh_view, name='jwt_refresh_view'),
    path('api/auth/logout', logout_view, name='logout_view'),
    # Dashboard
    path('api/admin/dashboard', admin_dashboard, name='admin_dashboard'),
    # Registrations
    path('api/register', register_public, name='register_public'),
    path('api/registrations', registrations, name='registrations'),
    path('api/registrations/export', export_registrations, name='export_registrations'),
    path('api/registrations/<uuid:pk>', registration_detail, name='registration_detail'),
    path('api/registrations/<uuid:pk>/photo', registration_photo, name='registration_photo'),
    path('api/registrations/<uuid:pk>/id-card', id_card, name='id_card'),
    # Badges
    path('api/badges', badge_list, name='badge_list'),
    path('print/cards', print_cards, name='print_cards'),
]
