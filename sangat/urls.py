"""
URL configuration for the sangat registration backend.

The `urlpatterns` list routes URLs to views.  This module includes
both the Django admin and the API routes provided by the registry app.
OpenAPI documentation is exposed at ``/swagger/`` and ``/redoc/``.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path, include

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

# API metadata for Swagger/OpenAPI documentation
api_info = openapi.Info(
    title="Sangat Registration API",
    default_version='v1',
    description="Registration, photo storage and Hindi badge printing for elderly sangat members.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    # Django admin site (also used to grant the admin role)
    path('admin/', admin.site.urls),
    path('', include('registry.routers')),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
] + static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
