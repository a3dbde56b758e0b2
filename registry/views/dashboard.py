"""
Administrative dashboard endpoint.

Provides a short overview of the registrations.  Only administrators
may access this endpoint.
"""
from __future__ import annotations

from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..permissions import IsAdminRole
from ..models import Registration


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_dashboard(request):
    """Return registration counts for administrators.

    ``today`` counts registrations created since local midnight.
    """
    qs = Registration.objects.all()
    start_of_day = timezone.localtime().replace(hour=0, minute=0, second=0, microsecond=0)
    return Response({
        'ok': True,
        'total': qs.count(),
        'today': qs.filter(created_at__gte=start_of_day).count(),
        'hypertension': qs.filter(hypertension='Yes').count(),
        'diabetes': qs.filter(sugar='Yes').count(),
        'withPhoto': qs.exclude(image__isnull=True).exclude(image='').count(),
    })
