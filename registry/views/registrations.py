"""
Registration management views.

The public form posts to ``register_public`` without authentication;
every other endpoint requires the administrator role.  Validation lives
in :mod:`registry.serializers.registration` and persistence in
:mod:`registry.services.registrations`.
"""
from __future__ import annotations

from django.http import HttpResponse
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response

from registry.serializers.registration import RegistrationSerializer, RegistrationListQuerySerializer
from registry.services.registrations import (
    create_registration,
    delete_registration,
    export_csv,
    get_registration,
    registration_to_dict,
    replace_photo,
    search_registrations,
    update_registration,
)

from ..permissions import IsAdminRole


def _create(request):
    s = RegistrationSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    reg = create_registration(user=request.user, **s.validated_data)
    return Response({'ok': True, 'data': registration_to_dict(reg, request)}, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
def register_public(request):
    """Public registration form submission (multipart with optional ``image``)."""
    return _create(request)

# DRF ScopedRateThrottle reads throttle_scope from the wrapped view class
register_public.cls.throttle_scope = 'public_register'


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def registrations(request):
    """List registrations (newest first) or create one as an administrator.

    Query params for GET:
      - q: search by "name surname", mobile or Aadhaar number
      - page, pageSize: pagination (optional)
    """
    if request.method == 'POST':
        return _create(request)

    q = RegistrationListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = search_registrations(q.validated_data.get('q'))
    total = qs.count()
    page_size = q.validated_data.get('pageSize') or 0
    # without pageSize everything is one page
    page = (q.validated_data.get('page') or 1) if page_size else 1
    if page_size:
        start = (page - 1) * page_size
        qs = qs[start:start + page_size]
    data = [registration_to_dict(r, request) for r in qs]
    return Response({
        'ok': True,
        'data': data,
        'pagination': {'total': total, 'page': page, 'pageSize': page_size or total},
    })


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def registration_detail(request, pk):
    reg = get_registration(pk)
    if request.method == 'GET':
        return Response({'ok': True, 'data': registration_to_dict(reg, request)})
    if request.method == 'DELETE':
        delete_registration(reg, user=request.user)
        return Response({'ok': True})

    s = RegistrationSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    fields = dict(s.validated_data)
    # photos are replaced through registration_photo
    fields.pop('image', None)
    reg = update_registration(reg, user=request.user, **fields)
    return Response({'ok': True, 'data': registration_to_dict(reg, request)})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def registration_photo(request, pk):
    reg = get_registration(pk)
    image = request.FILES.get('image')
    if not image:
        raise ValidationError({'image': 'This field is required.'})
    reg = replace_photo(reg, image, user=request.user)
    return Response({'ok': True, 'data': registration_to_dict(reg, request)})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def export_registrations(request):
    """Download registrations as CSV; honours the same ``q`` filter as the list."""
    q = RegistrationListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    body = export_csv(search_registrations(q.validated_data.get('q')), request)
    resp = HttpResponse(body, content_type='text/csv; charset=utf-8')
    filename = f"registrations-{timezone.localdate():%Y%m%d}.csv"
    resp['Content-Disposition'] = f'attachment; filename="{filename}"'
    return resp
