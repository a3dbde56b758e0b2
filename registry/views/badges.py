"""
Badge printing and ID card views.

``print_cards`` renders the A4 sheet the browser prints; ``badge_list``
returns the same data as JSON for clients that lay out badges
themselves.  Both take ``ids`` as a comma separated list and keep the
order in which the ids were given.
"""
from __future__ import annotations

import logging

from django.conf import settings
from rest_framework.decorators import api_view, permission_classes, renderer_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.renderers import TemplateHTMLRenderer
from rest_framework.response import Response

from registry.models import Registration
from registry.serializers.registration import BadgeQuerySerializer
from registry.services.badges import build_badge, build_id_card, paginate_badges
from registry.services.registrations import get_registration

from ..permissions import IsAdminRole

logger = logging.getLogger(__name__)


def _selected_registrations(request) -> list[Registration]:
    q = BadgeQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    ids = q.validated_data['ids']
    by_id = {str(r.id): r for r in Registration.objects.filter(id__in=ids)}
    missing = [i for i in ids if i not in by_id]
    if missing:
        logger.warning('badge request skipped unknown registrations: %s', ', '.join(missing))
    return [by_id[i] for i in dict.fromkeys(ids) if i in by_id]


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def badge_list(request):
    badges = [build_badge(r, request) for r in _selected_registrations(request)]
    return Response({'ok': True, 'data': [b.to_dict() for b in badges]})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
@renderer_classes([TemplateHTMLRenderer])
def print_cards(request):
    badges = [build_badge(r, request) for r in _selected_registrations(request)]
    context = {
        'pages': paginate_badges(badges),
        'organisation': settings.BADGE_ORGANISATION,
        'subtitle': settings.BADGE_SUBTITLE,
        'count': len(badges),
    }
    return Response(context, template_name='registry/print_cards.html')


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def id_card(request, pk):
    card = build_id_card(get_registration(pk), request=request)
    return Response({'ok': True, 'data': card.to_dict()})
