"""
Liveness probe for the load balancer.

Checks the database and the cache (Redis in deployment, where throttling
state lives).  Plain Django view: no authentication, no throttling.
"""
import logging

from django.core.cache import cache
from django.db import connections
from django.db.utils import DatabaseError
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def _database_ok() -> bool:
    with connections['default'].cursor() as c:
        c.execute('SELECT 1')
        row = c.fetchone()
    return bool(row and row[0] == 1)


def _cache_ok() -> bool:
    cache.set('healthz', 'ok', 5)
    return cache.get('healthz') == 'ok'


def healthz(request):
    try:
        db = _database_ok()
    except DatabaseError as e:
        logger.error('health check: database unavailable: %s', e)
        return JsonResponse({'ok': False, 'db': False, 'error': str(e)}, status=503)
    try:
        cached = _cache_ok()
    except Exception as e:  # backend-specific connection errors
        logger.error('health check: cache unavailable: %s', e)
        cached = False
    return JsonResponse({'ok': db and cached, 'db': db, 'cache': cached}, status=200 if db and cached else 503)
