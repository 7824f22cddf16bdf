from django.core.cache import cache
from django.db import connections
from django.http import JsonResponse


def healthz(request):
    """Liveness probe: database round trip plus a cache write/read (the OTP store)."""
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
        cache.set('healthz', 'ok', 5)
        cache_ok = cache.get('healthz') == 'ok'
    except Exception as e:
        return JsonResponse({'ok': False, 'error': str(e)}, status=500)
    db_ok = bool(row and row[0] == 1)
    return JsonResponse({'ok': db_ok and cache_ok, 'db': db_ok, 'cache': cache_ok},
                        status=200 if db_ok and cache_ok else 503)
