# dependencies.py
from fastapi import Request

from governance_service.console.cache import ViewCache


def get_view_cache(request: Request) -> ViewCache:
    cache = getattr(request.app.state, "view_cache", None)
    if cache is None:
        cache = ViewCache()
        request.app.state.view_cache = cache
    return cache
