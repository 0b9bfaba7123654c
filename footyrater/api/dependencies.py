"""Request-scoped accessors for app state."""

import threading

from fastapi import Request

from footyrater.core import MatchSource
from footyrater.providers import create_provider

_provider_lock = threading.Lock()


def get_db_path(request: Request):
    return request.app.state.settings.db_path


def get_provider(request: Request) -> MatchSource:
    """Return the match source, building it on first use.

    Built lazily so the app starts without a football-data token; fetch
    endpoints then fail with ProviderConfigError instead.
    """
    state = request.app.state
    if getattr(state, "provider", None) is None:
        with _provider_lock:
            if getattr(state, "provider", None) is None:
                state.provider = create_provider(state.settings.football_data)
    return state.provider
