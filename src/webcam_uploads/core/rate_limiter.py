"""Upload rate limiting.

One slowapi limiter is shared by the module, but its counters are keyed by
the owning app's scope plus the client address, so every service instance
keeps its own window state. The in-memory fixed window opens on an
address's first request and expires after the window length; counts reset
on restart and are not shared between processes.
"""

import uuid

from fastapi import FastAPI, Request
from slowapi import Limiter
from slowapi.util import get_remote_address


def client_key(request: Request) -> str:
    """Rate-limit key: owning app scope and client address."""
    return f"{request.app.state.rate_limit_scope}:{get_remote_address(request)}"


def is_exempt(request: Request) -> bool:
    """Skip limiting for apps configured with rate limiting off."""
    return not request.app.state.settings.rate_limit_enabled


def bind_rate_limit_scope(app: FastAPI) -> None:
    """Give an app its own slice of the limiter's counters."""
    app.state.rate_limit_scope = uuid.uuid4().hex
    app.state.limiter = limiter


limiter = Limiter(key_func=client_key)
