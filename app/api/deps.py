"""API-layer dependency functions.

Re-exports all dependency factories from ``app.dependencies`` so that
endpoint modules only need to import from ``app.api.deps``.
"""

from app.dependencies import (
    get_cookie_store,
    get_attribution_service,
)

__all__ = [
    "get_cookie_store",
    "get_attribution_service",
]
