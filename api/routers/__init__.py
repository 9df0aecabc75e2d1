"""API sub-routers package.

Exposes the `status` router (health and threshold inspection). Additional
routers can be added here and re-exported for inclusion in the FastAPI `app`.
"""

from .status import router  # noqa: F401

__all__ = [
    "router",
]
