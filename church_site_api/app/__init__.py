"""
Application package initializer.

The API is organised by domain: events, informational posts and the
banner feed built from both.  Each domain exposes a router defined in
``api/endpoints``, a service in ``services`` and its schemas in
``schemas``.  Cross‑cutting pieces (configuration, logging, database,
errors, tenant resolution) live in ``core``.
"""

from .main import app  # noqa: F401
