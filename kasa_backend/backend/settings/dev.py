# backend/settings/dev.py
"""
PATH: backend/settings/dev.py

LOCAL DEVELOPMENT SETTINGS
Safe + convenient defaults.
- Missing actor header falls back to DEV_ACTOR_ID unless DEV_ACTOR_FALLBACK=False
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import TESTING, env

DEBUG = True

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1"])

CORS_ALLOWED_ORIGINS = env.list(
    "CORS_ALLOWED_ORIGINS", default=["http://localhost:5173"]
)

CSRF_TRUSTED_ORIGINS = env.list(
    "CSRF_TRUSTED_ORIGINS", default=["http://localhost:5173"]
)

CORS_ALLOW_CREDENTIALS = True

# Tests always exercise the real actor rules
DEV_ACTOR_FALLBACK = env.bool("DEV_ACTOR_FALLBACK", default=True) and not TESTING
