# common/identity.py

"""
ACTOR RESOLUTION (API BOUNDARY ONLY)

Services never look at the request: every mutating service takes an explicit
`actor` string. This module is the single place that derives it.

Priority:
1. Authenticated user (JWT / session) -> username
2. Actor header (settings.ACTOR_HEADER, default "X-User-Id"),
   short ids mapped through settings.ACTOR_ALIASES
3. settings.DEV_ACTOR_ID, only when settings.DEV_ACTOR_FALLBACK is on
"""

from __future__ import annotations

import logging

from django.conf import settings
from rest_framework.exceptions import NotAuthenticated
from rest_framework.permissions import BasePermission

logger = logging.getLogger(__name__)


def _actor_from_header(request) -> str:
    header = getattr(settings, "ACTOR_HEADER", "X-User-Id")
    raw = (request.headers.get(header) or "").strip()
    if not raw:
        return ""
    aliases = getattr(settings, "ACTOR_ALIASES", None) or {}
    return aliases.get(raw, raw)


def resolve_actor(request) -> str:
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return user.get_username()

    actor = _actor_from_header(request)
    if actor:
        return actor

    if getattr(settings, "DEV_ACTOR_FALLBACK", False):
        logger.warning(
            "No actor on request, using development actor",
            extra={"path": getattr(request, "path", "")},
        )
        return settings.DEV_ACTOR_ID

    raise NotAuthenticated("Kullanıcı bilgisi gerekli.")


class HasActor(BasePermission):
    """
    Allows the request when an actor can be resolved.
    """

    message = "Kullanıcı bilgisi gerekli."

    def has_permission(self, request, view):
        try:
            resolve_actor(request)
        except NotAuthenticated:
            return False
        return True
