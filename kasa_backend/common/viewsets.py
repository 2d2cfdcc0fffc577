# common/viewsets.py

"""
REFERENCE DATA VIEWSET

CRUD for small master tables (banks, cards, contacts, POS terminals).
- create stamps `created_by` with the resolved actor
- destroy is a soft delete
"""

from __future__ import annotations

import logging

from rest_framework import viewsets

from common.identity import HasActor, resolve_actor

logger = logging.getLogger(__name__)


class SoftDeleteModelViewSet(viewsets.ModelViewSet):
    permission_classes = [HasActor]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def perform_create(self, serializer):
        serializer.save(created_by=resolve_actor(self.request))

    def perform_destroy(self, instance):
        actor = resolve_actor(self.request)
        instance.soft_delete(actor=actor)
        logger.info(
            "Reference record soft-deleted",
            extra={"model": instance._meta.label, "id": instance.pk, "actor": actor},
        )
