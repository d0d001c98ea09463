"""BaseService — shared foundation for attachments services.

Every service receives a :class:`Site` at construction time and reads its
registries; services never mutate them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from attachments.infrastructure.site import Site

NOT_FOUND = "NOT_FOUND"
UNKNOWN_FIELD_TYPE = "UNKNOWN_FIELD_TYPE"


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class InstanceService(BaseService):
            def get_instance(self, name: str) -> ServiceResult:
                instance = self._site.instances.get(name)
                ...
    """

    def __init__(self, site: Site) -> None:
        self._site = site
