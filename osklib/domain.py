"""Identity domains."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from osklib.client import OpenStackError, ServiceClient

_log = logging.getLogger(__name__)


@dataclass
class Domain:
    """Name and description used to create or look up a domain."""

    name: str
    description: str = ""


class DomainMixin:
    """Domain operations for an identity client held in ``osclient``."""

    osclient: ServiceClient

    def create_domain(self, domain: Domain) -> str:
        """Return the id of the domain named ``domain.name``, creating it if missing."""
        found = self.osclient.list_all("domains", "domains", {"name": domain.name})
        if len(found) == 1:
            return found[0]["id"]
        if found:
            raise OpenStackError(f'Multiple domains named "{domain.name}" found')
        body = {"name": domain.name}
        if domain.description:
            body["description"] = domain.description
        _log.info("Creating domain %s", domain.name)
        created = self.osclient.post("domains", {"domain": body})
        return created["domain"]["id"]