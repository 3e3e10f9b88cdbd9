"""Identity service catalog entries."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from osklib.client import NotFoundError, ServiceClient

SERVICE_NOT_FOUND = "service not found in keystone"

_log = logging.getLogger(__name__)


@dataclass
class Service:
    """A service registered in the catalog."""

    name: str
    type: str
    description: str = ""
    enabled: bool = False


def _service_body(service: Service) -> dict[str, Any]:
    return {
        "type": service.type,
        "enabled": service.enabled,
        "name": service.name,
        "description": service.description,
    }


class ServiceMixin:
    """Service operations for an identity client held in ``osclient``."""

    osclient: ServiceClient

    def create_service(self, service: Service) -> str:
        """Return the id of the service of that type and name, creating it if missing."""
        try:
            return self.get_service(service.type, service.name)["id"]
        except NotFoundError:
            pass
        created = self.osclient.post("services", {"service": _service_body(service)})
        service_id = created["service"]["id"]
        _log.info("Service Created - Servicename %s, ID %s", service.name, service_id)
        return service_id

    def get_service(self, service_type: str, service_name: str) -> dict[str, Any]:
        """Return the first service with that type and name."""
        found = self.osclient.list_all(
            "services", "services", {"type": service_type, "name": service_name}
        )
        if not found:
            raise NotFoundError(f"{service_name} {SERVICE_NOT_FOUND}")
        return found[0]

    def update_service(self, service: Service, service_id: str) -> None:
        """Update type, state, name and description of a service."""
        self.osclient.patch(f"services/{service_id}", {"service": _service_body(service)})

    def delete_service(self, service_id: str) -> None:
        """Delete a service; a missing service is not an error."""
        _log.info("Delete service with id %s", service_id)
        try:
            self.osclient.delete(f"services/{service_id}")
        except NotFoundError:
            pass