"""Identity service endpoints."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Union

from osklib.client import Availability, ServiceClient, get_availability

_log = logging.getLogger(__name__)


def _interface(availability: Union[Availability, str]) -> str:
    if isinstance(availability, Availability):
        return availability.value
    return str(availability)


@dataclass
class Endpoint:
    """An endpoint of a registered service."""

    name: str
    service_id: str
    availability: Union[Availability, str]
    url: str = ""


class EndpointMixin:
    """Endpoint operations for an identity client held in ``osclient``."""

    osclient: ServiceClient
    region: str

    def create_endpoint(self, endpoint: Endpoint) -> str:
        """Return the id of the service's endpoint on that interface, creating it if missing."""
        existing = self.get_endpoints(endpoint.service_id, _interface(endpoint.availability))
        if existing:
            return existing[0]["id"]
        body: dict[str, Any] = {
            "interface": _interface(endpoint.availability),
            "name": endpoint.name,
            "service_id": endpoint.service_id,
            "url": endpoint.url,
        }
        if self.region:
            body["region"] = self.region
        created = self.osclient.post("endpoints", {"endpoint": body})
        return created["endpoint"]["id"]

    def get_endpoints(self, service_id: str, endpoint_interface: str) -> list[dict[str, Any]]:
        """Return the endpoints of a service, only those of one interface if it is given."""
        _log.info("Getting Endpoints for service %s %s ", service_id, endpoint_interface)
        params = {"service_id": service_id, "region_id": self.region}
        if endpoint_interface:
            params["interface"] = get_availability(endpoint_interface).value
        found = self.osclient.list_all("endpoints", "endpoints", params)
        _log.info("Getting Endpoint successfully")
        return found

    def delete_endpoint(self, endpoint: Endpoint) -> None:
        """Delete every endpoint of the service on the endpoint's interface."""
        interface = _interface(endpoint.availability)
        _log.info("Deleting Endpoint %s %s ", endpoint.name, interface)
        for found in self.get_endpoints(endpoint.service_id, interface):
            self.osclient.delete(f"endpoints/{found['id']}")
            _log.info(
                "Deleted endpoint %s %s - %s",
                found.get("name"),
                found.get("interface"),
                found.get("url"),
            )

    def update_endpoint(self, endpoint: Endpoint, endpoint_id: str) -> str:
        """Update an endpoint and return its id."""
        interface = _interface(endpoint.availability)
        _log.info("Updating Endpoint %s %s ", endpoint.name, interface)
        candidates = {
            "interface": interface,
            "name": endpoint.name,
            "region": self.region,
            "service_id": endpoint.service_id,
            "url": endpoint.url,
        }
        body = {key: value for key, value in candidates.items() if value}
        updated = self.osclient.patch(f"endpoints/{endpoint_id}", {"endpoint": body})
        _log.info("Updated Endpoint %s %s ", endpoint.name, interface)
        return updated["endpoint"]["id"]