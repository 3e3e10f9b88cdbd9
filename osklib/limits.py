"""Identity project limits and registered (default) limits."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from osklib.client import OpenStackError, ServiceClient

_log = logging.getLogger(__name__)


def _without_empty(body: dict[str, Any], *optional: str) -> dict[str, Any]:
    return {key: value for key, value in body.items() if key not in optional or value}


@dataclass
class Limit:
    """A limit that overrides a registered limit for a project or domain."""

    service_id: str
    resource_name: str
    resource_limit: int
    region_id: str = ""
    domain_id: str = ""
    project_id: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the limit in its wire form, empty optional members left out."""
        return _without_empty(
            {
                "region_id": self.region_id,
                "domain_id": self.domain_id,
                "project_id": self.project_id,
                "service_id": self.service_id,
                "description": self.description,
                "resource_name": self.resource_name,
                "resource_limit": self.resource_limit,
            },
            "region_id",
            "domain_id",
            "project_id",
            "description",
        )


@dataclass
class RegisteredLimit:
    """A default limit that applies across all projects."""

    service_id: str
    resource_name: str
    default_limit: int = 0
    region_id: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the registered limit in its wire form, empty optional members left out."""
        return _without_empty(
            {
                "region_id": self.region_id,
                "service_id": self.service_id,
                "description": self.description,
                "resource_name": self.resource_name,
                "default_limit": self.default_limit,
            },
            "region_id",
            "description",
        )


class LimitMixin:
    """Limit operations for an identity client held in ``osclient``."""

    osclient: ServiceClient

    def create_limit(self, limit: Limit) -> str:
        """Return the id of the limit for that resource, creating it if missing."""
        found = self.osclient.list_all(
            "limits", "limits", {"resource_name": limit.resource_name}
        )
        if len(found) == 1:
            return found[0]["id"]
        if found:
            raise OpenStackError(f'multiple limits named "{limit.resource_name}" found')
        _log.info("Creating limit %s", limit.resource_name)
        created = self.osclient.post("limits", {"limits": [limit.to_dict()]})
        return created["limits"][0]["id"]

    def create_or_update_registered_limit(self, limit: RegisteredLimit) -> str:
        """Create the registered limit, or set its default if it already exists."""
        found = self._registered_limits({"resource_name": limit.resource_name})
        if len(found) == 1:
            limit_id = found[0]["id"]
            _log.info("Updating registered limit %s", limit.resource_name)
            self.osclient.patch(
                f"registered_limits/{limit_id}",
                {"registered_limit": {"default_limit": limit.default_limit}},
            )
            return limit_id
        if found:
            raise OpenStackError(f'multiple limits named "{limit.resource_name}" found')
        _log.info("Creating registered limit %s", limit.resource_name)
        created = self.osclient.post(
            "registered_limits", {"registered_limits": [limit.to_dict()]}
        )
        return created["registered_limits"][0]["id"]

    def delete_registered_limit(self, registered_limit_id: str) -> None:
        """Delete a registered limit."""
        _log.info("Deleting registered limit %s", registered_limit_id)
        self.osclient.delete(f"registered_limits/{registered_limit_id}")

    def get_registered_limit(self, registered_limit_id: str) -> dict[str, Any]:
        """Return the registered limit with that id."""
        _log.info("Fetching registered limit %s", registered_limit_id)
        body = self.osclient.get(f"registered_limits/{registered_limit_id}")
        return body["registered_limit"]

    def list_registered_limits_by_resource_name(
        self, resource_name: str
    ) -> list[dict[str, Any]]:
        """Return all registered limits for a resource name."""
        _log.info("Fetching registered limit %s", resource_name)
        return self._registered_limits({"resource_name": resource_name})

    def list_registered_limits_by_service_id(self, service_id: str) -> list[dict[str, Any]]:
        """Return all registered limits of a service."""
        _log.info("Fetching registered limit for service %s", service_id)
        return self._registered_limits({"service_id": service_id})

    def _registered_limits(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        return self.osclient.list_all("registered_limits", "registered_limits", params)