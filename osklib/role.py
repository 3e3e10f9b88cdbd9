"""Identity roles and role assignments."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from osklib.client import NotFoundError, OpenStackError, ServiceClient

ROLE_NOT_FOUND = "role not found in keystone"

_log = logging.getLogger(__name__)


@dataclass
class Role:
    """A role by name."""

    name: str


def _put(client: ServiceClient, path: str) -> None:
    url = client.endpoint.rstrip("/") + "/" + path.lstrip("/")
    response = client.session.put(url, timeout=client.timeout)
    if response.status_code == 404:
        raise NotFoundError(f"Resource not found: [PUT {url}]", status_code=404)
    if response.status_code >= 400:
        raise OpenStackError(
            f"Request [PUT {url}] failed with status {response.status_code}: {response.text}",
            status_code=response.status_code,
        )


class RoleMixin:
    """Role operations for an identity client held in ``osclient``."""

    osclient: ServiceClient

    def create_role(self, role_name: str) -> str:
        """Return the id of the named role, creating it if missing."""
        try:
            return self.get_role(role_name)["id"]
        except NotFoundError:
            pass
        created = self.osclient.post("roles", {"role": {"name": role_name}})["role"]
        _log.info("Role Created - Rolename %s, ID %s", created.get("name"), created["id"])
        return created["id"]

    def get_role(self, role_name: str) -> dict[str, Any]:
        """Return the first role with that name."""
        found = self.osclient.list_all("roles", "roles", {"name": role_name})
        if not found:
            raise NotFoundError(f"{role_name} {ROLE_NOT_FOUND}")
        return found[0]

    def _assign(self, role_name: str, user_id: str, scope: str, scope_id: str) -> None:
        role = self.get_role(role_name)
        params = {f"scope.{scope}.id": scope_id, "user.id": user_id, "role.id": role["id"]}
        assignments = self.osclient.list_all("role_assignments", "role_assignments", params)
        if assignments:
            return
        _log.info(
            "Assigning userID %s to role %s - %s", user_id, role.get("name"), role["id"]
        )
        _put(self.osclient, f"{scope}s/{scope_id}/users/{user_id}/roles/{role['id']}")

    def assign_user_role(self, role_name: str, user_id: str, project_id: str) -> None:
        """Give the user the role on a project unless it already has it."""
        self._assign(role_name, user_id, "project", project_id)

    def assign_user_domain_role(self, role_name: str, user_id: str, domain_id: str) -> None:
        """Give the user the role on a domain unless it already has it."""
        self._assign(role_name, user_id, "domain", domain_id)