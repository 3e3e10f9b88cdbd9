"""Identity users."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from osklib.client import NotFoundError, OpenStackError, ServiceClient

USER_NOT_FOUND = "user not found in keystone"

_log = logging.getLogger(__name__)


@dataclass
class User:
    """A user to create, with an optional default project."""

    name: str
    password: str = field(default="", repr=False)
    project_id: str = ""
    domain_id: str = ""


class UserMixin:
    """User operations for an identity client held in ``osclient``."""

    osclient: ServiceClient

    def create_user(self, user: User) -> str:
        """Return the id of the named user, creating it if missing."""
        try:
            return self.get_user(user.name, user.domain_id)["id"]
        except NotFoundError:
            pass
        body = {"name": user.name}
        if user.password:
            body["password"] = user.password
        if user.domain_id:
            body["domain_id"] = user.domain_id
        if user.project_id:
            body["default_project_id"] = user.project_id
        created = self.osclient.post("users", {"user": body})["user"]
        _log.info("User Created - Username %s, ID %s", created.get("name"), created["id"])
        return created["id"]

    def get_user(self, user_name: str, domain_id: str) -> dict[str, Any]:
        """Return the single user of that name in the domain."""
        found = self.osclient.list_all(
            "users", "users", {"name": user_name, "domain_id": domain_id}
        )
        if not found:
            raise NotFoundError(f"{user_name} {USER_NOT_FOUND}")
        if len(found) > 1:
            raise OpenStackError(f'multiple users named "{user_name}" found')
        return found[0]

    def delete_user(self, user_name: str, domain_id: str) -> None:
        """Delete the named user; a missing user is not an error."""
        try:
            user = self.get_user(user_name, domain_id)
        except NotFoundError:
            user = None
        if user is not None:
            _log.info("Deleting user %s in %s", user.get("name"), user.get("domain_id"))
            self.osclient.delete(f"users/{user['id']}")
        _log.info("Deleting user successfully")