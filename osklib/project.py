"""Identity projects."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from osklib.client import NotFoundError, OpenStackError, ServiceClient

PROJECT_NOT_FOUND = "project not found"

_log = logging.getLogger(__name__)


@dataclass
class Project:
    """A project to create or look up."""

    name: str
    description: str = ""
    domain_id: str = ""


class ProjectMixin:
    """Project operations for an identity client held in ``osclient``."""

    osclient: ServiceClient

    def _list_projects(self, name: str, domain_id: str) -> list[dict[str, Any]]:
        return self.osclient.list_all(
            "projects", "projects", {"name": name, "domain_id": domain_id}
        )

    def create_project(self, project: Project) -> str:
        """Return the id of the named project, creating it if missing."""
        found = self._list_projects(project.name, project.domain_id)
        if len(found) == 1:
            return found[0]["id"]
        if found:
            raise OpenStackError(f'multiple projects named "{project.name}" found')
        body = {"name": project.name}
        if project.description:
            body["description"] = project.description
        if project.domain_id:
            body["domain_id"] = project.domain_id
        _log.info("Creating project %s in %s", project.name, project.domain_id)
        created = self.osclient.post("projects", {"project": body})
        return created["project"]["id"]

    def get_project(self, project_name: str, domain_id: str) -> dict[str, Any]:
        """Return the single project of that name in the domain."""
        found = self._list_projects(project_name, domain_id)
        if not found:
            raise NotFoundError(f"{project_name} {PROJECT_NOT_FOUND}")
        if len(found) > 1:
            raise OpenStackError(f'multiple project named "{project_name}" found')
        return found[0]