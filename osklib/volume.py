"""Block storage service state."""

from __future__ import annotations

import logging

from osklib.client import ServiceClient

_log = logging.getLogger(__name__)


class VolumeMixin:
    """Block storage checks for a volume client held in ``osclient``."""

    osclient: ServiceClient

    def volume_service_check(self, service_name: str) -> bool:
        """Tell whether a service whose binary contains *service_name* is up and enabled."""
        _log.info("Checking %s service is running or not", service_name)
        services = self.osclient.list_all("os-services", "services")
        return any(
            service_name in (service.get("binary") or "")
            and service.get("state") == "up"
            and service.get("status") == "enabled"
            for service in services
        )