"""A client for one OpenStack service, with all resource operations."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from osklib.client import (
    Availability,
    AuthOpts,
    EndpointOpts,
    ServiceClient,
    get_openstack_provider,
)
from osklib.domain import DomainMixin
from osklib.endpoint import EndpointMixin
from osklib.limits import LimitMixin
from osklib.project import ProjectMixin
from osklib.role import RoleMixin
from osklib.service import ServiceMixin
from osklib.user import UserMixin
from osklib.volume import VolumeMixin


@dataclass
class OpenStack(
    DomainMixin,
    ProjectMixin,
    UserMixin,
    EndpointMixin,
    RoleMixin,
    ServiceMixin,
    VolumeMixin,
    LimitMixin,
):
    """A service client bound to a region, with the auth URL it came from."""

    osclient: ServiceClient
    region: str = ""
    auth_url: str = ""


def new_openstack(cfg: AuthOpts) -> OpenStack:
    """Authenticate and return a client for the internal identity endpoint."""
    provider = get_openstack_provider(cfg)
    identity = provider.service_client(
        EndpointOpts(
            type="identity",
            region=cfg.region,
            availability=Availability.INTERNAL,
        )
    )
    return OpenStack(osclient=identity, region=cfg.region, auth_url=cfg.auth_url)


def get_nova_openstack_client(cfg: AuthOpts, endpoint_opts: EndpointOpts) -> OpenStack:
    """Authenticate and return a client for the compute endpoint."""
    provider = get_openstack_provider(cfg)
    opts = endpoint_opts
    if not opts.type:
        opts = dataclasses.replace(opts, type="compute")
    compute = provider.service_client(opts)
    return OpenStack(osclient=compute, region=cfg.region, auth_url=cfg.auth_url)