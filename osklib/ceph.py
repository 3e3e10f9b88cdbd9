"""Ceph client settings: default pools, rbd user and OSD capabilities."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class Defaults(str, Enum):
    """Default values used when a Ceph setting is not given."""

    DEFAULT_USER = "openstack"
    DEFAULT_CINDER_POOL = "volumes"
    DEFAULT_CINDER_BACKUP_POOL = "backups"
    DEFAULT_NOVA_POOL = "vms"
    DEFAULT_GLANCE_POOL = "images"
    CERROR = ""


_SERVICE_DEFAULT_POOLS = {
    "cinder": Defaults.DEFAULT_CINDER_POOL,
    "backup": Defaults.DEFAULT_CINDER_BACKUP_POOL,
    "nova": Defaults.DEFAULT_NOVA_POOL,
    "glance": Defaults.DEFAULT_GLANCE_POOL,
}


@dataclass(frozen=True)
class PoolSpec:
    """A Ceph pool definition."""

    pool_name: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PoolSpec:
        return cls(pool_name=data["name"])

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.pool_name}


@dataclass
class Backend:
    """Ceph client parameters of an external cluster."""

    cluster_fsid: str
    cluster_mon_hosts: str
    client_key: str
    user: str = ""
    pools: dict[str, PoolSpec] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Backend:
        pools = {
            name: PoolSpec.from_dict(spec)
            for name, spec in (data.get("cephPools") or {}).items()
        }
        return cls(
            cluster_fsid=data["cephFsid"],
            cluster_mon_hosts=data["cephMons"],
            client_key=data["cephClientKey"],
            user=data.get("cephUser", ""),
            pools=pools,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "cephFsid": self.cluster_fsid,
            "cephMons": self.cluster_mon_hosts,
            "cephClientKey": self.client_key,
            "cephUser": self.user,
        }
        if self.pools:
            result["cephPools"] = {
                name: spec.to_dict() for name, spec in self.pools.items()
            }
        return result


def get_pool(pools: Mapping[str, PoolSpec], service: str) -> str:
    """Return the pool configured for *service*, or that service's default.

    Raises ValueError when the service has no pool and no default.
    """
    if service in pools:
        return pools[service].pool_name
    try:
        return _SERVICE_DEFAULT_POOLS[service].value
    except KeyError:
        raise ValueError("No default pool found") from None


def get_rbd_user(user: str) -> str:
    """Return *user*, or the default rbd user when it is empty."""
    return user or Defaults.DEFAULT_USER.value


def get_osd_caps(pools: Mapping[str, PoolSpec]) -> str:
    """Build the OSD caps string for the given pools, sorted by pool name."""
    names = sorted(pool.pool_name for pool in pools.values())
    caps = ",".join(f"profile rbd pool={name}" for name in names if name)
    return caps or f"profile rbd pool={Defaults.DEFAULT_CINDER_POOL.value}"


def _is_ip(text: str) -> bool:
    if "%" in text:
        return False
    try:
        ipaddress.ip_address(text)
    except ValueError:
        return False
    return True


def validate_mons(ip_list: str) -> bool:
    """Check that every entry of a comma separated monitor list is an IP address."""
    return all(_is_ip(ip.strip(" ")) for ip in ip_list.split(","))