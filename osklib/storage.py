"""Extra volumes and mounts, propagated to services by policy."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Iterable, Mapping, Optional


class PropagationType(str):
    """Names a service, group or instance that may receive extra volumes."""

    EVERYWHERE: ClassVar[PropagationType]
    DBSYNC: ClassVar[PropagationType]
    COMPUTE: ClassVar[PropagationType]


PropagationType.EVERYWHERE = PropagationType("All")
PropagationType.DBSYNC = PropagationType("DBSync")
PropagationType.COMPUTE = PropagationType("Compute")

PROPAGATION_EVERYWHERE = PropagationType.EVERYWHERE
DBSYNC = PropagationType.DBSYNC
COMPUTE = PropagationType.COMPUTE


def _source_field(json_name: str) -> Any:
    return field(default=None, metadata={"json": json_name})


@dataclass
class VolumeSource:
    """A reduced volume source; each member holds the source's settings as a mapping."""

    host_path: Optional[dict] = _source_field("hostPath")
    empty_dir: Optional[dict] = _source_field("emptyDir")
    secret: Optional[dict] = _source_field("secret")
    nfs: Optional[dict] = _source_field("nfs")
    iscsi: Optional[dict] = _source_field("iscsi")
    persistent_volume_claim: Optional[dict] = _source_field("persistentVolumeClaim")
    cephfs: Optional[dict] = _source_field("cephfs")
    downward_api: Optional[dict] = _source_field("downwardAPI")
    fc: Optional[dict] = _source_field("fc")
    config_map: Optional[dict] = _source_field("configMap")
    scale_io: Optional[dict] = _source_field("scaleIO")
    storage_os: Optional[dict] = _source_field("storageos")
    csi: Optional[dict] = _source_field("csi")
    projected: Optional[dict] = _source_field("projected")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VolumeSource:
        """Build from a mapping with wire names; unknown keys are ignored."""
        return cls(
            **{
                f.name: data[f.metadata["json"]]
                for f in fields(cls)
                if f.metadata["json"] in data
            }
        )

    def to_core_volume_source(self) -> dict[str, Any]:
        """Return the source in its full wire form, without unset members."""
        raw = {
            f.metadata["json"]: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }
        try:
            encoded = json.dumps(raw)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"error marshalling VolumeSource: {exc}") from exc
        try:
            decoded = json.loads(encoded)
        except ValueError as exc:
            raise ValueError(f"error unmarshalling VolumeSource: {exc}") from exc
        return decoded


@dataclass
class Volume:
    """A named volume with its source."""

    name: str
    source: VolumeSource = field(default_factory=VolumeSource)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Volume:
        return cls(name=data["name"], source=VolumeSource.from_dict(data))

    def to_core_volume(self) -> dict[str, Any]:
        """Return the volume in its full wire form, source members inline."""
        return {"name": self.name, **self.source.to_core_volume_source()}


def can_propagate(prop: str, svcs: Iterable[str]) -> bool:
    """Tell whether a volume with propagation *prop* reaches any of *svcs*."""
    return prop == PROPAGATION_EVERYWHERE or prop in svcs


@dataclass
class VolMounts:
    """Volumes and mounts that are added to pods according to a propagation policy."""

    volumes: list[Volume] = field(default_factory=list)
    mounts: list[dict] = field(default_factory=list)
    propagation: list[str] = field(default_factory=list)
    extra_vol_type: str = ""

    def propagate(self, svc: Iterable[str]) -> list[VolMounts]:
        """Return the volume sets that the given services should mount.

        Without a propagation policy the volumes go everywhere. One entry is
        returned for each matching policy element.
        """
        services = list(svc)
        matches = 1 if not self.propagation else 0
        matches += sum(1 for p in self.propagation if can_propagate(p, services))
        return [
            VolMounts(volumes=list(self.volumes), mounts=copy.deepcopy(self.mounts))
            for _ in range(matches)
        ]