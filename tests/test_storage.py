import pytest

from osklib.storage import (
    COMPUTE,
    DBSYNC,
    PROPAGATION_EVERYWHERE,
    PropagationType,
    VolMounts,
    Volume,
    VolumeSource,
    can_propagate,
)


def _mounts():
    volume = Volume(name="data", source=VolumeSource(empty_dir={}))
    mount = {"name": "data", "mountPath": "/var/lib/data"}
    return volume, mount


def test_can_propagate_everywhere():
    assert can_propagate(PROPAGATION_EVERYWHERE, []) is True
    assert can_propagate(PropagationType.EVERYWHERE, [DBSYNC]) is True


def test_can_propagate_matching_and_not():
    assert can_propagate(COMPUTE, [DBSYNC, COMPUTE]) is True
    assert can_propagate(COMPUTE, [DBSYNC]) is False


def test_propagate_without_policy_mounts_everywhere():
    volume, mount = _mounts()
    vm = VolMounts(volumes=[volume], mounts=[mount])
    result = vm.propagate([DBSYNC])
    assert len(result) == 1
    assert result[0].volumes == [volume]
    assert result[0].mounts == [mount]
    assert result[0].propagation == []


def test_propagate_no_match():
    volume, mount = _mounts()
    vm = VolMounts(volumes=[volume], mounts=[mount], propagation=[COMPUTE])
    assert vm.propagate([DBSYNC]) == []


def test_propagate_one_entry_per_matching_policy():
    volume, mount = _mounts()
    vm = VolMounts(
        volumes=[volume],
        mounts=[mount],
        propagation=[PROPAGATION_EVERYWHERE, DBSYNC, COMPUTE],
        extra_vol_type="Ceph",
    )
    result = vm.propagate([DBSYNC])
    assert len(result) == 2
    assert all(r.volumes == [volume] and r.mounts == [mount] for r in result)
    assert all(r.extra_vol_type == "" for r in result)


def test_to_core_volume_source_omits_unset():
    source = VolumeSource(host_path={"path": "/dev"}, empty_dir={})
    assert source.to_core_volume_source() == {"hostPath": {"path": "/dev"}, "emptyDir": {}}


def test_to_core_volume_source_round_trip():
    core = {
        "persistentVolumeClaim": {"claimName": "claim"},
        "downwardAPI": {"items": []},
        "storageos": {"volumeName": "vol"},
        "fc": {"lun": 1},
    }
    assert VolumeSource.from_dict(core).to_core_volume_source() == core


def test_to_core_volume_source_bad_data():
    source = VolumeSource(host_path={"path": {1, 2}})
    with pytest.raises(ValueError, match="error marshalling VolumeSource"):
        source.to_core_volume_source()


def test_to_core_volume_inlines_source():
    volume = Volume(name="conf", source=VolumeSource(config_map={"name": "cm"}))
    assert volume.to_core_volume() == {"name": "conf", "configMap": {"name": "cm"}}


def test_volume_from_dict_round_trip():
    core = {"name": "nfs-vol", "nfs": {"server": "server", "path": "/share"}}
    volume = Volume.from_dict(core)
    assert volume.name == "nfs-vol"
    assert volume.to_core_volume() == core


def test_from_dict_ignores_unknown_sources():
    source = VolumeSource.from_dict({"gitRepo": {"repository": "repo"}, "csi": {"driver": "d"}})
    assert source.to_core_volume_source() == {"csi": {"driver": "d"}}