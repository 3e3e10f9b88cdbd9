# osklib

`osklib` is a library for tools that deploy and manage OpenStack services. It covers three areas:

- **Ceph settings** (`osklib.ceph`). Pick RBD pool names and the default user, build OSD capability strings and check monitor address lists.
- **Extra volumes** (`osklib.storage`). Describe volumes and mounts, and work out which services receive them under a propagation policy.
- **OpenStack resources** (`osklib.client`, `osklib.cloud` and the resource modules). Authenticate against Keystone, then create or look up domains, projects, users, roles, services, endpoints and limits, and check the state of block storage services.

## Installation

```
pip install osklib
```

The test suite needs the `test` extra:

```
pip install "osklib[test]"
pytest
```

## Ceph helpers

```python
from osklib.ceph import PoolSpec, get_pool, get_rbd_user, get_osd_caps, validate_mons

pools = {"cinder": PoolSpec("volumes"), "nova": PoolSpec("vms")}

get_pool(pools, "cinder")   # "volumes"
get_pool({}, "glance")      # "images", the default for that service
get_rbd_user("")            # "openstack"
get_osd_caps(pools)         # "profile rbd pool=vms,profile rbd pool=volumes"
get_osd_caps({})            # "profile rbd pool=volumes"
validate_mons("192.168.2.2,192.168.2.3, 192.168.2.4")  # True
```

- Default pools exist for `cinder`, `backup`, `nova` and `glance`. For any other service that is not in the map, `get_pool` raises `ValueError`.
- `get_osd_caps` sorts the pool names, so the same pools always produce the same string.
- `validate_mons` returns `False` when any entry is not an IPv4 or IPv6 address. An empty string counts as an invalid entry.
- `Defaults` holds the default names. `Backend` describes an external cluster, and `Backend.from_dict` and `Backend.to_dict` convert it to and from its wire form, which uses the keys `cephFsid`, `cephMons`, `cephClientKey`, `cephUser` and `cephPools`.

## Propagating extra volumes

```python
from osklib.storage import PropagationType, VolMounts, Volume, VolumeSource

mounts = VolMounts(
    propagation=[PropagationType.COMPUTE],
    volumes=[Volume(name="ceph", source=VolumeSource(secret={"secretName": "ceph-conf"}))],
    mounts=[{"name": "ceph", "mountPath": "/etc/ceph", "readOnly": True}],
)

selected = mounts.propagate([PropagationType.COMPUTE])   # one VolMounts
core_volume = mounts.volumes[0].to_core_volume()
# {"name": "ceph", "secret": {"secretName": "ceph-conf"}}
```

Propagation follows these rules:

- A `VolMounts` with an empty propagation list is given to every service, and `propagate` returns one copy for it.
- Otherwise `propagate` returns one copy for each element of the propagation list that matches, as decided by `can_propagate`. `PropagationType.EVERYWHERE` (`"All"`) matches any service. The other predefined types are `DBSYNC` and `COMPUTE`.
- Every returned copy carries the volumes and mounts only. It has no propagation list and no `extra_vol_type`.

`VolumeSource` members hold each source's settings as plain mappings. `to_core_volume_source` returns the members that are set, under their wire names such as `hostPath`, `persistentVolumeClaim` and `configMap`. `VolumeSource.from_dict` and `Volume.from_dict` read the same form.

## Managing OpenStack resources

```python
from osklib.client import AuthOpts, TLSConfig
from osklib.cloud import new_openstack
from osklib.project import Project
from osklib.user import User

password = "password"
cfg = AuthOpts(
    auth_url="https://keystone.example.com:5000/v3",
    username="admin",
    password=password,
    tenant_name="admin",
    domain_name="Default",
    region="regionOne",
    tls=TLSConfig(insecure=False),
)

cloud = new_openstack(cfg)
project_id = cloud.create_project(Project(name="service", description="Service project", domain_id="default"))
user_id = cloud.create_user(User(name="glance", password=password, project_id=project_id, domain_id="default"))
cloud.assign_user_role("admin", user_id, project_id)
```

### Authentication and endpoints

`new_openstack` authenticates by password. It then returns an `OpenStack` bound to the internal identity endpoint of the configured region.

`get_nova_openstack_client(cfg, endpoint_opts)` returns an `OpenStack` bound to the endpoint that the given `EndpointOpts` selects from the catalog. When no type is given, it uses `compute`.

Both functions go through `get_openstack_provider`, which returns a `ProviderClient`. That client holds the session, the token and the service catalog. `ProviderClient.service_client` picks exactly one matching catalog endpoint and raises `OpenStackError` when none match or several do.

Authentication needs a username and a domain name. A scope comes either from `AuthOpts.scope`, which is an `AuthScope`, or from the tenant id or tenant name. Requests time out after 10 seconds.

`TLSConfig` has four settings:

- `ca_certs` takes PEM strings as a trust bundle.
- `insecure` turns off certificate verification.
- `client_cert` and `client_key` are paths to a client certificate and its key.

### Operations

| Module | Methods on `OpenStack` |
| --- | --- |
| `osklib.domain` | `create_domain` |
| `osklib.project` | `create_project`, `get_project` |
| `osklib.user` | `create_user`, `get_user`, `delete_user` |
| `osklib.role` | `create_role`, `get_role`, `assign_user_role`, `assign_user_domain_role` |
| `osklib.service` | `create_service`, `get_service`, `update_service`, `delete_service` |
| `osklib.endpoint` | `create_endpoint`, `get_endpoints`, `update_endpoint`, `delete_endpoint` |
| `osklib.limits` | `create_limit`, `create_or_update_registered_limit`, `get_registered_limit`, `delete_registered_limit`, `list_registered_limits_by_resource_name`, `list_registered_limits_by_service_id` |
| `osklib.volume` | `volume_service_check` |

The create calls are idempotent: when a matching resource already exists, they return its id. `create_or_update_registered_limit` also sets the new default on an existing registered limit.

Role assignment does nothing when the user already holds the role on that project or domain. `delete_user` and `delete_service` treat a missing resource as success. `delete_endpoint` removes every endpoint of the service on the given interface.

Resources come back as the plain dictionaries that the API returned. Listing calls follow `next` links until all pages are read.

`get_availability` maps `"admin"`, `"internal"` and `"public"` to `Availability`. It raises `ValueError` for any other name.

### Errors

- `get_project`, `get_user`, `get_role` and `get_service` raise `osklib.client.NotFoundError` when nothing matches.
- A request that returns 404 also raises `NotFoundError`.
- Other failures raise `osklib.client.OpenStackError`, for example when several projects, users, domains or limits share one name, or when a request returns an error status. `NotFoundError` is a subclass of it.

## What the package does not do

- It is a library only. It has no command-line program.
- It does not create, update or watch Kubernetes objects. Volumes and sources are produced as plain dictionaries for the caller to use.
- Its OpenStack support is limited to the identity operations listed above and the block storage service check. It does not manage servers or any other compute resources.