import json
from urllib.parse import parse_qs, urlparse

import pytest
import responses

from osklib.client import Availability, OpenStackError, ServiceClient
from osklib.endpoint import Endpoint, EndpointMixin

BASE = "http://identity.example.com/v3"


class Cloud(EndpointMixin):
    def __init__(self, client, region="regionOne"):
        self.osclient = client
        self.region = region


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


def _query(call):
    return parse_qs(urlparse(call.request.url).query)


def test_create_endpoint_returns_existing(rsps):
    rsps.add(responses.GET, f"{BASE}/endpoints", json={"endpoints": [{"id": "e1"}]})
    ep = Endpoint(name="svc", service_id="s1", availability=Availability.PUBLIC, url="http://x")
    assert Cloud(ServiceClient(endpoint=BASE)).create_endpoint(ep) == "e1"
    assert len(rsps.calls) == 1


def test_create_endpoint_posts_when_missing(rsps):
    rsps.add(responses.GET, f"{BASE}/endpoints", json={"endpoints": []})
    rsps.add(responses.POST, f"{BASE}/endpoints", json={"endpoint": {"id": "new"}}, status=201)
    ep = Endpoint(name="svc", service_id="s1", availability=Availability.INTERNAL, url="http://x")
    assert Cloud(ServiceClient(endpoint=BASE)).create_endpoint(ep) == "new"
    body = json.loads(rsps.calls[1].request.body)["endpoint"]
    assert body["interface"] == Availability.INTERNAL.value
    assert body["region"] == "regionOne"
    assert body["service_id"] == "s1"
    assert body["url"] == "http://x"


def test_get_endpoints_passes_filters(rsps):
    rsps.add(responses.GET, f"{BASE}/endpoints", json={"endpoints": [{"id": "a"}, {"id": "b"}]})
    found = Cloud(ServiceClient(endpoint=BASE)).get_endpoints("s1", "admin")
    assert [e["id"] for e in found] == ["a", "b"]
    query = _query(rsps.calls[0])
    assert query["service_id"] == ["s1"]
    assert query["region_id"] == ["regionOne"]
    assert query["interface"] == [Availability.ADMIN.value]


def test_get_endpoints_without_interface_filter(rsps):
    rsps.add(responses.GET, f"{BASE}/endpoints", json={"endpoints": []})
    assert Cloud(ServiceClient(endpoint=BASE)).get_endpoints("s1", "") == []
    assert "interface" not in _query(rsps.calls[0])


def test_get_endpoints_unknown_interface():
    cloud = Cloud(ServiceClient(endpoint=BASE))
    with pytest.raises(ValueError, match="endpoint interface bogus not known"):
        cloud.get_endpoints("s1", "bogus")


def test_delete_endpoint_deletes_all(rsps):
    rsps.add(responses.GET, f"{BASE}/endpoints", json={"endpoints": [{"id": "a"}, {"id": "b"}]})
    rsps.add(responses.DELETE, f"{BASE}/endpoints/a", status=204)
    rsps.add(responses.DELETE, f"{BASE}/endpoints/b", status=204)
    cloud = Cloud(ServiceClient(endpoint=BASE))
    result = cloud.delete_endpoint(Endpoint("svc", "s1", Availability.PUBLIC))
    assert result is None
    deleted = [c.request.url for c in rsps.calls if c.request.method == "DELETE"]
    assert deleted == [f"{BASE}/endpoints/a", f"{BASE}/endpoints/b"]


def test_delete_endpoint_error_propagates(rsps):
    rsps.add(responses.GET, f"{BASE}/endpoints", json={"endpoints": [{"id": "a"}]})
    rsps.add(responses.DELETE, f"{BASE}/endpoints/a", status=500)
    with pytest.raises(OpenStackError):
        Cloud(ServiceClient(endpoint=BASE)).delete_endpoint(
            Endpoint("svc", "s1", Availability.PUBLIC)
        )


def test_update_endpoint(rsps):
    rsps.add(responses.PATCH, f"{BASE}/endpoints/e9", json={"endpoint": {"id": "e9"}})
    ep = Endpoint("svc", "s1", Availability.PUBLIC, url="http://y")
    assert Cloud(ServiceClient(endpoint=BASE)).update_endpoint(ep, "e9") == "e9"
    body = json.loads(rsps.calls[0].request.body)["endpoint"]
    assert body["url"] == "http://y"
    assert body["interface"] == Availability.PUBLIC.value