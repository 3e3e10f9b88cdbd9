import pytest
import responses
from responses import matchers

from osklib.client import NotFoundError, OpenStackError, ServiceClient
from osklib.project import PROJECT_NOT_FOUND, Project, ProjectMixin

ENDPOINT = "http://keystone.example.com/v3"


class _Cloud(ProjectMixin):
    def __init__(self, client):
        self.osclient = client


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


def test_create_project_reuses_existing(rsps):
    rsps.add(
        responses.GET,
        ENDPOINT + "/projects",
        json={"projects": [{"id": "p1", "name": "service"}]},
        match=[matchers.query_param_matcher({"name": "service", "domain_id": "default"})],
    )
    project = Project(name="service", domain_id="default")
    assert _Cloud(ServiceClient(endpoint=ENDPOINT)).create_project(project) == "p1"
    assert len(rsps.calls) == 1


def test_create_project_creates_missing(rsps):
    rsps.add(responses.GET, ENDPOINT + "/projects", json={"projects": []})
    rsps.add(
        responses.POST,
        ENDPOINT + "/projects",
        json={"project": {"id": "p2"}},
        status=201,
        match=[
            matchers.json_params_matcher(
                {
                    "project": {
                        "name": "service",
                        "description": "service project",
                        "domain_id": "default",
                    }
                }
            )
        ],
    )
    project = Project(name="service", description="service project", domain_id="default")
    assert _Cloud(ServiceClient(endpoint=ENDPOINT)).create_project(project) == "p2"


def test_create_project_multiple(rsps):
    rsps.add(
        responses.GET, ENDPOINT + "/projects", json={"projects": [{"id": "a"}, {"id": "b"}]}
    )
    with pytest.raises(OpenStackError, match='multiple projects named "service" found'):
        _Cloud(ServiceClient(endpoint=ENDPOINT)).create_project(Project(name="service"))


def test_get_project_found(rsps):
    rsps.add(
        responses.GET,
        ENDPOINT + "/projects",
        json={"projects": [{"id": "p1", "name": "service"}]},
    )
    cloud = _Cloud(ServiceClient(endpoint=ENDPOINT))
    assert cloud.get_project("service", "default") == {"id": "p1", "name": "service"}


def test_get_project_not_found(rsps):
    rsps.add(responses.GET, ENDPOINT + "/projects", json={"projects": []})
    cloud = _Cloud(ServiceClient(endpoint=ENDPOINT))
    with pytest.raises(NotFoundError) as info:
        cloud.get_project("service", "default")
    assert str(info.value) == f"service {PROJECT_NOT_FOUND}"


def test_get_project_multiple(rsps):
    rsps.add(
        responses.GET, ENDPOINT + "/projects", json={"projects": [{"id": "a"}, {"id": "b"}]}
    )
    cloud = _Cloud(ServiceClient(endpoint=ENDPOINT))
    with pytest.raises(OpenStackError, match='multiple project named "service" found'):
        cloud.get_project("service", "default")