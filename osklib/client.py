"""Authenticated HTTP access to an OpenStack cloud."""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional

import requests

DEFAULT_REQUEST_TIMEOUT = 10.0

_log = logging.getLogger(__name__)


class Availability(str, Enum):
    """Interface through which an endpoint is reachable."""

    ADMIN = "admin"
    INTERNAL = "internal"
    PUBLIC = "public"


class OpenStackError(Exception):
    """An OpenStack request or lookup failed."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(OpenStackError):
    """The requested resource does not exist."""


@dataclass
class TLSConfig:
    """TLS settings for talking to the cloud."""

    ca_certs: list[str] = field(default_factory=list)
    insecure: bool = False
    client_cert: str = ""
    client_key: str = ""


@dataclass
class AuthScope:
    """What a token is scoped to."""

    project_id: str = ""
    project_name: str = ""
    domain_id: str = ""
    domain_name: str = ""
    system: bool = False

    def to_dict(self) -> Optional[dict[str, Any]]:
        """Return the scope in its wire form, or None for an unscoped token."""
        if self.system:
            return {"system": {"all": True}}
        if self.project_name:
            if self.domain_id and self.domain_name:
                raise ValueError("give either a domain id or a domain name, not both")
            if self.domain_id:
                domain = {"id": self.domain_id}
            elif self.domain_name:
                domain = {"name": self.domain_name}
            else:
                raise ValueError("a project name needs a domain id or a domain name")
            return {"project": {"name": self.project_name, "domain": domain}}
        if self.project_id:
            return {"project": {"id": self.project_id}}
        if self.domain_id:
            return {"domain": {"id": self.domain_id}}
        if self.domain_name:
            return {"domain": {"name": self.domain_name}}
        return None


@dataclass
class AuthOpts:
    """Credentials and connection settings."""

    auth_url: str
    username: str = ""
    password: str = field(default="", repr=False)
    tenant_name: str = ""
    tenant_id: str = ""
    domain_name: str = ""
    region: str = ""
    scope: Optional[AuthScope] = None
    tls: Optional[TLSConfig] = None


@dataclass
class EndpointOpts:
    """Selects an endpoint from the service catalog."""

    type: str
    name: str = ""
    region: str = ""
    availability: Availability = Availability.PUBLIC


def _identity_v3_base(url: str) -> str:
    base = url.rstrip("/")
    for suffix in ("/v3", "/v2.0"):
        if base.endswith(suffix):
            base = base[: -len(suffix)]
            break
    return base + "/v3"


@dataclass
class ServiceClient:
    """Sends requests to one service endpoint."""

    endpoint: str
    session: requests.Session = field(default_factory=requests.Session)
    timeout: float = DEFAULT_REQUEST_TIMEOUT

    def _url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return self.endpoint.rstrip("/") + "/" + path.lstrip("/")

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self._url(path)
        response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        if response.status_code == 404:
            raise NotFoundError(f"Resource not found: [{method} {url}]", status_code=404)
        if response.status_code >= 400:
            raise OpenStackError(
                f"Request [{method} {url}] failed with status "
                f"{response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        if not response.content:
            return None
        return response.json()

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """GET *path*; empty query parameters are left out."""
        query = {k: v for k, v in (params or {}).items() if v is not None and v != ""}
        return self._request("GET", path, params=query or None)

    def post(self, path: str, body: Any) -> Any:
        return self._request("POST", path, json=body)

    def patch(self, path: str, body: Any) -> Any:
        return self._request("PATCH", path, json=body)

    def delete(self, path: str) -> None:
        self._request("DELETE", path)

    def list_all(
        self, path: str, key: str, params: Optional[Mapping[str, Any]] = None
    ) -> list[dict[str, Any]]:
        """Collect the *key* items of every page, following next links."""
        items: list[dict[str, Any]] = []
        body = self.get(path, params)
        while body is not None:
            items.extend(body.get(key) or [])
            next_link = (body.get("links") or {}).get("next")
            body = self.get(next_link) if next_link else None
        return items


@dataclass
class ProviderClient:
    """An authenticated session together with its service catalog."""

    session: requests.Session
    identity_endpoint: str
    token: str
    catalog: list[dict[str, Any]] = field(default_factory=list)
    timeout: float = DEFAULT_REQUEST_TIMEOUT

    def service_client(self, endpoint_opts: EndpointOpts) -> ServiceClient:
        """Return a client for the one catalog endpoint matching *endpoint_opts*."""
        availability = Availability(endpoint_opts.availability).value
        matches = [
            endpoint["url"]
            for entry in self.catalog
            if entry.get("type") == endpoint_opts.type
            and (not endpoint_opts.name or entry.get("name") == endpoint_opts.name)
            for endpoint in entry.get("endpoints") or []
            if endpoint.get("interface") == availability
            and (
                not endpoint_opts.region
                or endpoint_opts.region
                in (endpoint.get("region_id"), endpoint.get("region"))
            )
        ]
        if not matches:
            raise OpenStackError(
                "No suitable endpoint could be found in the service catalog."
            )
        if len(matches) > 1:
            raise OpenStackError(f"Discovered {len(matches)} matching endpoints: {matches}")
        url = matches[0]
        if endpoint_opts.type == "identity":
            url = _identity_v3_base(url)
        return ServiceClient(endpoint=url, session=self.session, timeout=self.timeout)


def get_availability(endpoint_interface: str) -> Availability:
    """Map an endpoint interface name to its availability."""
    try:
        return Availability(endpoint_interface)
    except ValueError:
        raise ValueError(f"endpoint interface {endpoint_interface} not known") from None


def _build_session(tls: Optional[TLSConfig]) -> requests.Session:
    session = requests.Session()
    session.headers["Accept"] = "application/json"
    if tls is None:
        return session
    if tls.ca_certs:
        with tempfile.NamedTemporaryFile(
            "w", suffix=".pem", delete=False, encoding="utf-8"
        ) as bundle:
            bundle.write("\n".join(tls.ca_certs))
        session.verify = bundle.name
    if tls.insecure:
        session.verify = False
    if tls.client_cert and tls.client_key:
        Path(tls.client_cert).read_bytes()
        Path(tls.client_key).read_bytes()
        session.cert = (tls.client_cert, tls.client_key)
    return session


def _tenant_scope(cfg: AuthOpts) -> Optional[dict[str, Any]]:
    if cfg.tenant_id:
        return {"project": {"id": cfg.tenant_id}}
    if cfg.tenant_name:
        return {"project": {"name": cfg.tenant_name, "domain": {"name": cfg.domain_name}}}
    return None


def _auth_body(cfg: AuthOpts) -> dict[str, Any]:
    if not cfg.username:
        raise ValueError("a username is required for password authentication")
    if not cfg.domain_name:
        raise ValueError("a domain name is required to authenticate by username")
    user = {
        "name": cfg.username,
        "password": cfg.password,
        "domain": {"name": cfg.domain_name},
    }
    credentials = {"user": user}
    identity: dict[str, Any] = {"methods": ["password"]}
    identity["password"] = credentials
    auth: dict[str, Any] = {"identity": identity}
    scope = cfg.scope.to_dict() if cfg.scope is not None else _tenant_scope(cfg)
    if scope:
        auth["scope"] = scope
    return {"auth": auth}


def get_openstack_provider(cfg: AuthOpts) -> ProviderClient:
    """Authenticate against the identity service and return the provider client."""
    session = _build_session(cfg.tls)
    identity = _identity_v3_base(cfg.auth_url)
    body = _auth_body(cfg)
    url = identity + "/auth/tokens"
    response = session.post(url, json=body, timeout=DEFAULT_REQUEST_TIMEOUT)
    if response.status_code >= 400:
        raise OpenStackError(
            f"Authentication at {url} failed with status {response.status_code}: "
            f"{response.text}",
            status_code=response.status_code,
        )
    issued = response.headers.get("X-Subject-Token")
    if not issued:
        raise OpenStackError("Authentication response carries no token")
    session.headers["X-Auth-Token"] = issued
    catalog = (response.json().get("token") or {}).get("catalog") or []
    _log.debug("Authenticated at %s", identity)
    return ProviderClient(
        session=session,
        identity_endpoint=identity,
        token=issued,
        catalog=catalog,
        timeout=DEFAULT_REQUEST_TIMEOUT,
    )