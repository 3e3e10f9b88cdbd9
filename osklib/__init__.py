"""Ceph settings, extra volume propagation and OpenStack identity resource helpers."""

__version__ = "0.1.0"

__all__ = [
    "ceph",
    "storage",
    "client",
    "domain",
    "project",
    "user",
    "endpoint",
    "role",
    "service",
    "volume",
    "limits",
    "cloud",
]