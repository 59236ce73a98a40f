# src/itasks/tasks/endpoint.py

from __future__ import annotations

from urllib.parse import quote

# Marker looked for in the configured endpoint. A substring test, not a scheme
# parse: "https" anywhere in the string routes to the real API.
SECURE_SCHEME_MARKER = "https"


def is_real_endpoint_configured(endpoint: str | None) -> bool:
    """True when submissions should go to the network instead of the simulation."""
    if not endpoint:
        return False
    return SECURE_SCHEME_MARKER in endpoint


def task_url(endpoint: str, task_id: str) -> str:
    """URL of a single task resource: {endpoint}/{id}."""
    return f"{endpoint.rstrip('/')}/{quote(task_id, safe='')}"
