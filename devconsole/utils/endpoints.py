"""
Centralised endpoint helpers.  Every console URL flows through here so the
REST and WebSocket paths for a deployment stay in sync.
"""

from urllib.parse import quote, urlsplit, urlunsplit

from devconsole.config import WORKLOADS_PREFIX


def _deployment_path(key) -> str:
    org, project, stack, deployment_id = (quote(str(p), safe="") for p in key)
    return f"{org}/{project}/{stack}/deployments/{deployment_id}/logs"


def logs_url(base_url: str, key) -> str:
    """REST endpoint for one page of a deployment's logs."""
    return f"{base_url.rstrip('/')}{WORKLOADS_PREFIX}/{_deployment_path(key)}"


def logs_ws_url(base_url: str, key) -> str:
    """WebSocket endpoint streaming a deployment's logs.

    ``http`` becomes ``ws`` and ``https`` becomes ``wss``; an explicit
    ``ws``/``wss`` base is kept as-is.
    """
    parts = urlsplit(base_url.rstrip("/"))
    scheme = {"https": "wss", "http": "ws"}.get(parts.scheme, parts.scheme or "ws")
    path = f"{parts.path}{WORKLOADS_PREFIX}/ws/{_deployment_path(key)}"
    return urlunsplit((scheme, parts.netloc, path, "", ""))
