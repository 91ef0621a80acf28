"""
Upstream deployment-log provider – fetches one page of a stack deployment's
logs from the cloud provider's REST API.
"""

from typing import Optional
from urllib.parse import quote

import requests

from devconsole.backend.models import LogPageModel
from devconsole.config import (
    PROVIDER_API_URL,
    PROVIDER_TOKEN,
    PROVIDER_ACCEPT,
    PROVIDER_TIMEOUT,
)


class ProviderError(Exception):
    """The provider could not be reached or answered with an error."""


def deployment_logs_url(organization: str, project: str, stack: str, deployment_id: str) -> str:
    org, project, stack, deployment_id = (
        quote(str(p), safe="") for p in (organization, project, stack, deployment_id)
    )
    return (
        f"{PROVIDER_API_URL.rstrip('/')}/stacks/{org}/{project}/{stack}"
        f"/deployments/{deployment_id}/logs"
    )


def get_deployment_logs(
    organization: str,
    project: str,
    stack: str,
    deployment_id: str,
    continuation_token: Optional[str] = None,
) -> LogPageModel:
    """Return one page; ``nextToken`` is None on the last page."""
    url = deployment_logs_url(organization, project, stack, deployment_id)
    params = {"continuationToken": continuation_token} if continuation_token else None
    headers = {
        "Accept": PROVIDER_ACCEPT,
        "Content-Type": "application/json",
        "Authorization": f"token {PROVIDER_TOKEN}",
    }
    try:
        resp = requests.get(url, params=params, headers=headers, timeout=PROVIDER_TIMEOUT)
    except requests.RequestException as exc:
        raise ProviderError(f"failed to fetch logs: {exc}") from exc

    if not resp.ok:
        raise ProviderError(f"provider returned {resp.status_code}: {resp.text}")

    try:
        page = LogPageModel.model_validate(resp.json())
    except ValueError as exc:
        raise ProviderError(f"failed to decode logs: {exc}") from exc

    if not page.nextToken:
        page.nextToken = None
    return page
