"""
Deployment log routes – one REST page at a time, or every page pushed over
a WebSocket.
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from devconsole.backend.services import provider as provider_svc
from devconsole.config import STREAM_PAGE_DELAY

router = APIRouter()
log = logging.getLogger(__name__)


@router.get("/{organization}/{project}/{stack}/deployments/{deployment_id}/logs")
def get_deployment_logs(
    organization: str,
    project: str,
    stack: str,
    deployment_id: str,
    continuationToken: Optional[str] = None,
):
    try:
        page = provider_svc.get_deployment_logs(
            organization, project, stack, deployment_id, continuationToken
        )
    except provider_svc.ProviderError as exc:
        log.warning("Log page for %s/%s/%s#%s failed: %s", organization, project, stack, deployment_id, exc)
        return JSONResponse({"error": str(exc)}, status_code=500)
    return page.to_wire()


@router.websocket("/ws/{organization}/{project}/{stack}/deployments/{deployment_id}/logs")
async def stream_deployment_logs(
    websocket: WebSocket,
    organization: str,
    project: str,
    stack: str,
    deployment_id: str,
):
    """Push every page to the client, pausing between pages.  Closes after the last one."""
    await websocket.accept()
    token = None
    try:
        while True:
            try:
                page = await run_in_threadpool(
                    provider_svc.get_deployment_logs,
                    organization, project, stack, deployment_id, token,
                )
            except provider_svc.ProviderError as exc:
                await websocket.send_json({"error": str(exc)})
                break

            await websocket.send_json(page.to_wire())
            if not page.nextToken:
                break
            token = page.nextToken
            await asyncio.sleep(STREAM_PAGE_DELAY)
    except WebSocketDisconnect:
        log.debug("Log stream client left %s/%s/%s#%s", organization, project, stack, deployment_id)
        return
    await websocket.close()
