"""
Outbound calls to upstream registries.

Every call is a single streamed attempt with the synthetic Docker client
User-Agent; nothing here retries.
"""

import logging
from typing import Optional

import httpx
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from .challenge import Challenge

logger = logging.getLogger(__name__)

# Some registries gate behaviour on client identification
USER_AGENT = "Docker-Client/24.0.7 (linux)"

HOP_BY_HOP = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailers",
    "transfer-encoding",
    "upgrade",
}


def forward_headers(headers) -> dict:
    """Copy caller headers for an upstream request, dropping hop-by-hop and Host."""
    forwarded = {}
    for key, value in headers.items():
        name = key.lower()
        if name in HOP_BY_HOP or name in ("host", "user-agent"):
            continue
        forwarded[key] = value
    forwarded["User-Agent"] = USER_AGENT
    return forwarded


async def send(
    client: httpx.AsyncClient,
    method: str,
    url,
    headers: Optional[dict] = None,
    follow_redirects: bool = True,
    content=None,
) -> httpx.Response:
    request = client.build_request(method, url, headers=headers, content=content)
    response = await client.send(request, stream=True, follow_redirects=follow_redirects)
    logger.debug(f"Upstream {method} {url} -> {response.status_code}")
    return response


async def fetch_token(
    client: httpx.AsyncClient,
    challenge: Challenge,
    scope: Optional[str],
    authorization: Optional[str],
) -> httpx.Response:
    url = httpx.URL(challenge.realm)
    if challenge.service:
        url = url.copy_set_param("service", challenge.service)
    if scope:
        url = url.copy_set_param("scope", scope)

    headers = {"User-Agent": USER_AGENT}
    if authorization:
        headers["Authorization"] = authorization

    logger.info(f"Requesting token from {challenge.realm} (scope={scope})")
    return await send(client, "GET", url, headers=headers)


def relay(response: httpx.Response) -> StreamingResponse:
    """Hand an upstream response back to the caller untouched."""
    streaming = StreamingResponse(
        response.aiter_raw(),
        status_code=response.status_code,
        background=BackgroundTask(response.aclose),
    )
    # multi_items keeps repeated headers such as Set-Cookie apart
    for key, value in response.headers.multi_items():
        if key.lower() not in HOP_BY_HOP:
            streaming.headers.append(key, value)
    return streaming
