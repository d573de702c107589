"""
FastAPI application proxying registry v2 traffic to the mapped upstream.

Each request is classified by path once; no state survives between requests
apart from the shared upstream connection pool.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse

from .challenge import MalformedChallenge, parse_www_authenticate
from .config import Config
from .library import library_path, normalize_scope
from .responses import bad_gateway, response_unauthorized, route_not_found
from .routing import is_docker_hub, route_by_host
from .status_page import is_browser, render_status_page
from .upstream import fetch_token, forward_headers, relay, send

logger = logging.getLogger(__name__)

METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]
BODY_METHODS = {"POST", "PUT", "PATCH"}


def create_app(config: Config, client: Optional[httpx.AsyncClient] = None) -> FastAPI:
    """
    Build the gateway app.

    ``client`` is used for all upstream calls when given; otherwise one is
    opened for the lifetime of the app.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if client is not None:
            yield
            return
        async with httpx.AsyncClient(timeout=config.UPSTREAM_TIMEOUT) as upstream_client:
            app.state.upstream_client = upstream_client
            yield

    app = FastAPI(lifespan=lifespan)
    app.state.upstream_client = client

    @app.exception_handler(httpx.TransportError)
    async def upstream_failure(request: Request, exc: httpx.TransportError):
        logger.warning(f"Upstream request failed for {request.url}: {exc!r}")
        return bad_gateway("Upstream request failed", str(exc) or type(exc).__name__)

    @app.api_route("/{full_path:path}", methods=METHODS)
    async def proxy(full_path: str, request: Request) -> Response:
        return await dispatch(request, config, request.app.state.upstream_client)

    return app


async def dispatch(request: Request, config: Config, client: httpx.AsyncClient) -> Response:
    url = request.url
    path = url.path

    # 1. "/" -> status page for browsers, /v2/ for everyone else
    if path == "/":
        if is_browser(request.headers.get("user-agent", "")):
            return HTMLResponse(render_status_page(config))
        return RedirectResponse(url=f"{url.scheme}://{url.netloc}/v2/", status_code=301)

    # 2. Determine upstream
    upstream = route_by_host(url.hostname, config)
    if upstream is None:
        logger.info(f"No route for host {url.hostname}")
        return route_not_found(url.hostname)

    dockerhub = is_docker_hub(upstream)
    authorization = request.headers.get("authorization")

    # 3. === /v2/ request ===
    if path == "/v2/":
        resp = await send(
            client, "GET", upstream + "/v2/", headers=forward_headers(request.headers)
        )
        if resp.status_code == 401:
            await resp.aclose()
            return response_unauthorized(request, config)
        return relay(resp)

    # 4. === /v2/auth ===
    if path == "/v2/auth":
        return await authenticate(request, config, client, upstream, dockerhub, authorization)

    # 5. DockerHub library auto-prefix
    if dockerhub:
        new_path = library_path(path)
        if new_path is not None:
            location = str(url.replace(path=new_path))
            logger.info(f"Redirecting {path} -> {new_path}")
            return RedirectResponse(url=location, status_code=301)

    # 6. Proxy other requests
    return await forward(request, config, client, upstream, dockerhub)


async def authenticate(
    request: Request,
    config: Config,
    client: httpx.AsyncClient,
    upstream: str,
    dockerhub: bool,
    authorization: Optional[str],
) -> Response:
    probe = await send(client, "GET", upstream + "/v2/", headers=forward_headers({}))

    if probe.status_code != 401:
        return relay(probe)

    auth_header = probe.headers.get("WWW-Authenticate")
    if not auth_header:
        return relay(probe)
    await probe.aclose()

    try:
        challenge = parse_www_authenticate(auth_header)
    except MalformedChallenge as e:
        logger.warning(f"Malformed challenge from {upstream}: {auth_header!r}")
        return bad_gateway("Malformed upstream challenge", str(e))

    # autocomplete DockerHub scope
    scope = request.query_params.get("scope")
    if scope and dockerhub:
        scope = normalize_scope(scope)

    token_resp = await fetch_token(client, challenge, scope, authorization)
    return relay(token_resp)


def raw_path(request: Request) -> str:
    # raw_path keeps percent-encoding such as %2F that url.path decodes
    raw = request.scope.get("raw_path")
    if not raw:
        return request.url.path
    return raw.decode("latin-1").split("?", 1)[0]


async def forward(
    request: Request,
    config: Config,
    client: httpx.AsyncClient,
    upstream: str,
    dockerhub: bool,
) -> Response:
    upstream_url = upstream + raw_path(request)
    if request.url.query:
        upstream_url += "?" + request.url.query

    headers = forward_headers(request.headers)
    content = request.stream() if request.method in BODY_METHODS else None

    # DockerHub answers blob requests with a 307 that is followed separately below
    resp = await send(
        client,
        request.method,
        upstream_url,
        headers=headers,
        follow_redirects=not dockerhub,
        content=content,
    )

    # 6A. Unauthorized
    if resp.status_code == 401:
        await resp.aclose()
        return response_unauthorized(request, config)

    # 6B. DockerHub blob redirect
    if dockerhub and resp.status_code == 307:
        location = resp.headers.get("Location")
        if location:
            await resp.aclose()
            logger.debug(f"Following blob redirect for {request.url.path}")
            blob_resp = await send(client, "GET", resp.url.join(location), headers=headers)
            return relay(blob_resp)

    return relay(resp)
