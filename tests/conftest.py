"""Pytest fixtures for the mirror gateway tests."""

import httpx
import pytest

from mirror_gateway import create_app
from mirror_gateway.config import Config

DOCKER_HUB_CHALLENGE = 'Bearer realm="https://auth.docker.io/token",service="registry.docker.io"'


class Upstream:
    """
    Records outbound requests and answers them with a test handler.

    Handler responses are re-wrapped as unread streams so the gateway relays
    them the way it relays a live upstream.
    """

    def __init__(self, handler):
        self.handler = handler
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.handler(request)
        return httpx.Response(
            response.status_code,
            headers=response.headers,
            stream=httpx.ByteStream(response.content),
        )


@pytest.fixture
def gateway():
    """
    Factory building a client for the gateway app.

    Upstream traffic goes to ``handler`` through httpx's MockTransport.
    Returns (client, upstream recorder).
    """

    def make(handler, host="docker.example.com", environ=None):
        config = Config(environ if environ is not None else {"CUSTOM_DOMAIN": "example.com"})
        upstream = Upstream(handler)
        upstream_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
        app = create_app(config, client=upstream_client)
        client = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url=f"http://{host}",
        )
        return client, upstream

    return make
