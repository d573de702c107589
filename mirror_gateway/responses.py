"""Responses the gateway produces itself rather than relaying."""

from fastapi import Request
from fastapi.responses import JSONResponse

from .config import Config


def response_unauthorized(request: Request, config: Config) -> JSONResponse:
    """
    401 challenge pointing clients at this gateway's own /v2/auth.

    The realm is always https. Debug mode is the one exception: it keeps the
    inbound scheme so plain-HTTP local setups can authenticate, which departs
    from the https-only challenge served in production.
    """
    host = request.url.netloc
    scheme = request.url.scheme if config.debug else "https"
    www_auth = f'Bearer realm="{scheme}://{host}/v2/auth",service="{host}"'

    return JSONResponse(
        status_code=401,
        content={"message": "UNAUTHORIZED"},
        headers={"WWW-Authenticate": www_auth},
    )


def route_not_found(hostname: str) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"error": "Route not found", "host": hostname},
    )


def bad_gateway(error: str, detail: str) -> JSONResponse:
    return JSONResponse(status_code=502, content={"error": error, "detail": detail})
