"""
Container registry mirror gateway.

Maps mirror subdomains (docker.<domain>, gcr.<domain>, ...) to their upstream
registries and proxies pulls, including the token authentication handshake.
"""

__version__ = "0.1.0"

from .app import create_app
from .challenge import Challenge, MalformedChallenge, parse_www_authenticate
from .config import Config
from .library import library_path, normalize_scope
from .routing import build_routes, route_by_host

__all__ = [
    "create_app",
    "Config",
    "Challenge",
    "MalformedChallenge",
    "parse_www_authenticate",
    "build_routes",
    "route_by_host",
    "normalize_scope",
    "library_path",
]
