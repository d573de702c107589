"""
Parsing of registry ``WWW-Authenticate`` challenges.

example: Bearer realm="https://auth.docker.io/token",service="registry.docker.io"
"""

import re
from dataclasses import dataclass

_PARAM_RE = re.compile(r'([A-Za-z][\w-]*)\s*=\s*"((?:\\.|[^"\\])*)"')
_QUOTED_RE = re.compile(r'(?<==")(?:\\.|[^"\\])*(?=")')
_ESCAPE_RE = re.compile(r"\\(.)")


class MalformedChallenge(ValueError):
    """Upstream sent a challenge without a usable realm and service."""


@dataclass(frozen=True)
class Challenge:
    realm: str
    service: str


def _unescape(value: str) -> str:
    return _ESCAPE_RE.sub(r"\1", value)


def parse_www_authenticate(auth_header: str) -> Challenge:
    """
    Extract realm and service from a ``WWW-Authenticate`` header value.

    Named ``realm``/``service`` parameters win. Headers without those names
    fall back to position: first quoted value is the realm, second the
    service, the rest is ignored.

    Raises:
        MalformedChallenge: fewer than two quoted values, or an empty field.
    """
    quoted = _QUOTED_RE.findall(auth_header)
    if len(quoted) < 2:
        raise MalformedChallenge(f"invalid WWW-Authenticate header: {auth_header}")

    params = {key.lower(): value for key, value in _PARAM_RE.findall(auth_header)}
    if params.get("realm") and params.get("service"):
        realm, service = params["realm"], params["service"]
    else:
        realm, service = quoted[0], quoted[1]

    if not realm or not service:
        raise MalformedChallenge(f"invalid WWW-Authenticate header: {auth_header}")

    return Challenge(realm=_unescape(realm), service=_unescape(service))
