"""Host to upstream registry routing."""

from typing import Optional

from .config import DOCKER_HUB, Config

# subdomain prefix -> upstream registry
UPSTREAMS = {
    "docker": DOCKER_HUB,
    "quay": "https://quay.io",
    "gcr": "https://gcr.io",
    "k8s-gcr": "https://k8s.gcr.io",
    "k8s": "https://registry.k8s.io",
    "ghcr": "https://ghcr.io",
    "cloudsmith": "https://docker.cloudsmith.io",
    "ecr": "https://public.ecr.aws",
}


def build_routes(domain: str) -> dict:
    return {f"{prefix}.{domain}": upstream for prefix, upstream in UPSTREAMS.items()}


def route_by_host(host: str, config: Config) -> Optional[str]:
    """
    Resolve a mirror hostname to its upstream base URL.

    Debug mode sends every unmatched host to TARGET_UPSTREAM. Returns None
    when nothing matches.
    """
    routes = build_routes(config.CUSTOM_DOMAIN)
    if host in routes:
        return routes[host]
    if config.debug:
        return config.TARGET_UPSTREAM
    return None


def is_docker_hub(upstream: str) -> bool:
    return upstream == DOCKER_HUB
