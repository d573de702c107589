"""
Docker Hub ``library/`` namespace handling.

Official images live under ``library/<name>`` on Docker Hub, but clients
omit the prefix for short names.
"""

from typing import Optional


def normalize_scope(scope: str) -> str:
    # repository:alpine:pull -> repository:library/alpine:pull
    parts = scope.split(":")
    if len(parts) == 3 and "/" not in parts[1]:
        parts[1] = "library/" + parts[1]
        return ":".join(parts)
    return scope


def library_path(path: str) -> Optional[str]:
    """
    Return ``path`` with ``library`` inserted, or None when no rewrite applies.

    Only five-segment paths qualify, e.g. /v2/busybox/manifests/latest.
    """
    parts = path.split("/")
    if len(parts) != 5 or parts[2] == "library":
        return None
    parts.insert(2, "library")
    return "/".join(parts)
