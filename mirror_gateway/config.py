"""
Configuration for the mirror gateway.

Loaded once from environment variables at startup and handed to the app.
"""

import os

DOCKER_HUB = "https://registry-1.docker.io"


class Config:
    """
    Gateway configuration from environment variables.

    Environment Variables:
        CUSTOM_DOMAIN: Domain the mirror subdomains hang off. Default: example.com
        MODE: "debug" routes unknown hosts to TARGET_UPSTREAM. Default: prod
        TARGET_UPSTREAM: Upstream used in debug mode. Default: Docker Hub
        LOG_LEVEL: Logging level. Default: INFO
        HOST: Server bind address. Default: 127.0.0.1
        PORT: Server bind port. Default: 5000
        UPSTREAM_TIMEOUT: Outbound timeout in seconds, "none" to disable. Default: 30
    """

    def __init__(self, environ=None):
        env = os.environ if environ is None else environ

        # Routing
        self.CUSTOM_DOMAIN = env.get("CUSTOM_DOMAIN", "example.com")
        self.MODE = env.get("MODE", "prod")
        self.TARGET_UPSTREAM = env.get("TARGET_UPSTREAM", DOCKER_HUB)

        # Logging
        self.LOG_LEVEL = env.get("LOG_LEVEL", "INFO").upper()

        # Server
        self.HOST = env.get("HOST", "127.0.0.1")
        self.PORT = int(env.get("PORT", "5000"))

        # Upstream client
        timeout = env.get("UPSTREAM_TIMEOUT", "30").strip().lower()
        self.UPSTREAM_TIMEOUT = None if timeout in ("", "none") else float(timeout)

    @property
    def debug(self) -> bool:
        return self.MODE == "debug"

    def __repr__(self):
        return (
            f"Config(CUSTOM_DOMAIN={self.CUSTOM_DOMAIN}, "
            f"MODE={self.MODE}, "
            f"TARGET_UPSTREAM={self.TARGET_UPSTREAM}, "
            f"HOST={self.HOST}, "
            f"PORT={self.PORT}, "
            f"UPSTREAM_TIMEOUT={self.UPSTREAM_TIMEOUT})"
        )
