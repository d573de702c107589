"""Human-readable status page served to browsers on ``/``."""

from datetime import datetime, timezone
from html import escape

from .config import Config
from .routing import build_routes

BROWSER_MARKERS = ("Mozilla", "Chrome", "Safari")

PAGE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>Docker Mirror Status</title>
  <style>
    body {{ font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; line-height: 1.6; color: #333; max-width: 800px; margin: 40px auto; padding: 0 20px; background: #f4f7f9; }}
    .card {{ background: white; padding: 25px; border-radius: 12px; box-shadow: 0 4px 6px rgba(0,0,0,0.05); }}
    h1 {{ color: #0969da; border-bottom: 2px solid #eaecef; padding-bottom: 10px; }}
    .status {{ display: inline-block; background: #2da44e; color: white; padding: 2px 10px; border-radius: 20px; font-size: 14px; }}
    code {{ background: #f6f8fa; padding: 15px; border-radius: 6px; display: block; white-space: pre; overflow-x: auto; border: 1px solid #d0d7de; margin: 10px 0; }}
    ul {{ list-style: none; padding: 0; }}
    li {{ padding: 8px 0; border-bottom: 1px solid #f0f0f0; display: flex; justify-content: space-between; }}
    .domain {{ font-weight: bold; color: #0550ae; }}
  </style>
</head>
<body>
  <div class="card">
    <h1>Docker Mirror</h1>
    <p>Status: <span class="status">Running</span></p>
    <p>Checked at: <strong>{checked_at}</strong></p>

    <h3>Quick start</h3>
    <code>docker pull docker.{domain}/library/alpine:latest</code>

    <h3>Registry mirror configuration</h3>
    <code>{{
  "registry-mirrors": ["https://docker.{domain}"]
}}</code>

    <h3>Active routes</h3>
    <ul>
{routes}
    </ul>
  </div>
</body>
</html>
"""


def is_browser(user_agent: str) -> bool:
    return any(marker in user_agent for marker in BROWSER_MARKERS)


def render_status_page(config: Config) -> str:
    routes = "\n".join(
        f'      <li><span class="domain">{escape(host)}</span> &rarr; <span>{escape(upstream)}</span></li>'
        for host, upstream in build_routes(config.CUSTOM_DOMAIN).items()
    )
    return PAGE.format(
        checked_at=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC"),
        domain=escape(config.CUSTOM_DOMAIN),
        routes=routes,
    )
