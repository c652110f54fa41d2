"""GitHub Releases MCP server implementation.

Importing this module instantiates the FastMCP server, registers the release
and package tools, and builds the ASGI application so the same code path is
shared by the CLI, tests and uvicorn deployments.

Key Components:
    - app (fastmcp.FastMCP): MCP server with the release tools registered.
    - health_check(): ``/health`` endpoint for readiness probes.
    - http_app (Starlette): ASGI application built from ``app``; SSE by default,
      streamable HTTP when ``GITHUB_RELEASES_MCP_TRANSPORT_MODE`` selects it.

Usage:
    ```bash
    uvicorn github_releases_mcp.server:http_app --host 127.0.0.1 --port 8000
    ```
"""

import contextlib

import fastmcp
from fastmcp.server.http import StarletteWithLifespan
from starlette.requests import Request
from starlette.responses import JSONResponse

from github_releases_mcp.config import Settings, get_settings
from github_releases_mcp.observability import initialize_logfire, instrument_starlette_app
from github_releases_mcp.tools.packages import (
    LIST_ORGANIZATION_PACKAGES_DESCRIPTION,
    github_organization_packages,
)
from github_releases_mcp.tools.releases import (
    COMPARE_RELEASES_DESCRIPTION,
    GET_RELEASE_INFO_DESCRIPTION,
    LIST_RELEASE_PACKAGES_DESCRIPTION,
    LIST_RELEASES_DESCRIPTION,
    github_release_info,
    github_release_packages,
    github_releases_compare,
    github_releases_list,
)

initialize_logfire()

app: fastmcp.FastMCP[None] = fastmcp.FastMCP("GitHubReleasesMCP")

# Register MCP tools
app.tool(description=GET_RELEASE_INFO_DESCRIPTION)(github_release_info)
app.tool(description=COMPARE_RELEASES_DESCRIPTION)(github_releases_compare)
app.tool(description=LIST_RELEASES_DESCRIPTION)(github_releases_list)
app.tool(description=LIST_RELEASE_PACKAGES_DESCRIPTION)(github_release_packages)
app.tool(description=LIST_ORGANIZATION_PACKAGES_DESCRIPTION)(github_organization_packages)


@app.custom_route("/health", methods=["GET"])
async def health_check(request: Request) -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse({"status": "ok"})


settings = None

with contextlib.suppress(Exception):
    settings = get_settings()


def get_http_app(app: fastmcp.FastMCP, settings: Settings | None) -> StarletteWithLifespan:
    """Return the ASGI app for the configured HTTP transport (SSE by default)."""
    if settings and settings.transport_mode in ("streamable-http", "http"):
        return app.http_app(transport=settings.transport_mode, stateless_http=settings.stateless_http)
    return app.http_app(transport="sse")


http_app = get_http_app(app, settings)

instrument_starlette_app(http_app)
