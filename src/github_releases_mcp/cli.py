"""Command-line interface for the GitHub Releases MCP server.

Runs the server over stdio (the default, for MCP clients that spawn it) or
over SSE / streamable HTTP through uvicorn.
"""

from __future__ import annotations

import ipaddress
import logging
import os
import sys
from collections.abc import Callable, Mapping
from typing import Literal

import click
import uvicorn

from github_releases_mcp.config import (
    DEFAULT_GITHUB_API_BASE_URL,
    GITHUB_API_BASE_URL_ENV,
    GITHUB_TOKEN_ENV,
    LEGACY_GITHUB_TOKEN_ENV,
    Settings,
)
from github_releases_mcp.observability import instrument_starlette_app

VALID_MODES: tuple[str, ...] = ("stdio", "sse", "streamable-http")


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------


def _is_loopback_host(host: str) -> bool:
    """Return True if *host* names a loopback address."""
    if host.lower() in ("localhost", "localhost.localdomain"):
        return True

    try:
        return ipaddress.ip_address(host).is_loopback
    except ValueError:
        return False


def _setup_logging(verbose: bool) -> None:
    """Configure global logging and install the token redaction filter.

    Args:
        verbose: If *True* log at *DEBUG* level, otherwise *INFO*. Logs go to
            stderr, which keeps stdout free for the stdio transport.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level)

    from github_releases_mcp.logging_security import install_filter

    install_filter()


def _apply_environment_overrides(github_token: str | None, api_base_url: str | None) -> None:
    """Copy CLI option values into the environment read by :class:`Settings`."""
    if github_token:
        os.environ[GITHUB_TOKEN_ENV] = github_token
    if api_base_url and api_base_url != DEFAULT_GITHUB_API_BASE_URL:
        os.environ[GITHUB_API_BASE_URL_ENV] = api_base_url


def _create_settings() -> Settings:
    """Return validated settings, exiting with status 1 on failure."""
    try:
        return Settings()
    except Exception as exc:  # pragma: no cover - exact validation exceptions vary
        click.echo(f"✗ Configuration error: {exc}", err=True)
        click.echo("\nSupported environment variables or CLI options:", err=True)
        click.echo(
            f"  --github-token or {GITHUB_TOKEN_ENV} (or {LEGACY_GITHUB_TOKEN_ENV})", err=True
        )
        click.echo(f"  --api-base-url or {GITHUB_API_BASE_URL_ENV}", err=True)
        sys.exit(1)


def _validate_http_binding(host: str, allow_remote_access: bool) -> None:
    """Refuse to bind to a non-loopback interface without explicit consent.

    Raises:
        SystemExit: If binding to non-loopback without --allow-remote-access
    """
    if not _is_loopback_host(host) and not allow_remote_access:
        click.echo("", err=True)
        click.echo("✗ SECURITY ERROR: Refusing to bind to non-loopback interface", err=True)
        click.echo("", err=True)
        click.echo(
            f"  Binding to '{host}' would expose unauthenticated MCP tools to the network,",
            err=True,
        )
        click.echo("  including any GitHub token this process holds.", err=True)
        click.echo("", err=True)
        click.echo("  Options:", err=True)
        click.echo("    1. Use --host localhost (recommended)", err=True)
        click.echo(
            "    2. Use --allow-remote-access if you understand the security risks", err=True
        )
        click.echo("", err=True)
        sys.exit(1)


def _display_security_warning(host: str) -> None:
    """Warn loudly when serving on a non-loopback interface."""
    click.echo("", err=True)
    click.echo("=" * 80, err=True)
    click.echo("WARNING: RUNNING IN REMOTE ACCESS MODE", err=True)
    click.echo("=" * 80, err=True)
    click.echo(f"  Binding to: {host}", err=True)
    click.echo("  All registered tools can be invoked remotely with this process's", err=True)
    click.echo("  GitHub credentials. Restrict access with a firewall or an", err=True)
    click.echo("  authenticating reverse proxy.", err=True)
    click.echo("=" * 80, err=True)
    click.echo("", err=True)


# ---------------------------------------------------------------------------
# Server runners
# ---------------------------------------------------------------------------


def _run_stdio(no_banner: bool = False) -> None:  # pragma: no cover - integration tested elsewhere
    """Run MCP in STDIO mode."""
    click.echo("Starting GitHub Releases MCP server in STDIO mode...", err=True)
    try:
        from github_releases_mcp.server import app

        app.run(transport="stdio", show_banner=not no_banner)
    except Exception as exc:
        click.echo(f"✗ Failed to start server: {exc}", err=True)
        sys.exit(1)


def _run_uvicorn(
    transport: Literal["http", "streamable-http", "sse"],
    *,
    host: str,
    port: int,
    verbose: bool,
    allow_remote_access: bool,
) -> None:  # pragma: no cover - uvicorn is mocked in unit-tests
    """Run the HTTP/SSE transport using *uvicorn*."""
    _validate_http_binding(host, allow_remote_access)

    if not _is_loopback_host(host):
        _display_security_warning(host)

    click.echo(
        f"Starting GitHub Releases MCP server in {transport.upper()} mode on {host}:{port}...",
        err=True,
    )

    try:
        from github_releases_mcp.server import app

        http_app = app.http_app(transport=transport)
        instrument_starlette_app(http_app)

        uvicorn.run(
            http_app,
            host=host,
            port=port,
            log_level="info" if verbose else "warning",
        )
    except Exception as exc:
        click.echo(f"✗ Failed to start server: {exc}", err=True)
        sys.exit(1)


def _run_mode(
    mode: str,
    *,
    host: str,
    port: int,
    verbose: bool,
    no_banner: bool = False,
    allow_remote_access: bool = False,
) -> None:
    """Dispatch to the appropriate server runner for *mode*."""
    runners: Mapping[str, Callable[[], None]] = {
        "stdio": lambda: _run_stdio(no_banner),
        "sse": lambda: _run_uvicorn(
            "sse", host=host, port=port, verbose=verbose, allow_remote_access=allow_remote_access
        ),
        "streamable-http": lambda: _run_uvicorn(
            "streamable-http",
            host=host,
            port=port,
            verbose=verbose,
            allow_remote_access=allow_remote_access,
        ),
    }

    runners[mode.lower()]()


@click.command()
@click.option(
    "--mode",
    "-m",
    type=click.Choice(VALID_MODES, case_sensitive=False),
    default="stdio",
    help="MCP transport mode to use",
)
@click.option(
    "--host",
    default="localhost",
    help="Host to bind to for SSE/HTTP modes (default: localhost)",
)
@click.option(
    "--port",
    default=8000,
    type=int,
    help="Port to bind to for SSE/HTTP modes (default: 8000)",
)
@click.option(
    "--github-token",
    envvar=[GITHUB_TOKEN_ENV, LEGACY_GITHUB_TOKEN_ENV],
    help=f"GitHub personal access token (env: {GITHUB_TOKEN_ENV} or {LEGACY_GITHUB_TOKEN_ENV})",
)
@click.option(
    "--api-base-url",
    default=DEFAULT_GITHUB_API_BASE_URL,
    envvar=GITHUB_API_BASE_URL_ENV,
    help=f"GitHub REST API base URL (default: {DEFAULT_GITHUB_API_BASE_URL})",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging",
)
@click.option(
    "--banner/--no-banner",
    default=False,
    help="Show/hide server startup banner (default: hidden)",
)
@click.option(
    "--allow-remote-access",
    is_flag=True,
    help="Allow binding to non-loopback interfaces (SECURITY RISK: exposes unauthenticated tools)",
)
def main(
    mode: str,
    host: str,
    port: int,
    github_token: str | None,
    api_base_url: str | None,
    verbose: bool,
    banner: bool,
    allow_remote_access: bool,
) -> None:
    """GitHub Releases MCP Server - release lookup, comparison and listing tools."""
    _setup_logging(verbose)

    _apply_environment_overrides(github_token=github_token, api_base_url=api_base_url)

    settings = _create_settings()
    click.echo("✓ Configuration validated successfully", err=True)
    if verbose:
        click.echo(f"  GitHub API: {settings.github_api_base_url}", err=True)
        click.echo(f"  Authenticated: {'yes' if settings.github_token else 'no'}", err=True)
        click.echo(f"  Mode: {mode}", err=True)

    _run_mode(
        mode,
        host=host,
        port=port,
        verbose=verbose,
        no_banner=not banner,
        allow_remote_access=allow_remote_access,
    )


if __name__ == "__main__":
    main()
