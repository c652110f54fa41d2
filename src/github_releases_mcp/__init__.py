"""GitHub Releases MCP: Model Context Protocol server for GitHub releases.

This package provides an MCP server with read-only tools for looking up a
single release, comparing a range of releases, listing releases, and
discovering the packages published from monorepo-style repositories.
"""

__version__ = "0.3.0"
