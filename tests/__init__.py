"""Test suite for the github-releases-mcp MCP server.

Test Structure:
- unit/libs/releases: version normalization, package scoping, pagination and
  release queries against in-memory release sources
- unit/libs/github: the REST client against respx-mocked GitHub endpoints
- unit/tools: the MCP tool functions with the GitHub client patched out
- unit/test_*.py: configuration, CLI, server, logging and user agent

Run tests with:
    pytest tests/
    pytest tests/ -v  # verbose output
"""
