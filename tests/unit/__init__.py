"""Unit tests for the GitHub Releases MCP server.

These tests exercise individual components in isolation. GitHub is never
contacted: release sources are replaced by the fakes in ``helpers/fakes.py``
and HTTP traffic is intercepted with respx.
"""
