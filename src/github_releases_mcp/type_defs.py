"""Common type definitions used throughout the github-releases-mcp package."""

from typing import TypeAlias

from pydantic import JsonValue

JsonDict: TypeAlias = dict[str, JsonValue]

__all__ = ["JsonDict"]
