"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, linearctl.toml only contains
overrides.  Most installs need nothing but ``LINEARCTL_API_KEY``.
"""

from __future__ import annotations

from pydantic import BaseModel

from linearctl.domain.types import OrderBy


class ApiConfig(BaseModel):
    """[api] section."""

    model_config = {"frozen": True}

    url: str = "https://api.linear.app/graphql"
    timeout_seconds: float = 30.0
    user_agent: str = "linearctl"


class SearchConfig(BaseModel):
    """[search] section."""

    model_config = {"frozen": True}

    page_size: int = 50
    # None leaves the order to the search default (most recently updated first).
    order_by: OrderBy | None = None


class McpConfig(BaseModel):
    """[mcp] section."""

    model_config = {"frozen": True}

    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000
