"""FastMCP server setup.

Optional extra — guarded behind try/except ImportError.
Transport: stdio by default, SSE or streamable HTTP optional.
"""

from __future__ import annotations

from typing import Any

from linearctl.config.settings import LinearSettings

mcp_available = False
_FastMCP: Any = None

try:
    from mcp.server.fastmcp import FastMCP as _FastMCP  # type: ignore[no-redef,import-not-found]

    mcp_available = True
except ImportError:
    pass

__all__ = ["create_server", "mcp_available"]


def create_server(
    settings: LinearSettings | None = None,
    *,
    host: str | None = None,
    port: int | None = None,
) -> Any:
    """Create and configure the MCP server.

    Opens one :class:`LinearSession` from *settings* (or the environment and
    ``linearctl.toml``) and registers every tool on it.  The session opens
    its HTTP client on the first tool call, so a missing API key is reported
    per call as ``AUTH_REQUIRED`` rather than at startup.

    *host* and *port* override ``[mcp]`` settings for HTTP transports
    (sse, streamable-http). They are ignored when using stdio.

    Raises RuntimeError if the mcp extra is not installed.
    """
    if not mcp_available or _FastMCP is None:
        msg = "MCP extra not installed. Install with: pip install linearctl[mcp]"
        raise RuntimeError(msg)

    from linearctl.infrastructure.session import LinearSession
    from linearctl.mcp.tools import register_tools

    if settings is None:
        settings = LinearSettings.from_cli()
    session = LinearSession(settings)

    server = _FastMCP(
        "linearctl",
        host=host or settings.mcp.host,
        port=port or settings.mcp.port,
    )
    register_tools(server, session)
    return server
