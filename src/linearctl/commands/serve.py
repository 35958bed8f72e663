"""serve — start the MCP server (requires linearctl[mcp] extra)."""

from __future__ import annotations

import click

from linearctl.commands._base import LinCommand


@click.command(
    cls=LinCommand,
    examples="""\
  # Start the MCP server (stdio transport, default)
  linearctl serve

  # Streamable HTTP on custom host/port
  linearctl serve --transport streamable-http --host 0.0.0.0 --port 9000

  # SSE transport on the configured address
  linearctl serve --transport sse""",
)
@click.option(
    "--transport",
    default=None,
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    help="MCP transport protocol (default: [mcp] transport, else stdio).",
)
@click.option("--host", default=None, help="Bind address (HTTP transports only).")
@click.option("--port", default=None, type=int, help="Listen port (HTTP transports only).")
@click.pass_obj
def serve(app: object, transport: str | None, host: str | None, port: int | None) -> None:
    """Start the MCP server (requires linearctl[mcp] extra)."""
    from linearctl.mcp.server import create_server, mcp_available

    if not mcp_available:
        click.echo("MCP not installed. Install with: pip install linearctl[mcp]", err=True)
        raise SystemExit(1)

    from linearctl.commands._context import AppContext

    assert isinstance(app, AppContext)
    server = create_server(app.settings, host=host, port=port)
    server.run(transport=transport or app.settings.mcp.transport)
