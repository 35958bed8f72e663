"""MCP adapter — exposes the services as ``linear_*`` tools."""
